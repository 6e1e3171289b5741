# Orchestrates one assistance request: lookup -> prompt -> completion -> extraction -> persistence
# app/services/mentor_service.py
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import InteractionType
from app.services import extractors
from app.services import prompt_library
from app.services.completion_client import CompletionClient
from app.services.interaction_recorder import interaction_recorder
from app.state_manager import get_problem, get_user
from app.utils.errors import NotFoundError
from app.utils.logger import logger


class MentorService:
    def __init__(self, client: CompletionClient):
        self.client = client

    async def _require_problem(self, session: AsyncSession, problem_id: str):
        problem = await get_problem(session, problem_id)
        if not problem:
            raise NotFoundError("Problem not found")
        return problem

    async def code_review(self, session: AsyncSession, user_id: str, code: str, language: str, problem_id: str) -> dict:
        self.client.ensure_configured()
        problem = await self._require_problem(session, problem_id)

        prompt = prompt_library.build_code_review_prompt(problem, code, language)
        logger.debug(f"--- CODE REVIEW PROMPT ---\n{prompt}\n--------------------------")
        result = await self.client.complete(prompt)

        await interaction_recorder.record(
            session,
            user_id=user_id,
            interaction_type=InteractionType.CODE_REVIEW,
            context={"problem": problem_id, "code": code, "language": language},
            query="Code review request",
            result=result,
        )
        return {
            "review": result.content,
            "suggestions": extractors.extract_suggestions(result.content),
            "complexity": extractors.extract_complexity(result.content),
        }

    async def roadmap(
        self,
        session: AsyncSession,
        user_id: str,
        goals: List[str],
        current_level: str,
        time_commitment,
        preferred_topics: List[str],
    ) -> dict:
        self.client.ensure_configured()
        user = await get_user(session, user_id)

        prompt = prompt_library.build_roadmap_prompt(user, goals, current_level, time_commitment, preferred_topics)
        logger.debug(f"--- ROADMAP PROMPT ---\n{prompt}\n----------------------")
        result = await self.client.complete(prompt)

        await interaction_recorder.record(
            session,
            user_id=user_id,
            interaction_type=InteractionType.ROADMAP,
            context={
                "userLevel": current_level,
                "goals": list(goals or []),
                "timeCommitment": time_commitment,
                "preferredTopics": list(preferred_topics or []),
            },
            query="Personalized roadmap request",
            result=result,
        )
        return {
            "roadmap": result.content,
            "phases": extractors.extract_roadmap_phases(result.content),
            "estimatedDuration": extractors.extract_duration(result.content),
        }

    async def hint(self, session: AsyncSession, user_id: str, problem_id: str, current_code: str | None = None, language: str | None = None) -> dict:
        self.client.ensure_configured()
        problem = await self._require_problem(session, problem_id)

        prompt = prompt_library.build_hint_prompt(problem, current_code, language)
        logger.debug(f"--- HINT PROMPT ---\n{prompt}\n-------------------")
        result = await self.client.complete(prompt)

        await interaction_recorder.record(
            session,
            user_id=user_id,
            interaction_type=InteractionType.HINT,
            context={"problem": problem_id, "code": current_code, "language": language},
            query="Hint request",
            result=result,
        )
        return {
            "hint": result.content,
            "approach": extractors.extract_approach(result.content),
        }

    async def debug(self, session: AsyncSession, user_id: str, code: str, language: str, error: str, problem_id: str | None = None) -> dict:
        self.client.ensure_configured()
        # The problem section is optional for debugging
        problem = await get_problem(session, problem_id)

        prompt = prompt_library.build_debug_prompt(code, language, error, problem)
        logger.debug(f"--- DEBUG PROMPT ---\n{prompt}\n--------------------")
        result = await self.client.complete(prompt)

        await interaction_recorder.record(
            session,
            user_id=user_id,
            interaction_type=InteractionType.DEBUG_HELP,
            context={"problem": problem_id, "code": code, "language": language, "error": error},
            query="Debug help request",
            result=result,
        )
        return {
            "explanation": result.content,
            "fixes": extractors.extract_fixes(result.content),
        }
