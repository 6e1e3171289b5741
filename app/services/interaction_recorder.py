# app/services/interaction_recorder.py
import math
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.user import AIInteraction
from app.models.enums import InteractionType
from app.services.completion_client import CompletionResult
from app.state_manager import get_problems_by_ids
from app.utils.errors import ForbiddenError, NotFoundError, PersistenceError
from app.utils.logger import logger


def serialize_interaction(interaction: AIInteraction, problems: dict) -> dict:
    """Renders an interaction for the history listing, inlining its problem."""
    context = dict(interaction.context or {})
    if "problem" in context:
        problem = problems.get(str(context["problem"])) if context["problem"] else None
        context["problem"] = (
            {"id": problem.id, "title": problem.title, "difficulty": problem.difficulty}
            if problem else None
        )
    return {
        "id": interaction.id,
        "user": interaction.user_id,
        "type": interaction.type,
        "context": context,
        "query": interaction.query,
        "response": interaction.response,
        "tokens_used": interaction.tokens_used,
        "response_time": interaction.response_time,
        "feedback": interaction.feedback,
        "createdAt": interaction.created_at.isoformat() if interaction.created_at else None,
    }


class InteractionRecorder:
    async def record(
        self,
        session: AsyncSession,
        user_id: str,
        interaction_type: InteractionType,
        context: dict,
        query: str,
        result: CompletionResult,
    ) -> AIInteraction:
        """
        Persists one request/response pair. `user_id` must be the authenticated
        caller; tokens default to 0 when the service reported no usage.
        """
        type_value = InteractionType(interaction_type).value
        interaction = AIInteraction(
            user_id=user_id,
            type=type_value,
            context=context,
            query=query,
            response=result.content,
            tokens_used=result.total_tokens or 0,
            response_time=result.response_time_ms,
        )
        session.add(interaction)
        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to save {type_value} interaction for user {user_id}: {e}")
            raise PersistenceError() from e
        await session.refresh(interaction)
        logger.info(f"Recorded {interaction.type} interaction {interaction.id} for user {user_id} ({interaction.tokens_used} tokens, {interaction.response_time}ms)")
        return interaction

    async def attach_feedback(
        self,
        session: AsyncSession,
        interaction_id: str,
        user_id: str,
        helpful: bool | None,
        rating: float | None,
        comment: str | None,
    ) -> AIInteraction:
        """Overwrites the feedback of an interaction owned by `user_id`."""
        result = await session.execute(select(AIInteraction).filter_by(id=interaction_id))
        interaction = result.scalars().first()
        if not interaction:
            raise NotFoundError("Interaction not found")
        if interaction.user_id != user_id:
            logger.warning(f"User {user_id} tried to leave feedback on interaction {interaction_id} owned by {interaction.user_id}")
            raise ForbiddenError("Not authorized")

        interaction.feedback = {"helpful": helpful, "rating": rating, "comment": comment}
        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise PersistenceError() from e
        logger.info(f"Saved feedback for interaction {interaction_id}: {interaction.feedback}")
        return interaction

    async def list_history(
        self,
        session: AsyncSession,
        user_id: str,
        page: int = 1,
        limit: int = 20,
        interaction_type: InteractionType | None = None,
    ) -> dict:
        """Newest-first page of a user's interactions with totals."""
        filters = [AIInteraction.user_id == user_id]
        if interaction_type:
            filters.append(AIInteraction.type == InteractionType(interaction_type).value)

        total = (await session.execute(
            select(func.count()).select_from(AIInteraction).where(*filters)
        )).scalar_one()

        result = await session.execute(
            select(AIInteraction)
            .where(*filters)
            .order_by(AIInteraction.created_at.desc(), AIInteraction.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        interactions = result.scalars().all()

        problem_ids = [(i.context or {}).get("problem") for i in interactions]
        problems = await get_problems_by_ids(session, problem_ids)

        return {
            "interactions": [serialize_interaction(i, problems) for i in interactions],
            "totalPages": math.ceil(total / limit),
            "currentPage": page,
            "total": total,
        }

interaction_recorder = InteractionRecorder()
