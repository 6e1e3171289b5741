# Endpoints for AI coding assistance: code review, roadmap, hint and debug help
# app/endpoints/mentor.py
from typing import List, Union
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.completion_client import CompletionClient, get_completion_client
from app.services.mentor_service import MentorService
from app.utils.auth import get_current_user
from app.utils.db import get_db
from app.utils.errors import NotFoundError, UnconfiguredServiceError
from app.utils.logger import logger

router = APIRouter()

# --- Pydantic Models ---
class CodeReviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    code: str
    language: str
    problem_id: str = Field(..., alias="problemId")

class CodeReviewResponse(BaseModel):
    review: str
    suggestions: List[str]
    complexity: dict

class RoadmapRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    goals: List[str] = Field(default_factory=list)
    current_level: str = Field(..., alias="currentLevel")
    time_commitment: Union[int, float, str] = Field(..., alias="timeCommitment")
    preferred_topics: List[str] = Field(default_factory=list, alias="preferredTopics")

class RoadmapResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    roadmap: str
    phases: List[str]
    estimated_duration: str = Field(..., alias="estimatedDuration")

class HintRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    problem_id: str = Field(..., alias="problemId")
    current_code: str | None = Field(None, alias="currentCode")
    language: str | None = None

class HintResponse(BaseModel):
    hint: str
    approach: List[str]

class DebugRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    code: str
    language: str
    error: str
    problem_id: str | None = Field(None, alias="problemId")

class DebugResponse(BaseModel):
    explanation: str
    fixes: List[str]


def get_mentor_service(client: CompletionClient = Depends(get_completion_client)) -> MentorService:
    return MentorService(client)


@router.post("/code-review", response_model=CodeReviewResponse)
async def code_review(
    request: CodeReviewRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    mentor: MentorService = Depends(get_mentor_service),
):
    # A failed commit rolls back the session and expires `user`
    user_id = user.id
    logger.info(f"Code review requested by user '{user_id}' for problem {request.problem_id}")
    try:
        return await mentor.code_review(db, user_id, request.code, request.language, request.problem_id)
    except (UnconfiguredServiceError, NotFoundError):
        raise
    except Exception as e:
        logger.exception(f"Code review error for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to analyze code")


@router.post("/roadmap", response_model=RoadmapResponse)
async def roadmap(
    request: RoadmapRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    mentor: MentorService = Depends(get_mentor_service),
):
    user_id = user.id
    logger.info(f"Roadmap requested by user '{user_id}' at level '{request.current_level}'")
    try:
        return await mentor.roadmap(
            db, user_id,
            goals=request.goals,
            current_level=request.current_level,
            time_commitment=request.time_commitment,
            preferred_topics=request.preferred_topics,
        )
    except UnconfiguredServiceError:
        raise
    except Exception as e:
        logger.exception(f"Roadmap generation error for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate roadmap")


@router.post("/hint", response_model=HintResponse)
async def hint(
    request: HintRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    mentor: MentorService = Depends(get_mentor_service),
):
    user_id = user.id
    logger.info(f"Hint requested by user '{user_id}' for problem {request.problem_id}")
    try:
        return await mentor.hint(db, user_id, request.problem_id, request.current_code, request.language)
    except (UnconfiguredServiceError, NotFoundError):
        raise
    except Exception as e:
        logger.exception(f"Hint generation error for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate hint")


@router.post("/debug", response_model=DebugResponse)
async def debug(
    request: DebugRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    mentor: MentorService = Depends(get_mentor_service),
):
    user_id = user.id
    logger.info(f"Debug help requested by user '{user_id}'")
    try:
        return await mentor.debug(db, user_id, request.code, request.language, request.error, request.problem_id)
    except UnconfiguredServiceError:
        raise
    except Exception as e:
        logger.exception(f"Debug help error for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to provide debug help")
