# app/endpoints/feedback.py
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.interaction_recorder import interaction_recorder
from app.utils.auth import get_current_user
from app.utils.db import get_db
from app.utils.errors import ForbiddenError, NotFoundError
from app.utils.logger import logger

router = APIRouter()

class Feedback(BaseModel):
    helpful: bool | None = None
    rating: float | None = None
    comment: str | None = None

@router.post("/feedback/{interaction_id}")
async def submit_feedback(
    interaction_id: str,
    feedback: Feedback,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Attaches (or replaces) the caller's feedback on one of their interactions."""
    logger.info(f"Received feedback from user {user.id} for interaction {interaction_id}: {feedback.model_dump()}")
    try:
        await interaction_recorder.attach_feedback(
            db,
            interaction_id=interaction_id,
            user_id=user.id,
            helpful=feedback.helpful,
            rating=feedback.rating,
            comment=feedback.comment,
        )
    except (NotFoundError, ForbiddenError):
        raise
    except Exception as e:
        logger.exception(f"Save feedback error for interaction {interaction_id}: {e}")
        raise HTTPException(status_code=500, detail="Server error")

    return {"message": "Feedback saved successfully"}
