# app/endpoints/history.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import InteractionType
from app.models.user import User
from app.services.interaction_recorder import interaction_recorder
from app.utils.auth import get_current_user
from app.utils.config import settings
from app.utils.db import get_db
from app.utils.logger import logger

router = APIRouter()

@router.get("/history", response_model=dict)
async def get_history(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.history_page_size, ge=1),
    interaction_type: InteractionType | None = Query(None, alias="type"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Returns the caller's interactions, newest first, one page at a time."""
    logger.debug(f"Fetching history for user {user.id}: page={page}, limit={limit}, type={interaction_type}")
    try:
        return await interaction_recorder.list_history(
            db, user.id, page=page, limit=limit, interaction_type=interaction_type
        )
    except Exception as e:
        logger.exception(f"Get AI history error for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Server error")
