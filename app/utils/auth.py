# app/utils/auth.py
from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.state_manager import get_user
from app.utils.db import get_db
from app.utils.logger import logger


async def get_current_user(
    x_user_id: str | None = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolves the caller identity forwarded by the authentication gateway
    (`X-User-Id` header) to an existing user.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    user = await get_user(db, x_user_id)
    if not user:
        logger.warning(f"Rejected request from unknown user id '{x_user_id}'")
        raise HTTPException(status_code=401, detail="Authentication required")
    return user
