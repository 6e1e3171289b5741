# app/state_manager.py
from typing import Dict, Iterable, Optional
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.user import User, Problem
from app.utils.logger import logger


async def get_user(session: AsyncSession, user_id: str) -> Optional[User]:
    """Fetches a user by id, or None if no such user exists."""
    if not user_id:
        return None
    result = await session.execute(select(User).filter_by(id=user_id))
    return result.scalars().first()

async def get_problem(session: AsyncSession, problem_id: str | None) -> Optional[Problem]:
    """Fetches a problem by id. A missing or empty id simply yields None."""
    if not problem_id:
        return None
    result = await session.execute(select(Problem).filter_by(id=str(problem_id)))
    problem = result.scalars().first()
    if problem is None:
        logger.debug(f"Problem '{problem_id}' not found.")
    return problem

async def get_problems_by_ids(session: AsyncSession, problem_ids: Iterable[str]) -> Dict[str, Problem]:
    """Bulk lookup used by the history join. Unknown ids are absent from the result."""
    ids = {str(pid) for pid in problem_ids if pid}
    if not ids:
        return {}
    result = await session.execute(select(Problem).where(Problem.id.in_(ids)))
    return {problem.id: problem for problem in result.scalars().all()}
