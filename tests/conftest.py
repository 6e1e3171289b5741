# tests/conftest.py
import asyncio
import logging
import os
import sys
import tempfile
from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage
from sqlalchemy import func, select

# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# --- Point the app at a throwaway SQLite file before anything imports settings ---
TEST_DB_DIR = tempfile.mkdtemp(prefix="coding_mentor_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(TEST_DB_DIR, 'test.db')}"

from app.main import app
from app.models.user import Base, User, Problem, AIInteraction
from app.services.completion_client import CompletionClient, CompletionConfig, get_completion_client
from app.utils.db import engine, AsyncSessionLocal

ALICE = "alice"
BOB = "bob"
PROBLEM_ID = "two-sum"
PROBLEM_DESCRIPTION = "<p>Given an array of <b>integers</b>, return indices of the two numbers that add up to a target.</p>"

MOCK_REPLY = """Overall the code is readable.
Time complexity: O(n^2), Space complexity: O(1)
Suggestion: use a hash map to improve lookups.
Consider handling empty input.
Fix the off-by-one error in the inner loop.
"""


def auth(user_id: str) -> dict:
    """Headers the authentication gateway forwards for an authenticated caller."""
    return {"X-User-Id": user_id}


def run(coro):
    return asyncio.run(coro)


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def _add(*objects):
    async with AsyncSessionLocal() as session:
        session.add_all(objects)
        await session.commit()


async def _fetch_interactions(user_id: str | None = None):
    async with AsyncSessionLocal() as session:
        query = select(AIInteraction).order_by(AIInteraction.created_at)
        if user_id:
            query = query.filter_by(user_id=user_id)
        result = await session.execute(query)
        return result.scalars().all()


async def _count_interactions() -> int:
    async with AsyncSessionLocal() as session:
        return (await session.execute(select(func.count()).select_from(AIInteraction))).scalar_one()


class Store:
    """Synchronous helpers for seeding and inspecting the test database."""

    def add_user(self, user_id: str, total_solved: int = 0, rating: int = 1200):
        run(_add(User(id=user_id, username=user_id, total_solved=total_solved, rating=rating)))

    def add_problem(self, problem_id: str, title: str, description: str = "", difficulty: str = "Easy"):
        run(_add(Problem(id=problem_id, title=title, description=description, difficulty=difficulty)))

    def add_interactions(self, user_id: str, count: int, interaction_type: str = "hint", problem_id: str | None = None, start: datetime | None = None):
        """Adds `count` interactions created one minute apart, oldest first."""
        start = start or datetime(2024, 1, 1, 12, 0, 0)
        run(_add(*[
            AIInteraction(
                id=f"{user_id}-{interaction_type}-{i}",
                user_id=user_id,
                type=interaction_type,
                context={"problem": problem_id} if problem_id else {},
                query="Hint request",
                response=f"response {i}",
                tokens_used=10,
                response_time=100,
                created_at=start + timedelta(minutes=i),
            )
            for i in range(count)
        ]))

    def interactions(self, user_id: str | None = None):
        return run(_fetch_interactions(user_id))

    def count_interactions(self) -> int:
        return run(_count_interactions())


# --- TestClient Fixture ---
@pytest.fixture(scope="session")
def client():
    logger.info(f"Creating TestClient instance for the session (database in {TEST_DB_DIR}).")
    with TestClient(app) as c:
        yield c


# --- State Reset Fixture ---
@pytest.fixture(autouse=True)
def store() -> Store:
    """Fresh schema per test with two users and one problem."""
    run(_reset_schema())
    store = Store()
    store.add_user(ALICE, total_solved=42, rating=1530)
    store.add_user(BOB)
    store.add_problem(PROBLEM_ID, "Two Sum", PROBLEM_DESCRIPTION, "Easy")
    return store


# --- Completion Service Mocking ---
@pytest.fixture
def mock_llm() -> AsyncMock:
    llm = AsyncMock()
    llm.ainvoke.return_value = AIMessage(
        content=MOCK_REPLY,
        usage_metadata={"input_tokens": 120, "output_tokens": 80, "total_tokens": 200},
    )
    return llm


@pytest.fixture
def completion_client(mock_llm) -> CompletionClient:
    client = CompletionClient(CompletionConfig(api_key="sk-test"))
    client._llm = mock_llm
    return client


@pytest.fixture(autouse=True)
def override_completion_client(request):
    """Routes every request through a mocked LLM unless the test is an llm_integration one."""
    if "llm_integration" in request.keywords:
        yield
        return
    mocked = request.getfixturevalue("completion_client")
    app.dependency_overrides[get_completion_client] = lambda: mocked
    yield
    app.dependency_overrides.pop(get_completion_client, None)


@pytest.fixture
def unconfigured_client():
    unconfigured = CompletionClient(CompletionConfig(api_key=None))
    unconfigured._llm = AsyncMock()
    app.dependency_overrides[get_completion_client] = lambda: unconfigured
    yield unconfigured
