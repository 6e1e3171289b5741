# app/utils/db.py
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from app.utils.config import settings
from app.models.user import Base

engine_kwargs = {"echo": settings.database_echo}
if settings.database_url.startswith("sqlite"):
    # SQLite connections are opened per checkout
    engine_kwargs["poolclass"] = NullPool

# Create an async engine
engine = create_async_engine(settings.database_url, **engine_kwargs)

# Create a session factory
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

async def init_models():
    """Creates all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def get_db() -> AsyncSession:
    """
    Dependency to get a database session.
    Ensures the session is closed after the request.
    """
    async with AsyncSessionLocal() as session:
        yield session
