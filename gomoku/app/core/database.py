from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine
from sqlalchemy.orm import sessionmaker, declarative_base
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./gomoku.db")

def get_database_url():
    """Helper to retrieve DB URL in scripts context"""
    return DATABASE_URL

def make_engine(url: str) -> AsyncEngine:
    # SQLite uses a single-file pool, sizing only applies to server databases
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=False)
    return create_async_engine(
        url,
        echo=False,
        pool_size=5,
        max_overflow=10
    )

def make_session_maker(bind: AsyncEngine):
    return sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False
    )

engine = make_engine(DATABASE_URL)
AsyncSessionLocal = make_session_maker(engine)

Base = declarative_base()

async def init_models(bind: AsyncEngine = engine):
    """Create missing tables. Models must be imported so they register on Base."""
    from gomoku.app.models import board_model, statistics_model  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

# Dependency for API routes
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
