from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tuesday.core.config import get_settings

settings = get_settings()

engine = create_async_engine(
    settings.db_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session (FastAPI dependency)."""
    async with async_session_factory() as session:
        yield session


async def init_db() -> None:
    """Ensure the database directory and all tables exist."""
    if settings.database_url is None:
        settings.db_directory.mkdir(parents=True, exist_ok=True)

    from tuesday.models.base import Base
    from tuesday.models.board import Board  # noqa: F401
    from tuesday.models.board_column import BoardColumn  # noqa: F401
    from tuesday.models.task import Task  # noqa: F401
    from tuesday.models.team import Team  # noqa: F401
    from tuesday.models.team_membership import TeamMembership  # noqa: F401
    from tuesday.models.user import User  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
