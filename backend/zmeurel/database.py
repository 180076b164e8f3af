"""Database engine, session factory, and declarative base.

Every farm table lives in one schema and is partitioned by a ``tenant_id``
column; there is no schema-per-tenant split.

Session dependency for FastAPI:
  - get_db()  → yields an AsyncSession, commits on success, rolls back on error,
                then runs the after-commit callbacks queued on the session
"""

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase

from zmeurel.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_size=10,
    max_overflow=5,
    pool_pre_ping=True,
)

async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


class TenantBase(DeclarativeBase):
    """Models whose rows belong to a single farm account (``tenant_id``)."""
    pass


# session.info key holding coroutine callbacks to await once the request commits
AFTER_COMMIT = "after_commit"


async def get_db() -> AsyncSession:
    """Yield a session for one request.

    Callbacks queued under ``session.info[AFTER_COMMIT]`` run only after a
    successful commit and are dropped on rollback.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            session.info.pop(AFTER_COMMIT, None)
            raise
        for callback in session.info.pop(AFTER_COMMIT, []):
            await callback()
