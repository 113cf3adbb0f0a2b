from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from social.events import outbox
from tripshared.database import Base, get_async_session_factory

# Import all models so SQLAlchemy's Base.metadata is populated.
import social.models  # noqa: F401

_session_factory: async_sessionmaker[AsyncSession] | None = None
_PUBLISHER_KEY = "social.publisher"


def init_db(database_url: str) -> None:
    global _session_factory
    _session_factory = get_async_session_factory(database_url, expire_on_commit=False)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        raise RuntimeError("Database not initialized")
    return _session_factory


async def create_tables() -> None:
    """Create missing tables. Development convenience only."""
    engine = get_session_factory().kw["bind"]
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """One session per request. Nothing is committed here.

    Mutating controllers call ``commit`` themselves so a failed commit is
    reported before the response is built. Whatever they leave uncommitted
    is rolled back on close, and its queued events are dropped.
    """
    factory = get_session_factory()
    async with factory() as session:
        session.info[_PUBLISHER_KEY] = getattr(request.app.state, "event_publisher", None)
        try:
            yield session
        except Exception:
            outbox.discard(session)
            await session.rollback()
            raise
        outbox.discard(session)


async def commit(db: AsyncSession) -> None:
    """Commit the request's writes, then hand their events to the publisher."""
    await db.commit()
    outbox.release(db, db.info.get(_PUBLISHER_KEY))
