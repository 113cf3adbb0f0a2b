from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

import social.models  # noqa: F401 - register with Base
from social.clients.trip import MediaSummary
from tripshared.database.postgres import Base, get_async_engine
from tripshared.models.user import CurrentUser

TEST_DATABASE_URL = "sqlite+aiosqlite://"


class FakeTripClient:
    """In-memory stand-in for the trip service: media id -> uploader."""

    def __init__(self, media: dict[int, str | None] | None = None) -> None:
        self.media = dict(media or {})
        self.calls: list[tuple[int, str | None, str | None]] = []

    async def get_media(
        self, media_id: int, credential: str | None, tenant_id: str | None = None
    ) -> MediaSummary | None:
        self.calls.append((media_id, credential, tenant_id))
        if media_id not in self.media:
            return None
        return MediaSummary(media_id=media_id, uploader=self.media[media_id])

    async def media_exists(
        self, media_id: int, credential: str | None, tenant_id: str | None = None
    ) -> bool:
        return await self.get_media(media_id, credential, tenant_id) is not None

    async def media_owner(
        self, media_id: int, credential: str | None, tenant_id: str | None = None
    ) -> str | None:
        media = await self.get_media(media_id, credential, tenant_id)
        return media.owner if media is not None else None


class FakeModerationClient:
    def __init__(self, allowed: bool = True) -> None:
        self.allowed = allowed
        self.texts: list[str] = []

    async def is_text_allowed(self, text: str) -> bool:
        self.texts.append(text)
        return self.allowed


class RecordingPublisher:
    def __init__(self) -> None:
        self.dispatched: list[tuple[object, str]] = []

    def dispatch(self, event, tenant_id: str = "public") -> None:
        self.dispatched.append((event, tenant_id))

    async def aclose(self) -> None:
        return None


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = get_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def trip() -> FakeTripClient:
    return FakeTripClient({1: "owner1", 100: "owner1", 200: None})


@pytest.fixture
def moderation() -> FakeModerationClient:
    return FakeModerationClient()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def alice() -> CurrentUser:
    return CurrentUser.from_external_id("a1", token="alice-token", tenant_id="acme")


@pytest.fixture
def bob() -> CurrentUser:
    return CurrentUser.from_external_id("b2", token="bob-token")
