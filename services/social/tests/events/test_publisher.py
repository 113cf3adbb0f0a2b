import asyncio
import json

import pytest

from social.config import Settings
from social.events.publishers import EventPublisher, build_comment_audit, build_like_notification
from social.models.like import Like


class FakeRedis:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.entries: list[tuple[str, dict, int, bool]] = []

    async def xadd(self, stream, fields, maxlen=None, approximate=True):
        if self.fail:
            raise ConnectionError("redis down")
        self.entries.append((stream, fields, maxlen, approximate))
        return "1-0"


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


@pytest.mark.asyncio
async def test_events_are_routed_to_their_streams() -> None:
    redis = FakeRedis()
    publisher = EventPublisher(redis, _settings(event_stream_maxlen=500))

    publisher.dispatch(build_comment_audit("a1", "COMMENT_CREATED", 5, 100), "acme")
    like = Like(like_id=3, user_id=1, media_id=100)
    publisher.dispatch(build_like_notification(like, "a1", "owner1"))
    await publisher.aclose()

    streams = {stream: fields for stream, fields, _, _ in redis.entries}
    assert set(streams) == {"social:audit", "social:notifications"}
    audit = json.loads(streams["social:audit"]["payload"])
    assert audit["action"] == "COMMENT_CREATED"
    assert audit["metadata"]["commentId"] == 5
    assert streams["social:audit"]["tenant_id"] == "acme"
    assert streams["social:notifications"]["tenant_id"] == "public"
    assert all(maxlen == 500 for _, _, maxlen, _ in redis.entries)


@pytest.mark.asyncio
async def test_dispatch_failure_is_swallowed() -> None:
    publisher = EventPublisher(FakeRedis(fail=True), _settings())

    publisher.dispatch(build_comment_audit("a1", "COMMENT_DELETED", 5, 100))
    await publisher.aclose()


@pytest.mark.asyncio
async def test_dispatch_does_not_wait_for_delivery() -> None:
    redis = FakeRedis()
    publisher = EventPublisher(redis, _settings())

    publisher.dispatch(build_comment_audit("a1", "COMMENT_CREATED", 5, 100))
    assert redis.entries == []

    await asyncio.sleep(0)
    await publisher.aclose()
    assert len(redis.entries) == 1


@pytest.mark.asyncio
async def test_disabled_publisher_drops_events() -> None:
    redis = FakeRedis()
    publisher = EventPublisher(redis, _settings(events_enabled=False))
    publisher.dispatch(build_comment_audit("a1", "COMMENT_CREATED", 5, 100))
    await publisher.aclose()
    assert redis.entries == []

    without_redis = EventPublisher(None, _settings())
    without_redis.dispatch(build_comment_audit("a1", "COMMENT_CREATED", 5, 100))
    await without_redis.aclose()
