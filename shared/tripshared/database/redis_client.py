from typing import Any

import redis.asyncio as redis

# Stream publishers hold one connection for the whole process lifetime.
_STREAM_DEFAULTS: dict[str, Any] = {
    "decode_responses": True,
    "health_check_interval": 30,
    "socket_connect_timeout": 2.0,
}


def get_redis_client(redis_url: str, **kwargs: Any) -> redis.Redis:
    """Build an async client for ``redis_url``; keyword arguments override the defaults."""
    return redis.from_url(redis_url, **{**_STREAM_DEFAULTS, **kwargs})
