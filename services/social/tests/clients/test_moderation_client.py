import json

import httpx
import pytest

from social.clients.moderation import ModerationClient


def _client(handler) -> ModerationClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ModerationClient("http://moderation.local", http)


@pytest.mark.asyncio
async def test_allowed_text() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/moderation/text"
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"allowed": True})

    assert await _client(handler).is_text_allowed("nice trip") is True
    assert seen == [{"text": "nice trip"}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"allowed": False}),
        httpx.Response(200, json={"allowed": "yes"}),
        httpx.Response(200, json={}),
        httpx.Response(200, json=[True]),
        httpx.Response(200, text="not json"),
        httpx.Response(503),
    ],
)
async def test_anything_but_a_clear_yes_is_rejected(response: httpx.Response) -> None:
    assert await _client(lambda request: response).is_text_allowed("hmm") is False


@pytest.mark.asyncio
async def test_unreachable_service_fails_closed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    assert await _client(handler).is_text_allowed("hello") is False
