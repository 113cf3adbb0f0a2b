import uuid
from collections.abc import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import Response

from tripshared.logging import bind_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_INCOMING_LENGTH = 128


def _incoming_request_id(request: Request) -> str | None:
    value = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if not value or len(value) > _MAX_INCOMING_LENGTH:
        return None
    return value


async def request_id_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind a request id for the duration of one request.

    The id is taken from the caller when it sends a sane one, otherwise
    generated. It is unbound again even when the downstream app raises.
    """
    request_id = _incoming_request_id(request) or uuid.uuid4().hex
    request.state.request_id = request_id
    token = bind_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        reset_request_id(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
