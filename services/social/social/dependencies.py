from functools import lru_cache

from fastapi import HTTPException, Query, Request, status

from social.clients.moderation import ModerationClient
from social.clients.trip import TripServiceClient
from social.config import Settings
from tripshared.models.pagination import PageRequest, SortOrder


@lru_cache
def get_settings() -> Settings:
    return Settings()


def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up.",
        )
    return value


async def get_trip_client(request: Request) -> TripServiceClient:
    return _from_state(request, "trip_client")


async def get_moderation_client(request: Request) -> ModerationClient:
    return _from_state(request, "moderation_client")


def get_page_request(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
    order: SortOrder = Query(default=SortOrder.ASC, description="asc = oldest first"),
) -> PageRequest:
    return PageRequest(page=page, page_size=page_size, order=order)
