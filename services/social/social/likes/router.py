"""Like endpoints under /media/{media_id}/likes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from social.clients.trip import TripServiceClient
from social.database import get_db
from social.dependencies import get_trip_client
from social.likes import controller
from social.likes.schemas import LikeCheckResponse, LikeCountResponse, LikeResponse
from tripshared.auth.dependencies import get_current_user_optional, get_current_user_required
from tripshared.models.user import CurrentUser

router = APIRouter(prefix="/media/{media_id}/likes", tags=["Likes"])


@router.post(
    "",
    response_model=LikeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Like a media item",
    description="Notifies the media owner when one can be resolved.",
    responses={409: {"description": "Caller already liked this media item"}},
)
async def like_media(
    media_id: int,
    user: CurrentUser = Depends(get_current_user_required),
    db: AsyncSession = Depends(get_db),
    trip: TripServiceClient = Depends(get_trip_client),
) -> LikeResponse:
    return await controller.like_media(media_id, user, db, trip)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove your like from a media item",
    responses={404: {"description": "Caller has not liked this media item"}},
)
async def unlike_media(
    media_id: int,
    user: CurrentUser = Depends(get_current_user_required),
    db: AsyncSession = Depends(get_db),
) -> None:
    await controller.unlike_media(media_id, user, db)


@router.get(
    "",
    response_model=LikeCountResponse,
    summary="Like count for a media item",
    description="Public. `is_liked` is computed only when a valid token is sent.",
)
async def get_like_count(
    media_id: int,
    user: CurrentUser | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
) -> LikeCountResponse:
    return await controller.get_like_count(media_id, user, db)


@router.get(
    "/check",
    response_model=LikeCheckResponse,
    summary="Has the caller liked this media item",
)
async def check_liked(
    media_id: int,
    user: CurrentUser = Depends(get_current_user_required),
    db: AsyncSession = Depends(get_db),
) -> LikeCheckResponse:
    return await controller.check_liked(media_id, user, db)
