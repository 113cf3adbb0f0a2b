"""HTTP-facing wrappers around the like service: domain errors become status codes."""

from sqlalchemy.ext.asyncio import AsyncSession

from social.clients.trip import TripServiceClient
from social.database import commit
from social.errors import domain_error, unexpected_error
from social.exceptions import SocialError
from social.likes import service
from social.likes.schemas import LikeCheckResponse, LikeCountResponse, LikeResponse
from tripshared.models.user import CurrentUser


async def like_media(
    media_id: int, user: CurrentUser, db: AsyncSession, trip: TripServiceClient
) -> LikeResponse:
    try:
        view = await service.like_media(media_id, user, db, trip)
        await commit(db)
        return view
    except SocialError as exc:
        raise domain_error(exc, f"like media {media_id}")
    except Exception:
        raise unexpected_error(f"like media {media_id}")


async def unlike_media(media_id: int, user: CurrentUser, db: AsyncSession) -> None:
    try:
        await service.unlike_media(media_id, user, db)
        await commit(db)
    except SocialError as exc:
        raise domain_error(exc, f"unlike media {media_id}")
    except Exception:
        raise unexpected_error(f"unlike media {media_id}")


async def get_like_count(
    media_id: int, user: CurrentUser | None, db: AsyncSession
) -> LikeCountResponse:
    try:
        return await service.get_like_count(media_id, user.id if user else None, db)
    except Exception:
        raise unexpected_error(f"count likes for media {media_id}")


async def check_liked(media_id: int, user: CurrentUser, db: AsyncSession) -> LikeCheckResponse:
    try:
        liked = await service.has_user_liked(media_id, user.id, db)
    except Exception:
        raise unexpected_error(f"check like on media {media_id}")
    return LikeCheckResponse(media_id=media_id, is_liked=liked)
