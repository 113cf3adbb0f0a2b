"""Like lifecycle: one like per user and media item, counts, and like events."""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from social.clients.trip import TripServiceClient
from social.events import outbox
from social.events.publishers import build_like_audit, build_like_notification
from social.exceptions import DuplicateLikeError, LikeNotFoundError
from social.likes.schemas import LikeCountResponse, LikeResponse
from social.models.like import Like
from tripshared.models.user import (
    CurrentUser,
    current_auth_credential,
    current_user_external_id,
    current_user_id,
)

logger = logging.getLogger(__name__)

LIKE_CREATED = "LIKE_CREATED"
LIKE_DELETED = "LIKE_DELETED"


async def _find_like(user_id: int, media_id: int, db: AsyncSession) -> Like | None:
    result = await db.execute(
        select(Like).where(Like.user_id == user_id, Like.media_id == media_id)
    )
    return result.scalar_one_or_none()


async def like_media(
    media_id: int,
    user: CurrentUser,
    db: AsyncSession,
    trip: TripServiceClient,
) -> LikeResponse:
    """Like a media item once. A second like from the same user is a conflict.

    The pre-check keeps the common case cheap; the unique constraint on
    (user_id, media_id) settles concurrent duplicates.
    """
    user_id = current_user_id(user)
    external_id = current_user_external_id(user)
    if await _find_like(user_id, media_id, db) is not None:
        raise DuplicateLikeError(media_id)

    # Resolved before the insert so the new row is not held across the remote call.
    owner = await trip.media_owner(media_id, current_auth_credential(user), user.tenant_id)

    like = Like(user_id=user_id, media_id=media_id, created_at=datetime.now(timezone.utc))
    db.add(like)
    try:
        await db.flush()
    except IntegrityError:
        outbox.discard(db)
        await db.rollback()
        logger.info("Concurrent duplicate like by user %s on media %s", user_id, media_id)
        raise DuplicateLikeError(media_id)
    await db.refresh(like)

    if owner is not None:
        outbox.enqueue(db, build_like_notification(like, external_id, owner), user.tenant_id)
    else:
        logger.info("No owner resolved for media %s, skipping like notification", media_id)

    outbox.enqueue(
        db,
        build_like_audit(external_id, LIKE_CREATED, like.like_id, media_id),
        user.tenant_id,
    )
    logger.info("User %s liked media %s", user_id, media_id)
    return LikeResponse.model_validate(like)


async def unlike_media(media_id: int, user: CurrentUser, db: AsyncSession) -> None:
    user_id = current_user_id(user)
    like = await _find_like(user_id, media_id, db)
    if like is None:
        raise LikeNotFoundError(user_id, media_id)

    like_id = like.like_id
    await db.delete(like)
    await db.flush()

    # No notification on unlike.
    outbox.enqueue(
        db,
        build_like_audit(current_user_external_id(user), LIKE_DELETED, like_id, media_id),
        user.tenant_id,
    )
    logger.info("User %s unliked media %s", user_id, media_id)


async def count_likes(media_id: int, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(Like).where(Like.media_id == media_id)
    )
    return result.scalar_one()


async def has_user_liked(media_id: int, user_id: int, db: AsyncSession) -> bool:
    return await _find_like(user_id, media_id, db) is not None


async def get_like_count(
    media_id: int, viewer_id: int | None, db: AsyncSession
) -> LikeCountResponse:
    is_liked = False
    if viewer_id is not None:
        is_liked = await has_user_liked(media_id, viewer_id, db)
    return LikeCountResponse(
        media_id=media_id,
        like_count=await count_likes(media_id, db),
        is_liked=is_liked,
    )
