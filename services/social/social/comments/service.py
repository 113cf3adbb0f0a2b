"""Comment threads on trip media, gated by media existence and moderation.

Every mutating call follows the same order: the media/moderation checks gate
the write, the write is flushed, and only then are the notification and audit
events queued on the session outbox. Events leave the process after commit.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from social.clients.moderation import ModerationClient
from social.clients.trip import MediaSummary, TripServiceClient
from social.comments.schemas import (
    CommentPage,
    CommentResponse,
    CreateCommentRequest,
    UpdateCommentRequest,
)
from social.events import outbox
from social.events.publishers import build_comment_audit, build_comment_notification
from social.exceptions import (
    CommentNotFoundError,
    ContentRejectedError,
    MediaNotFoundError,
    UnauthorizedCommentAccessError,
)
from social.models.comment import Comment
from tripshared.events.schemas import NotificationAction
from tripshared.models.pagination import PageRequest, SortOrder
from tripshared.models.user import (
    CurrentUser,
    current_auth_credential,
    current_user_external_id,
    current_user_id,
)

logger = logging.getLogger(__name__)

COMMENT_CREATED = "COMMENT_CREATED"
COMMENT_UPDATED = "COMMENT_UPDATED"
COMMENT_DELETED = "COMMENT_DELETED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


async def _find_comment(comment_id: int, db: AsyncSession) -> Comment | None:
    result = await db.execute(select(Comment).where(Comment.comment_id == comment_id))
    return result.scalar_one_or_none()


async def count_replies(comment_id: int, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(Comment).where(Comment.parent_id == comment_id)
    )
    return result.scalar_one()


async def _reply_counts(comment_ids: list[int], db: AsyncSession) -> dict[int, int]:
    """Live reply counts for a batch of comments in one query."""
    if not comment_ids:
        return {}
    result = await db.execute(
        select(Comment.parent_id, func.count())
        .where(Comment.parent_id.in_(comment_ids))
        .group_by(Comment.parent_id)
    )
    return {parent_id: count for parent_id, count in result.all()}


def _to_view(comment: Comment, reply_count: int) -> CommentResponse:
    view = CommentResponse.model_validate(comment)
    return view.model_copy(update={"reply_count": reply_count})


async def _require_media(media_id: int, user: CurrentUser, trip: TripServiceClient) -> MediaSummary:
    media = await trip.get_media(media_id, current_auth_credential(user), user.tenant_id)
    if media is None:
        raise MediaNotFoundError(media_id)
    return media


async def _require_allowed(content: str, moderation: ModerationClient) -> None:
    if not await moderation.is_text_allowed(content):
        raise ContentRejectedError()


async def _paginate(base, page: PageRequest, db: AsyncSession) -> CommentPage:
    total_result = await db.execute(select(func.count()).select_from(base.subquery()))
    total = total_result.scalar_one()

    if page.order == SortOrder.DESC:
        ordering = (Comment.created_at.desc(), Comment.comment_id.desc())
    else:
        ordering = (Comment.created_at.asc(), Comment.comment_id.asc())
    result = await db.execute(
        base.order_by(*ordering).offset(page.offset()).limit(page.limit())
    )
    comments = list(result.scalars().all())

    counts = await _reply_counts([c.comment_id for c in comments], db)
    items = [_to_view(c, counts.get(c.comment_id, 0)) for c in comments]
    return CommentPage.build(items, total, page)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


async def get_comment(comment_id: int, db: AsyncSession) -> CommentResponse:
    comment = await _find_comment(comment_id, db)
    if comment is None:
        raise CommentNotFoundError(comment_id)
    return _to_view(comment, await count_replies(comment_id, db))


async def list_comments_for_media(
    media_id: int,
    page: PageRequest,
    user: CurrentUser,
    db: AsyncSession,
    trip: TripServiceClient,
) -> CommentPage:
    """Root comments of a media item, each with its live reply count."""
    await _require_media(media_id, user, trip)
    base = select(Comment).where(Comment.media_id == media_id, Comment.parent_id.is_(None))
    return await _paginate(base, page, db)


async def list_replies(parent_id: int, page: PageRequest, db: AsyncSession) -> CommentPage:
    """Direct replies of a comment. Deeper replies are listed against their own parent."""
    if await _find_comment(parent_id, db) is None:
        raise CommentNotFoundError(parent_id, parent=True)
    base = select(Comment).where(Comment.parent_id == parent_id)
    return await _paginate(base, page, db)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


async def create_comment(
    media_id: int,
    payload: CreateCommentRequest,
    user: CurrentUser,
    db: AsyncSession,
    trip: TripServiceClient,
    moderation: ModerationClient,
) -> CommentResponse:
    """Create a root comment or a reply on a media item.

    The reply's media id is the one from the request path; it is not checked
    against the parent's media id.
    """
    media = await _require_media(media_id, user, trip)
    await _require_allowed(payload.content, moderation)

    parent: Comment | None = None
    if payload.parent_id is not None:
        parent = await _find_comment(payload.parent_id, db)
        if parent is None:
            raise CommentNotFoundError(payload.parent_id, parent=True)

    now = _utcnow()
    comment = Comment(
        content=payload.content,
        author_id=current_user_id(user),
        author_external_id=current_user_external_id(user),
        media_id=media_id,
        parent_id=parent.comment_id if parent is not None else None,
        created_at=now,
        updated_at=now,
    )
    db.add(comment)
    await db.flush()
    await db.refresh(comment)

    _queue_notification(comment, parent, media, user, db)
    outbox.enqueue(
        db,
        build_comment_audit(
            current_user_external_id(user), COMMENT_CREATED, comment.comment_id, media_id
        ),
        user.tenant_id,
    )
    logger.info(
        "Comment %s created on media %s by user %s", comment.comment_id, media_id, comment.author_id
    )
    return _to_view(comment, 0)


def _queue_notification(
    comment: Comment,
    parent: Comment | None,
    media: MediaSummary,
    user: CurrentUser,
    db: AsyncSession,
) -> None:
    """Replies notify the parent's author; root comments notify the media owner."""
    if parent is not None:
        receiver, action = parent.author_external_id, NotificationAction.REPLY
    else:
        receiver, action = media.owner, NotificationAction.ADD
    if receiver is None:
        logger.info("No owner resolved for media %s, skipping notification", comment.media_id)
        return
    outbox.enqueue(
        db,
        build_comment_notification(comment, comment.author_external_id, receiver, action),
        user.tenant_id,
    )


async def _get_owned_comment(
    comment_id: int, user: CurrentUser, action: str, db: AsyncSession
) -> Comment:
    comment = await _find_comment(comment_id, db)
    if comment is None:
        raise CommentNotFoundError(comment_id)
    if comment.author_id != current_user_id(user):
        raise UnauthorizedCommentAccessError(action)
    return comment


async def update_comment(
    comment_id: int,
    payload: UpdateCommentRequest,
    user: CurrentUser,
    db: AsyncSession,
    moderation: ModerationClient,
) -> CommentResponse:
    comment = await _get_owned_comment(comment_id, user, "update", db)
    await _require_allowed(payload.content, moderation)

    comment.content = payload.content
    comment.updated_at = _utcnow()
    await db.flush()
    await db.refresh(comment)

    outbox.enqueue(
        db,
        build_comment_audit(
            current_user_external_id(user), COMMENT_UPDATED, comment_id, comment.media_id
        ),
        user.tenant_id,
    )
    logger.info("Comment %s updated by user %s", comment_id, comment.author_id)
    return _to_view(comment, await count_replies(comment_id, db))


async def delete_comment(comment_id: int, user: CurrentUser, db: AsyncSession) -> None:
    """Delete one comment. Its replies stay behind, still referencing it."""
    comment = await _get_owned_comment(comment_id, user, "delete", db)
    media_id = comment.media_id

    await db.delete(comment)
    await db.flush()

    outbox.enqueue(
        db,
        build_comment_audit(
            current_user_external_id(user), COMMENT_DELETED, comment_id, media_id
        ),
        user.tenant_id,
    )
    logger.info("Comment %s deleted by user %s", comment_id, current_user_id(user))
