"""HTTP-facing wrappers around the comment service: domain errors become status codes."""

from sqlalchemy.ext.asyncio import AsyncSession

from social.clients.moderation import ModerationClient
from social.clients.trip import TripServiceClient
from social.comments import service
from social.comments.schemas import (
    CommentPage,
    CommentResponse,
    CreateCommentRequest,
    UpdateCommentRequest,
)
from social.database import commit
from social.errors import domain_error, unexpected_error
from social.exceptions import SocialError
from tripshared.models.pagination import PageRequest
from tripshared.models.user import CurrentUser


async def create_comment(
    media_id: int,
    payload: CreateCommentRequest,
    user: CurrentUser,
    db: AsyncSession,
    trip: TripServiceClient,
    moderation: ModerationClient,
) -> CommentResponse:
    try:
        view = await service.create_comment(media_id, payload, user, db, trip, moderation)
        await commit(db)
        return view
    except SocialError as exc:
        raise domain_error(exc, "create comment")
    except Exception:
        raise unexpected_error(f"create a comment on media {media_id}")


async def update_comment(
    comment_id: int,
    payload: UpdateCommentRequest,
    user: CurrentUser,
    db: AsyncSession,
    moderation: ModerationClient,
) -> CommentResponse:
    try:
        view = await service.update_comment(comment_id, payload, user, db, moderation)
        await commit(db)
        return view
    except SocialError as exc:
        raise domain_error(exc, f"update comment {comment_id}")
    except Exception:
        raise unexpected_error(f"update comment {comment_id}")


async def delete_comment(comment_id: int, user: CurrentUser, db: AsyncSession) -> None:
    try:
        await service.delete_comment(comment_id, user, db)
        await commit(db)
    except SocialError as exc:
        raise domain_error(exc, f"delete comment {comment_id}")
    except Exception:
        raise unexpected_error(f"delete comment {comment_id}")


async def get_comment(comment_id: int, db: AsyncSession) -> CommentResponse:
    try:
        return await service.get_comment(comment_id, db)
    except SocialError as exc:
        raise domain_error(exc, "get comment")
    except Exception:
        raise unexpected_error(f"retrieve comment {comment_id}")


async def list_comments(
    media_id: int,
    page: PageRequest,
    user: CurrentUser,
    db: AsyncSession,
    trip: TripServiceClient,
) -> CommentPage:
    try:
        return await service.list_comments_for_media(media_id, page, user, db, trip)
    except SocialError as exc:
        raise domain_error(exc, "get comments")
    except Exception:
        raise unexpected_error(f"retrieve comments for media {media_id}")


async def list_replies(
    comment_id: int,
    page: PageRequest,
    db: AsyncSession,
) -> CommentPage:
    try:
        return await service.list_replies(comment_id, page, db)
    except SocialError as exc:
        raise domain_error(exc, "get replies")
    except Exception:
        raise unexpected_error(f"retrieve replies for comment {comment_id}")
