"""Comment endpoints, scoped by media for creation and listing and by comment id otherwise."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from social.clients.moderation import ModerationClient
from social.clients.trip import TripServiceClient
from social.comments import controller
from social.comments.schemas import (
    CommentPage,
    CommentResponse,
    CreateCommentRequest,
    UpdateCommentRequest,
)
from social.database import get_db
from social.dependencies import get_moderation_client, get_page_request, get_trip_client
from tripshared.auth.dependencies import get_current_user_required
from tripshared.models.pagination import PageRequest
from tripshared.models.user import CurrentUser

router = APIRouter(tags=["Comments"])

_400 = {"description": "Moderation rejected the comment or the request could not be processed"}
_403 = {"description": "Caller is not the author of the comment"}
_404 = {"description": "Not found"}


@router.post(
    "/media/{media_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a media item",
    description=(
        "Create a root comment, or a reply when `parent_id` is set. "
        "Replies notify the parent's author; root comments notify the media owner."
    ),
    responses={400: _400, 404: _404},
)
async def create_comment(
    media_id: int,
    payload: CreateCommentRequest,
    user: CurrentUser = Depends(get_current_user_required),
    db: AsyncSession = Depends(get_db),
    trip: TripServiceClient = Depends(get_trip_client),
    moderation: ModerationClient = Depends(get_moderation_client),
) -> CommentResponse:
    return await controller.create_comment(media_id, payload, user, db, trip, moderation)


@router.get(
    "/media/{media_id}/comments",
    response_model=CommentPage,
    summary="List root comments of a media item",
    responses={404: _404},
)
async def list_comments(
    media_id: int,
    page: PageRequest = Depends(get_page_request),
    user: CurrentUser = Depends(get_current_user_required),
    db: AsyncSession = Depends(get_db),
    trip: TripServiceClient = Depends(get_trip_client),
) -> CommentPage:
    return await controller.list_comments(media_id, page, user, db, trip)


@router.get(
    "/comments/{comment_id}",
    response_model=CommentResponse,
    summary="Get a comment",
    responses={404: _404},
)
async def get_comment(
    comment_id: int,
    _: CurrentUser = Depends(get_current_user_required),
    db: AsyncSession = Depends(get_db),
) -> CommentResponse:
    return await controller.get_comment(comment_id, db)


@router.patch(
    "/comments/{comment_id}",
    response_model=CommentResponse,
    summary="Edit a comment",
    description="Author-only. The new text goes through moderation again.",
    responses={400: _400, 403: _403, 404: _404},
)
async def update_comment(
    comment_id: int,
    payload: UpdateCommentRequest,
    user: CurrentUser = Depends(get_current_user_required),
    db: AsyncSession = Depends(get_db),
    moderation: ModerationClient = Depends(get_moderation_client),
) -> CommentResponse:
    return await controller.update_comment(comment_id, payload, user, db, moderation)


@router.delete(
    "/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a comment",
    description="Author-only. Replies are not deleted with their parent.",
    responses={403: _403, 404: _404},
)
async def delete_comment(
    comment_id: int,
    user: CurrentUser = Depends(get_current_user_required),
    db: AsyncSession = Depends(get_db),
) -> None:
    await controller.delete_comment(comment_id, user, db)


@router.get(
    "/comments/{comment_id}/replies",
    response_model=CommentPage,
    summary="List direct replies of a comment",
    responses={404: _404},
)
async def list_replies(
    comment_id: int,
    page: PageRequest = Depends(get_page_request),
    _: CurrentUser = Depends(get_current_user_required),
    db: AsyncSession = Depends(get_db),
) -> CommentPage:
    return await controller.list_replies(comment_id, page, db)
