"""Comments domain Pydantic V2 schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tripshared.models.pagination import Page


class CreateCommentRequest(BaseModel):
    """Request body for creating a comment or reply."""

    content: str = Field(..., min_length=1, max_length=2000, description="Comment text.")
    parent_id: int | None = Field(
        default=None,
        description="ID of the comment being replied to; null for a root comment.",
    )


class UpdateCommentRequest(BaseModel):
    """Request body for editing a comment."""

    content: str = Field(..., min_length=1, max_length=2000, description="New comment text.")


class CommentResponse(BaseModel):
    """Comment view, annotated with its live reply count."""

    model_config = ConfigDict(from_attributes=True)

    comment_id: int
    content: str
    author_id: int = Field(description="Numeric id of the author.")
    author_external_id: str = Field(description="External identity of the author.")
    media_id: int
    parent_id: int | None = Field(
        default=None, description="Set for replies; null for root comments."
    )
    created_at: datetime
    updated_at: datetime
    reply_count: int = Field(default=0, description="Number of direct replies.")


CommentPage = Page[CommentResponse]
