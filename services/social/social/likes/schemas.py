"""Likes domain Pydantic V2 schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LikeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    like_id: int
    user_id: int
    media_id: int
    created_at: datetime


class LikeCountResponse(BaseModel):
    """Like total for a media item, plus whether the caller is among the likers."""

    media_id: int
    like_count: int = Field(ge=0)
    is_liked: bool = Field(
        default=False,
        description="False for anonymous callers.",
    )


class LikeCheckResponse(BaseModel):
    media_id: int
    is_liked: bool
