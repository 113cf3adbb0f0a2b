from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotificationAction(str, Enum):
    ADD = "ADD"
    REPLY = "REPLY"
    LIKE = "LIKE"


class ActivityType(str, Enum):
    SOCIAL_ACTIVITY = "SOCIAL_ACTIVITY"


class EntityType(str, Enum):
    COMMENT = "COMMENT"
    LIKE = "LIKE"


class NotificationEvent(BaseModel):
    """Notification stream record: a user acted on something another user owns."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    event_type: Literal["notification"] = "notification"
    timestamp: datetime = Field(default_factory=_utcnow)
    sender_id: str
    receiver_ids: list[str]
    comment_reference_id: int | None = None
    media_reference_id: int | None = None
    action: NotificationAction


class AuditEvent(BaseModel):
    """Audit stream record: one mutation performed by one user."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    event_type: Literal["audit"] = "audit"
    timestamp: datetime = Field(default_factory=_utcnow)
    user_id: str
    activity_type: ActivityType = ActivityType.SOCIAL_ACTIVITY
    action: str
    entity_type: EntityType
    entity_id: int | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


SocialEvent = NotificationEvent | AuditEvent
