import asyncio
import logging
from datetime import datetime, timezone

from redis.asyncio import Redis

from social.config import Settings
from social.models.comment import Comment
from social.models.like import Like
from tripshared.events.schemas import (
    AuditEvent,
    EntityType,
    NotificationAction,
    NotificationEvent,
    SocialEvent,
)
from tripshared.models.user import DEFAULT_TENANT

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Event builders
# ---------------------------------------------------------------------------


def build_comment_notification(
    comment: Comment,
    sender_id: str,
    receiver_id: str,
    action: NotificationAction,
) -> NotificationEvent:
    return NotificationEvent(
        timestamp=datetime.now(timezone.utc),
        sender_id=sender_id,
        receiver_ids=[receiver_id],
        comment_reference_id=comment.comment_id,
        media_reference_id=comment.media_id,
        action=action,
    )


def build_like_notification(like: Like, sender_id: str, receiver_id: str) -> NotificationEvent:
    return NotificationEvent(
        timestamp=datetime.now(timezone.utc),
        sender_id=sender_id,
        receiver_ids=[receiver_id],
        media_reference_id=like.media_id,
        action=NotificationAction.LIKE,
    )


def build_comment_audit(
    user_id: str, action: str, comment_id: int | None, media_id: int
) -> AuditEvent:
    return AuditEvent(
        timestamp=datetime.now(timezone.utc),
        user_id=user_id,
        action=action,
        entity_type=EntityType.COMMENT,
        entity_id=comment_id,
        metadata={
            "commentId": comment_id if comment_id is not None else "",
            "mediaId": media_id,
            "entityType": EntityType.COMMENT.value,
        },
    )


def build_like_audit(user_id: str, action: str, like_id: int | None, media_id: int) -> AuditEvent:
    return AuditEvent(
        timestamp=datetime.now(timezone.utc),
        user_id=user_id,
        action=action,
        entity_type=EntityType.LIKE,
        entity_id=like_id,
        metadata={
            "likeId": like_id if like_id is not None else "",
            "mediaId": media_id,
            "entityType": EntityType.LIKE.value,
        },
    )


# ---------------------------------------------------------------------------
# Publisher (Redis streams)
# ---------------------------------------------------------------------------


class EventPublisher:
    """Fire-and-forget publisher of notification and audit records.

    ``dispatch`` never blocks the caller and never raises; delivery failures
    are logged and dropped.
    """

    def __init__(self, redis: Redis | None, settings: Settings) -> None:
        self._redis = redis
        self._enabled = settings.events_enabled and redis is not None
        self._streams = {
            "notification": settings.notification_stream,
            "audit": settings.audit_stream,
        }
        self._maxlen = settings.event_stream_maxlen
        self._tasks: set[asyncio.Task] = set()

    def dispatch(self, event: SocialEvent, tenant_id: str = DEFAULT_TENANT) -> None:
        if not self._enabled:
            logger.debug("Event sink disabled, dropping %s event", event.event_type)
            return
        task = asyncio.create_task(self._publish(event, tenant_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _publish(self, event: SocialEvent, tenant_id: str) -> None:
        stream = self._streams[event.event_type]
        try:
            await self._redis.xadd(
                stream,
                {"payload": event.model_dump_json(), "tenant_id": tenant_id},
                maxlen=self._maxlen,
                approximate=True,
            )
        except Exception:  # noqa: BLE001
            logger.warning(
                "Failed to publish %s event to %s", event.event_type, stream, exc_info=True
            )

    async def aclose(self) -> None:
        """Wait for in-flight publishes; used on shutdown."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
