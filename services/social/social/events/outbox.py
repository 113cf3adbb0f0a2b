"""Per-transaction event outbox.

Services enqueue events on the session while they work. ``database.commit``
releases them to the publisher once the transaction has committed; ``get_db``
discards whatever is left, so no event describes a write that never happened.
"""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from tripshared.events.schemas import SocialEvent
from tripshared.models.user import DEFAULT_TENANT

if TYPE_CHECKING:
    from social.events.publishers import EventPublisher

_OUTBOX_KEY = "social.outbox"


def enqueue(db: AsyncSession, event: SocialEvent, tenant_id: str = DEFAULT_TENANT) -> None:
    db.info.setdefault(_OUTBOX_KEY, []).append((event, tenant_id))


def pending(db: AsyncSession) -> list[SocialEvent]:
    return [event for event, _ in db.info.get(_OUTBOX_KEY, [])]


def discard(db: AsyncSession) -> None:
    db.info.pop(_OUTBOX_KEY, None)


def release(db: AsyncSession, publisher: "EventPublisher | None") -> int:
    """Hand every pending event to the publisher. Returns how many were released."""
    entries = db.info.pop(_OUTBOX_KEY, [])
    if publisher is None:
        return 0
    for event, tenant_id in entries:
        publisher.dispatch(event, tenant_id)
    return len(entries)
