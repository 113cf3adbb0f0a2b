from social.clients.moderation import ModerationClient
from social.clients.trip import TripServiceClient

__all__ = ["ModerationClient", "TripServiceClient"]
