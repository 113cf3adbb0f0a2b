"""Trip service client: answers whether a media item exists and who owns it.

Every call is conservative: transport errors, timeouts, non-2xx answers and
malformed bodies collapse to "does not exist" / "no owner". The service layer
therefore never distinguishes "media is gone" from "could not ask".
"""

import logging

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from tripshared.models.user import DEFAULT_TENANT

logger = logging.getLogger(__name__)

_MEDIA_PATH = "/rest/v1/media/{media_id}"


class MediaSummary(BaseModel):
    """The subset of the trip service's media record this service needs."""

    model_config = ConfigDict(extra="ignore")

    media_id: int | None = None
    uploader: str | None = None

    @property
    def owner(self) -> str | None:
        if self.uploader is None or not self.uploader.strip():
            return None
        return self.uploader


class TripServiceClient:
    def __init__(self, base_url: str, http: httpx.AsyncClient) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http

    def _media_url(self, media_id: int) -> str:
        return f"{self._base_url}{_MEDIA_PATH.format(media_id=media_id)}"

    @staticmethod
    def _headers(credential: str | None, tenant_id: str | None) -> dict[str, str]:
        headers = {"X-Tenant-Id": tenant_id or DEFAULT_TENANT}
        if credential:
            headers["Authorization"] = credential
        return headers

    async def get_media(
        self, media_id: int, credential: str | None, tenant_id: str | None = None
    ) -> MediaSummary | None:
        """Fetch the media record once; None when it does not exist or cannot be read."""
        try:
            response = await self._http.get(
                self._media_url(media_id),
                headers=self._headers(credential, tenant_id),
            )
        except httpx.HTTPError as exc:
            logger.warning("Trip service unreachable for media %s: %s", media_id, exc)
            return None

        if not response.is_success:
            if response.status_code != 404:
                logger.warning(
                    "Trip service answered %s for media %s", response.status_code, media_id
                )
            return None

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            # The media exists; the body just tells us nothing about it.
            return MediaSummary(media_id=media_id)
        try:
            return MediaSummary.model_validate({"media_id": media_id, **payload})
        except ValidationError:
            logger.warning("Trip service returned an unexpected body for media %s", media_id)
            return MediaSummary(media_id=media_id)

    async def media_exists(
        self, media_id: int, credential: str | None, tenant_id: str | None = None
    ) -> bool:
        return await self.get_media(media_id, credential, tenant_id) is not None

    async def media_owner(
        self, media_id: int, credential: str | None, tenant_id: str | None = None
    ) -> str | None:
        """Return the uploader's external id, or None if it cannot be resolved."""
        media = await self.get_media(media_id, credential, tenant_id)
        return media.owner if media is not None else None
