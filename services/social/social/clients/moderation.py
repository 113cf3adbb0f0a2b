import logging

import httpx

logger = logging.getLogger(__name__)


class ModerationClient:
    """Asks the moderation service whether a piece of text may be published.

    Fails closed: if the service cannot give a clear answer the text is
    treated as not allowed.
    """

    def __init__(self, base_url: str, http: httpx.AsyncClient) -> None:
        self._url = f"{base_url.rstrip('/')}/api/v1/moderation/text"
        self._http = http

    async def is_text_allowed(self, text: str) -> bool:
        try:
            response = await self._http.post(self._url, json={"text": text})
        except httpx.HTTPError as exc:
            logger.warning("Moderation service unreachable: %s", exc)
            return False
        if not response.is_success:
            logger.warning("Moderation service answered %s", response.status_code)
            return False
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Moderation service returned a malformed body")
            return False
        allowed = payload.get("allowed") if isinstance(payload, dict) else None
        return allowed is True
