import hashlib

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TENANT = "public"

# Ids are kept inside the signed BIGINT range of the stores.
_ID_MASK = (1 << 63) - 1


def stable_user_id(external_id: str) -> int:
    """Derive the numeric user id from the durable external identity.

    Deterministic across processes and restarts (unlike ``hash()``), so the
    same identity always owns the same rows.
    """
    digest = hashlib.sha256(external_id.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") & _ID_MASK


class CurrentUser(BaseModel):
    """Identity of the caller, built once per request at the HTTP boundary."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int = Field(ge=0, description="Stable numeric id used for ownership checks.")
    external_id: str = Field(min_length=1, description="Durable external identity (token uid).")
    email: str | None = None
    token: str | None = Field(default=None, description="Raw bearer credential for outbound calls.")
    tenant_id: str = DEFAULT_TENANT

    @property
    def authorization_header(self) -> str | None:
        return f"Bearer {self.token}" if self.token else None

    @classmethod
    def from_external_id(
        cls,
        external_id: str,
        *,
        email: str | None = None,
        token: str | None = None,
        tenant_id: str = DEFAULT_TENANT,
    ) -> "CurrentUser":
        return cls(
            id=stable_user_id(external_id),
            external_id=external_id,
            email=email,
            token=token,
            tenant_id=tenant_id,
        )


class NotAuthenticatedError(Exception):
    """No authenticated caller is bound to the current request."""

    def __init__(self) -> None:
        super().__init__("No authenticated user bound to this request")


def current_user_id(user: CurrentUser | None) -> int:
    if user is None:
        raise NotAuthenticatedError()
    return user.id


def current_user_external_id(user: CurrentUser | None) -> str:
    if user is None:
        raise NotAuthenticatedError()
    return user.external_id


def current_auth_credential(user: CurrentUser | None) -> str | None:
    """The ``Authorization`` header value to forward to other services."""
    if user is None:
        raise NotAuthenticatedError()
    return user.authorization_header
