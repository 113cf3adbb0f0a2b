from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from tripshared.auth.config import AuthSettings
from tripshared.models.user import DEFAULT_TENANT, CurrentUser

http_bearer = HTTPBearer(auto_error=False)


def get_auth_settings() -> AuthSettings:
    return AuthSettings()


def _decode_token(token: str, settings: AuthSettings) -> dict:
    options = {"verify_aud": settings.verify_audience}
    kwargs = {}
    if settings.issuer:
        kwargs["issuer"] = settings.issuer
    if settings.verify_audience and settings.audience:
        kwargs["audience"] = settings.audience
    return jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        options=options,
        **kwargs,
    )


def _payload_to_user(payload: dict, token: str, tenant_id: str) -> CurrentUser:
    # Firebase-style tokens carry the uid in both `user_id` and `sub`.
    external_id = payload.get("user_id") or payload.get("sub")
    if not external_id or not isinstance(external_id, str):
        raise ValueError("Missing subject in token")
    return CurrentUser.from_external_id(
        external_id,
        email=payload.get("email"),
        token=token,
        tenant_id=tenant_id,
    )


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    x_tenant_id: str | None = Header(default=None),
    settings: AuthSettings = Depends(get_auth_settings),
) -> CurrentUser | None:
    if not credentials or not credentials.credentials:
        return None
    token = credentials.credentials
    try:
        payload = _decode_token(token, settings)
        return _payload_to_user(payload, token, x_tenant_id or DEFAULT_TENANT)
    except (JWTError, ValueError, KeyError):
        return None


async def get_current_user_required(
    user: CurrentUser | None = Depends(get_current_user_optional),
) -> CurrentUser:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
