import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from tripshared.auth.config import AuthSettings
from tripshared.auth.dependencies import get_current_user_optional, get_current_user_required
from tripshared.models.user import (
    CurrentUser,
    NotAuthenticatedError,
    current_auth_credential,
    current_user_external_id,
    current_user_id,
    stable_user_id,
)

SETTINGS = AuthSettings(secret="unit-secret", _env_file=None)


def _bearer(claims: dict, secret: str = "unit-secret") -> HTTPAuthorizationCredentials:
    token = jwt.encode(claims, secret, algorithm="HS256")
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_stable_user_id_is_deterministic_and_in_range() -> None:
    assert stable_user_id("a1") == stable_user_id("a1")
    assert stable_user_id("a1") != stable_user_id("a2")
    assert 0 <= stable_user_id("a1") < 2**63


def test_current_user_authorization_header() -> None:
    assert CurrentUser.from_external_id("a1", token="t").authorization_header == "Bearer t"
    assert CurrentUser.from_external_id("a1").authorization_header is None


@pytest.mark.asyncio
async def test_token_subject_becomes_current_user() -> None:
    creds = _bearer({"sub": "a1", "email": "a1@example.com"})
    user = await get_current_user_optional(creds, "acme", SETTINGS)

    assert user is not None
    assert user.external_id == "a1"
    assert user.id == stable_user_id("a1")
    assert user.email == "a1@example.com"
    assert user.tenant_id == "acme"
    assert user.token == creds.credentials


@pytest.mark.asyncio
async def test_user_id_claim_wins_over_sub() -> None:
    user = await get_current_user_optional(_bearer({"sub": "x", "user_id": "uid-1"}), None, SETTINGS)
    assert user is not None
    assert user.external_id == "uid-1"
    assert user.tenant_id == "public"


@pytest.mark.asyncio
async def test_bad_or_missing_tokens_are_anonymous() -> None:
    assert await get_current_user_optional(None, None, SETTINGS) is None
    assert await get_current_user_optional(_bearer({"sub": "a1"}, "other"), None, SETTINGS) is None
    assert await get_current_user_optional(_bearer({"email": "a@b.c"}), None, SETTINGS) is None


@pytest.mark.asyncio
async def test_required_user_raises_401() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user_required(None)
    assert exc_info.value.status_code == 401


def test_identity_accessors_fail_without_user() -> None:
    user = CurrentUser.from_external_id("a1", token="t")
    assert current_user_id(user) == user.id
    assert current_user_external_id(user) == "a1"
    assert current_auth_credential(user) == "Bearer t"
    for accessor in (current_user_id, current_user_external_id, current_auth_credential):
        with pytest.raises(NotAuthenticatedError):
            accessor(None)
