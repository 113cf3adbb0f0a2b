from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# shared/tripshared/auth/config.py -> repository root
_REPO_ROOT = Path(__file__).resolve().parents[3]


class AuthSettings(BaseSettings):
    """Bearer token verification, read from ``JWT_*`` variables.

    Issuer and audience are only enforced when configured; audience checks
    additionally need ``JWT_VERIFY_AUDIENCE=true``.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        env_file=[str(_REPO_ROOT / ".env"), ".env"],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret: str = "change-me"
    algorithm: str = "HS256"
    issuer: str | None = None
    audience: str | None = None
    verify_audience: bool = False
