import os
import ssl
from pathlib import Path
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

_POOL_DEFAULTS: dict[str, Any] = {
    "pool_pre_ping": True,
    "pool_size": 5,
    "max_overflow": 10,
    "pool_recycle": 3600,
}


def _ssl_connect_args() -> dict[str, Any]:
    """asyncpg ``connect_args`` derived from DATABASE_SSL / DATABASE_SSL_CERT."""
    mode = os.environ.get("DATABASE_SSL", "").strip().lower()
    if mode in ("", "0", "false", "disable"):
        return {}

    cert_path = os.environ.get("DATABASE_SSL_CERT", "")
    if cert_path and Path(cert_path).is_file():
        return {"ssl": ssl.create_default_context(cafile=cert_path)}
    # Encrypted, server certificate not verified.
    return {"ssl": "require"}


def get_async_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    """Create the engine for a store URL.

    PostgreSQL URLs get the pooled defaults and optional SSL. Other backends
    (SQLite in development) are created with SQLAlchemy's own defaults, since
    queue-pool sizing does not apply to them.
    """
    if make_url(database_url).get_backend_name() != "postgresql":
        return create_async_engine(database_url, **kwargs)

    options: dict[str, Any] = dict(_POOL_DEFAULTS)
    connect_args = _ssl_connect_args()
    if connect_args:
        options["connect_args"] = connect_args
    options.update(kwargs)
    return create_async_engine(database_url, **options)


def get_async_session_factory(
    database_url: str,
    *,
    expire_on_commit: bool = False,
    **engine_kwargs: Any,
) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        get_async_engine(database_url, **engine_kwargs),
        class_=AsyncSession,
        expire_on_commit=expire_on_commit,
        autoflush=False,
    )

