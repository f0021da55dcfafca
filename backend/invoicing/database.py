"""Database configuration and engine lifecycle for the dashboard data layer."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict

from fastapi import Request
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

_DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "invoicing.db"
_DEFAULT_DATABASE_URL = f"sqlite+aiosqlite:///{_DEFAULT_DB_PATH.as_posix()}"
DATABASE_URL_ENVS = ("POSTGRES_URL", "DATABASE_URL")
REQUIRE_POSTGRES_ENV = "REQUIRE_POSTGRES"
SSL_MODE_ENV = "DATABASE_SSL_MODE"
POOL_SIZE_ENV = "DATABASE_POOL_SIZE"
POOL_MAX_OVERFLOW_ENV = "DATABASE_MAX_OVERFLOW"
POOL_TIMEOUT_ENV = "DATABASE_POOL_TIMEOUT"
POOL_RECYCLE_ENV = "DATABASE_POOL_RECYCLE"

DEFAULT_SSL_MODE = "require"
DEFAULT_POOL_SIZE = 5
DEFAULT_MAX_OVERFLOW = 10
DEFAULT_POOL_TIMEOUT = 30
DEFAULT_POOL_RECYCLE = 1800

LIBPQ_ONLY_QUERY_KEYS = ("channel_binding", "gssencmode", "sslcompression")

_ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "postgresql+psycopg2": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}

Base = declarative_base()


def _ensure_directory(path: str | os.PathLike[str]) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _read_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return value


def _read_bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _read_database_url_env() -> str | None:
    for name in DATABASE_URL_ENVS:
        raw = os.getenv(name)
        if raw:
            return raw
    return None


def _to_async_url(url: URL) -> URL:
    driver = _ASYNC_DRIVERS.get(url.drivername)
    if driver is None:
        return url
    url = url.set(drivername=driver)
    if driver == "postgresql+asyncpg":
        url = _to_asyncpg_query(url)
    return url


def _to_asyncpg_query(url: URL) -> URL:
    """Rename ``sslmode`` to asyncpg's ``ssl`` and drop libpq-only options."""

    sslmode = url.query.get("sslmode")
    url = url.difference_update_query([*LIBPQ_ONLY_QUERY_KEYS, "sslmode"])
    if sslmode and "ssl" not in url.query:
        url = url.update_query_dict({"ssl": _query_value(sslmode)})
    return url


def _query_value(value: str | tuple[str, ...]) -> str:
    return value[-1] if isinstance(value, tuple) else value


def resolve_database_url(raw_url: str | None) -> str:
    """Return an async SQLAlchemy URL for ``raw_url`` or the local fallback."""

    if not raw_url:
        if _read_bool_env(REQUIRE_POSTGRES_ENV, False):
            raise RuntimeError(
                "POSTGRES_URL must be configured when REQUIRE_POSTGRES=1"
            )
        _ensure_directory(_DEFAULT_DB_PATH)
        return _DEFAULT_DATABASE_URL

    url = _to_async_url(make_url(raw_url))
    if url.drivername.startswith("sqlite") and url.database not in (None, "", ":memory:"):
        _ensure_directory(url.database)
    if _read_bool_env(REQUIRE_POSTGRES_ENV, False) and url.drivername.startswith("sqlite"):
        raise RuntimeError(
            "SQLite is not permitted when REQUIRE_POSTGRES=1; configure POSTGRES_URL"
        )
    return url.render_as_string(hide_password=False)


def engine_options(database_url: str) -> Dict[str, Any]:
    """Build keyword arguments for :func:`create_async_engine`."""

    if database_url.startswith("sqlite"):
        return {"poolclass": NullPool}
    url_ssl = make_url(database_url).query.get("ssl")
    ssl_mode = _query_value(url_ssl) if url_ssl else os.getenv(SSL_MODE_ENV, DEFAULT_SSL_MODE)
    return {
        "pool_pre_ping": True,
        "pool_size": _read_int_env(POOL_SIZE_ENV, DEFAULT_POOL_SIZE),
        "max_overflow": _read_int_env(POOL_MAX_OVERFLOW_ENV, DEFAULT_MAX_OVERFLOW),
        "pool_timeout": _read_int_env(POOL_TIMEOUT_ENV, DEFAULT_POOL_TIMEOUT),
        "pool_recycle": _read_int_env(POOL_RECYCLE_ENV, DEFAULT_POOL_RECYCLE),
        "connect_args": {"ssl": ssl_mode},
    }


def build_engine(raw_url: str | None = None) -> AsyncEngine:
    """Create the engine shared by every data access operation.

    When ``raw_url`` is omitted the connection string is read from
    ``POSTGRES_URL`` (or ``DATABASE_URL``).
    """

    database_url = resolve_database_url(raw_url or _read_database_url_env())
    return create_async_engine(database_url, **engine_options(database_url))


@asynccontextmanager
async def engine_scope(raw_url: str | None = None) -> AsyncIterator[AsyncEngine]:
    """Create an engine for the lifetime of the block and dispose it afterwards."""

    engine = build_engine(raw_url)
    try:
        yield engine
    finally:
        await engine.dispose()


def get_engine(request: Request) -> AsyncEngine:
    """Return the engine acquired by the application lifespan."""

    return request.app.state.engine
