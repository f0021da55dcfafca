"""Expose the invoicing dashboard FastAPI app."""

import logging
import os
import re
from contextlib import asynccontextmanager
from typing import Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .database import engine_scope
from .routers import customers_router, dashboard_router, invoices_router

LOGGER = logging.getLogger(__name__)

ALLOWED_ORIGINS_ENV = "DASHBOARD_ALLOWED_ORIGINS"
DEFAULT_ALLOWED_ORIGINS = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
}


def _normalize_origin(origin: str) -> str | None:
    stripped = origin.strip()
    if not stripped:
        return None
    return stripped.rstrip("/")


def _read_allowed_origins(raw_origins: Iterable[str]) -> list[str]:
    normalized = {_normalize_origin(origin) for origin in raw_origins}
    return sorted({origin for origin in normalized if origin})


def _split_raw_origins(raw_value: str) -> list[str]:
    """Split a raw origin string using commas or whitespace as separators."""

    return [origin for origin in re.split(r"[\s,]+", raw_value) if origin]


def _resolve_allowed_origins() -> list[str]:
    raw_value = os.getenv(ALLOWED_ORIGINS_ENV)
    if raw_value:
        origins = _read_allowed_origins(_split_raw_origins(raw_value))
        if origins:
            return origins
    return _read_allowed_origins(DEFAULT_ALLOWED_ORIGINS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine_scope() as engine:
        LOGGER.info("Database engine ready for %s", engine.url.render_as_string())
        app.state.engine = engine
        yield
    LOGGER.info("Database engine disposed")


app = FastAPI(title="Invoicing Dashboard API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_resolve_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
app.include_router(invoices_router, prefix="/invoices", tags=["invoices"])
app.include_router(customers_router, prefix="/customers", tags=["customers"])


@app.get("/", tags=["health"])
def read_root() -> dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}
