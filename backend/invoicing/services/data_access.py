"""Failure policy shared by every data access operation."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

LOGGER = logging.getLogger(__name__)


class DataAccessError(RuntimeError):
    """Raised when a dashboard query cannot be completed.

    The message is safe to show to callers; store details are only logged.
    """


@asynccontextmanager
async def guard_store_errors(message: str) -> AsyncIterator[None]:
    """Log any fault raised inside the block and replace it with ``DataAccessError``."""

    try:
        yield
    except DataAccessError:
        raise
    except Exception:
        LOGGER.exception("Database error: %s", message)
        raise DataAccessError(message) from None
