"""Identifier column type shared by the customer and invoice tables."""

from __future__ import annotations

import uuid
from typing import Any, Optional

from sqlalchemy.dialects import postgresql
from sqlalchemy.types import CHAR, TypeDecorator


class GUID(TypeDecorator):
    """UUID primary and foreign keys for dashboard records.

    PostgreSQL keeps its native ``UUID`` column; other stores get the
    canonical 36-character lowercase text form, so an id supplied in upper
    case, braced or without hyphens still matches the stored row. Rows come
    back with string ids, which is how the dashboard schemas expose them.
    """

    impl = CHAR
    cache_ok = True

    @staticmethod
    def parse(value: Any) -> Optional[uuid.UUID]:
        """Return ``value`` as a :class:`uuid.UUID`, or ``None`` if it is not one."""

        if isinstance(value, uuid.UUID):
            return value
        try:
            return uuid.UUID(str(value).strip())
        except ValueError:
            return None

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return None
        parsed = self.parse(value)
        if parsed is None:
            raise ValueError(f"{value!r} is not a valid identifier")
        return parsed if dialect.name == "postgresql" else str(parsed)

    def process_result_value(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return None
        return str(value)
