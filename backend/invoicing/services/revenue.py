"""Read access to the precomputed revenue series."""

from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine

from .. import models, schemas
from .data_access import guard_store_errors


class RevenueService:
    @staticmethod
    async def fetch_revenue(engine: AsyncEngine) -> List[schemas.Revenue]:
        """Return every revenue row in the order the store yields them."""

        statement = select(models.Revenue.month, models.Revenue.revenue)
        async with guard_store_errors("Failed to fetch revenue data."):
            async with engine.connect() as conn:
                rows = (await conn.execute(statement)).all()

        return [schemas.Revenue.model_validate(row) for row in rows]
