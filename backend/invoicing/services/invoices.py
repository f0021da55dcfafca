"""Read operations backing the invoices views of the dashboard."""

from __future__ import annotations

from math import ceil
from typing import List, Optional

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine

from .. import models, schemas
from ..db_types import GUID
from ..formatting import cents_to_units, format_currency
from .data_access import guard_store_errors

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


def _invoice_search_filter(query: str):
    """Case-insensitive substring match across the searchable invoice columns."""

    # autoescape makes % and _ in the search text literal characters rather
    # than ILIKE wildcards, so "%" matches only invoices containing a percent sign.
    return or_(
        models.Customer.name.icontains(query, autoescape=True),
        models.Customer.email.icontains(query, autoescape=True),
        cast(models.Invoice.amount, String).icontains(query, autoescape=True),
        cast(models.Invoice.date, String).icontains(query, autoescape=True),
        cast(models.Invoice.status, String).icontains(query, autoescape=True),
    )


def _page_offset(page: int) -> int:
    return (max(page, 1) - 1) * ITEMS_PER_PAGE


class InvoiceService:
    """Queries over invoices joined with their customers."""

    @staticmethod
    async def fetch_latest_invoices(engine: AsyncEngine) -> List[schemas.LatestInvoice]:
        statement = (
            select(
                models.Invoice.amount,
                models.Customer.name,
                models.Customer.image_url,
                models.Customer.email,
                models.Invoice.id,
            )
            .select_from(models.Invoice)
            .join(models.Customer, models.Invoice.customer_id == models.Customer.id)
            .order_by(models.Invoice.date.desc(), models.Invoice.id)
            .limit(LATEST_INVOICES_LIMIT)
        )
        async with guard_store_errors("Failed to fetch the latest invoices."):
            async with engine.connect() as conn:
                rows = (await conn.execute(statement)).all()

        return [
            schemas.LatestInvoice(
                id=row.id,
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                amount=format_currency(row.amount),
            )
            for row in rows
        ]

    @staticmethod
    async def fetch_filtered_invoices(
        engine: AsyncEngine, query: str, page: int
    ) -> List[schemas.InvoicesTableRow]:
        """Return one page of invoices matching ``query``, newest first.

        Pages are 1-indexed; values below 1 are treated as the first page.
        Amounts are left in cents.
        """

        statement = (
            select(
                models.Invoice.id,
                models.Invoice.customer_id,
                models.Invoice.amount,
                models.Invoice.date,
                models.Invoice.status,
                models.Customer.name,
                models.Customer.email,
                models.Customer.image_url,
            )
            .select_from(models.Invoice)
            .join(models.Customer, models.Invoice.customer_id == models.Customer.id)
            .where(_invoice_search_filter(query))
            .order_by(models.Invoice.date.desc(), models.Invoice.id)
            .limit(ITEMS_PER_PAGE)
            .offset(_page_offset(page))
        )
        async with guard_store_errors("Failed to fetch invoices."):
            async with engine.connect() as conn:
                rows = (await conn.execute(statement)).all()

        return [schemas.InvoicesTableRow.model_validate(row) for row in rows]

    @staticmethod
    async def fetch_invoices_pages(engine: AsyncEngine, query: str) -> int:
        statement = (
            select(func.count())
            .select_from(models.Invoice)
            .join(models.Customer, models.Invoice.customer_id == models.Customer.id)
            .where(_invoice_search_filter(query))
        )
        async with guard_store_errors("Failed to fetch total number of invoices."):
            async with engine.connect() as conn:
                total = (await conn.execute(statement)).scalar_one()

        return ceil(int(total or 0) / ITEMS_PER_PAGE)

    @staticmethod
    async def fetch_invoice_by_id(
        engine: AsyncEngine, invoice_id: str
    ) -> Optional[schemas.InvoiceForm]:
        """Return the invoice prepared for editing, or ``None`` when it does not exist."""

        normalized_id = GUID.parse(invoice_id)
        if normalized_id is None:
            return None

        statement = select(
            models.Invoice.id,
            models.Invoice.customer_id,
            models.Invoice.amount,
            models.Invoice.status,
        ).where(models.Invoice.id == normalized_id)
        async with guard_store_errors("Failed to fetch invoice."):
            async with engine.connect() as conn:
                row = (await conn.execute(statement)).first()

        if row is None:
            return None
        return schemas.InvoiceForm(
            id=row.id,
            customer_id=row.customer_id,
            amount=cents_to_units(row.amount),
            status=row.status,
        )
