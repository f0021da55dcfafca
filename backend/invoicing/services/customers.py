"""Read operations backing the customers views of the dashboard."""

from __future__ import annotations

from typing import List

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine

from .. import models, schemas
from ..formatting import format_currency
from .data_access import guard_store_errors


def _sum_for_status(status: models.InvoiceStatus):
    return func.sum(
        case((models.Invoice.status == status, models.Invoice.amount), else_=0)
    )


class CustomerService:
    """Queries over customers and their invoice aggregates."""

    @staticmethod
    async def fetch_customers(engine: AsyncEngine) -> List[schemas.CustomerField]:
        statement = select(models.Customer.id, models.Customer.name).order_by(
            models.Customer.name.asc()
        )
        async with guard_store_errors("Failed to fetch all customers."):
            async with engine.connect() as conn:
                rows = (await conn.execute(statement)).all()

        return [schemas.CustomerField.model_validate(row) for row in rows]

    @staticmethod
    async def fetch_filtered_customers(
        engine: AsyncEngine, query: str
    ) -> List[schemas.CustomersTableRow]:
        """Customers whose name or email contains ``query``, with invoice totals.

        Customers without invoices are included with zero totals.
        """

        statement = (
            select(
                models.Customer.id,
                models.Customer.name,
                models.Customer.email,
                models.Customer.image_url,
                func.count(models.Invoice.id).label("total_invoices"),
                _sum_for_status(models.InvoiceStatus.PENDING).label("total_pending"),
                _sum_for_status(models.InvoiceStatus.PAID).label("total_paid"),
            )
            .outerjoin(models.Invoice, models.Customer.id == models.Invoice.customer_id)
            # % and _ in the search text are matched literally, not as ILIKE wildcards.
            .where(
                or_(
                    models.Customer.name.icontains(query, autoescape=True),
                    models.Customer.email.icontains(query, autoescape=True),
                )
            )
            .group_by(
                models.Customer.id,
                models.Customer.name,
                models.Customer.email,
                models.Customer.image_url,
            )
            .order_by(models.Customer.name.asc())
        )
        async with guard_store_errors("Failed to fetch customer table."):
            async with engine.connect() as conn:
                rows = (await conn.execute(statement)).all()

        return [
            schemas.CustomersTableRow(
                id=row.id,
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                total_invoices=int(row.total_invoices or 0),
                total_pending=format_currency(row.total_pending),
                total_paid=format_currency(row.total_paid),
            )
            for row in rows
        ]
