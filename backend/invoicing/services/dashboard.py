"""Aggregated figures used by the dashboard summary cards."""

from __future__ import annotations

import asyncio

from sqlalchemy import Row, case, func, select
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Select

from .. import models, schemas
from ..formatting import format_currency
from .data_access import guard_store_errors


class DashboardService:
    """Combines independent count and sum queries into the card figures."""

    @staticmethod
    def _invoice_count_statement() -> Select:
        return select(func.count(models.Invoice.id).label("total"))

    @staticmethod
    def _customer_count_statement() -> Select:
        return select(func.count(models.Customer.id).label("total"))

    @staticmethod
    def _invoice_status_statement() -> Select:
        return select(
            func.sum(
                case(
                    (models.Invoice.status == models.InvoiceStatus.PAID, models.Invoice.amount),
                    else_=0,
                )
            ).label("paid"),
            func.sum(
                case(
                    (models.Invoice.status == models.InvoiceStatus.PENDING, models.Invoice.amount),
                    else_=0,
                )
            ).label("pending"),
        )

    @staticmethod
    async def _fetch_one(engine: AsyncEngine, statement: Select) -> Row:
        async with engine.connect() as conn:
            return (await conn.execute(statement)).one()

    @staticmethod
    def build_card_data(invoice_count, customer_count, paid, pending) -> schemas.CardData:
        """Shape raw aggregates into card figures, treating missing values as zero."""

        return schemas.CardData(
            number_of_invoices=int(invoice_count or 0),
            number_of_customers=int(customer_count or 0),
            total_paid_invoices=format_currency(paid or 0),
            total_pending_invoices=format_currency(pending or 0),
        )

    @staticmethod
    async def fetch_card_data(engine: AsyncEngine) -> schemas.CardData:
        """Run the three card queries concurrently and combine their results.

        A failure in any query cancels the others and fails the whole call.
        """

        async with guard_store_errors("Failed to fetch card data."):
            async with asyncio.TaskGroup() as group:
                invoice_count = group.create_task(
                    DashboardService._fetch_one(engine, DashboardService._invoice_count_statement())
                )
                customer_count = group.create_task(
                    DashboardService._fetch_one(engine, DashboardService._customer_count_statement())
                )
                invoice_status = group.create_task(
                    DashboardService._fetch_one(engine, DashboardService._invoice_status_statement())
                )

        totals = invoice_status.result()
        return DashboardService.build_card_data(
            invoice_count.result().total,
            customer_count.result().total,
            totals.paid,
            totals.pending,
        )
