from __future__ import annotations

import logging
import uuid

import pytest

from backend.invoicing.services import (
    CustomerService,
    DashboardService,
    DataAccessError,
    InvoiceService,
    RevenueService,
)

from conftest import REVENUE_ROWS

pytestmark = pytest.mark.anyio


async def test_revenue_returns_every_month(engine, seed_dashboard_data):
    revenue = await RevenueService.fetch_revenue(engine)

    assert len(revenue) == len(REVENUE_ROWS)
    assert {item.month: item.revenue for item in revenue} == dict(REVENUE_ROWS)


async def test_card_data_combines_counts_and_totals(engine, seed_dashboard_data):
    cards = await DashboardService.fetch_card_data(engine)

    assert cards.number_of_invoices == 14
    assert cards.number_of_customers == 5
    assert cards.total_paid_invoices == "$2,256.26"
    assert cards.total_pending_invoices == "$1,256.32"


async def test_card_data_on_empty_store_defaults_to_zero(engine):
    cards = await DashboardService.fetch_card_data(engine)

    assert cards.number_of_invoices == 0
    assert cards.number_of_customers == 0
    assert cards.total_paid_invoices == "$0.00"
    assert cards.total_pending_invoices == "$0.00"


async def test_build_card_data_treats_missing_aggregates_as_zero():
    cards = DashboardService.build_card_data(None, None, None, 5000)

    assert cards.number_of_invoices == 0
    assert cards.number_of_customers == 0
    assert cards.total_paid_invoices == "$0.00"
    assert cards.total_pending_invoices == "$50.00"


async def test_card_data_fails_when_one_query_fails(engine, seed_dashboard_data, monkeypatch, caplog):
    original_fetch_one = DashboardService._fetch_one

    async def flaky_fetch_one(engine, statement):
        if "customers" in str(statement):
            raise ConnectionError("password authentication failed for user dashboard")
        return await original_fetch_one(engine, statement)

    monkeypatch.setattr(DashboardService, "_fetch_one", staticmethod(flaky_fetch_one))

    with caplog.at_level(logging.ERROR):
        with pytest.raises(DataAccessError) as excinfo:
            await DashboardService.fetch_card_data(engine)

    assert str(excinfo.value) == "Failed to fetch card data."
    assert "password" not in str(excinfo.value)
    assert excinfo.value.__cause__ is None
    assert "Database error: Failed to fetch card data." in caplog.text
    assert "password authentication failed" in caplog.text


OPERATIONS = [
    ("Failed to fetch revenue data.", lambda engine: RevenueService.fetch_revenue(engine)),
    ("Failed to fetch the latest invoices.", lambda engine: InvoiceService.fetch_latest_invoices(engine)),
    ("Failed to fetch card data.", lambda engine: DashboardService.fetch_card_data(engine)),
    ("Failed to fetch invoices.", lambda engine: InvoiceService.fetch_filtered_invoices(engine, "lee", 1)),
    (
        "Failed to fetch total number of invoices.",
        lambda engine: InvoiceService.fetch_invoices_pages(engine, "lee"),
    ),
    (
        "Failed to fetch invoice.",
        lambda engine: InvoiceService.fetch_invoice_by_id(engine, str(uuid.uuid4())),
    ),
    ("Failed to fetch all customers.", lambda engine: CustomerService.fetch_customers(engine)),
    (
        "Failed to fetch customer table.",
        lambda engine: CustomerService.fetch_filtered_customers(engine, "lee"),
    ),
]


@pytest.mark.parametrize(("message", "operation"), OPERATIONS, ids=[item[0] for item in OPERATIONS])
async def test_store_faults_raise_generic_error(broken_engine, message, operation, caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(DataAccessError) as excinfo:
            await operation(broken_engine)

    assert str(excinfo.value) == message
    assert "no such table" not in str(excinfo.value)
    assert excinfo.value.__cause__ is None
    assert "no such table" in caplog.text
