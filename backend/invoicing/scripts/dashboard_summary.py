"""CLI utility that logs the dashboard card figures and the latest invoices."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional

from ..database import engine_scope
from ..services import DashboardService, DataAccessError, InvoiceService

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print the invoicing dashboard summary using POSTGRES_URL."
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Connection string overriding POSTGRES_URL/DATABASE_URL.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log each of the latest invoices.",
    )
    return parser.parse_args(argv)


async def _summarize(database_url: Optional[str]) -> int:
    async with engine_scope(database_url) as engine:
        try:
            cards = await DashboardService.fetch_card_data(engine)
            latest = await InvoiceService.fetch_latest_invoices(engine)
        except DataAccessError as exc:
            LOGGER.error("%s", exc)
            return 1

    LOGGER.info("Invoices: %s", cards.number_of_invoices)
    LOGGER.info("Customers: %s", cards.number_of_customers)
    LOGGER.info("Collected: %s", cards.total_paid_invoices)
    LOGGER.info("Pending: %s", cards.total_pending_invoices)
    for invoice in latest:
        LOGGER.debug("Latest invoice %s %s %s", invoice.id, invoice.name, invoice.amount)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)
    return asyncio.run(_summarize(args.database_url))


if __name__ == "__main__":
    raise SystemExit(main())
