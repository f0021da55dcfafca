"""Data access layer for the invoicing dashboard."""

from .customers import CustomerService
from .dashboard import DashboardService
from .data_access import DataAccessError, guard_store_errors
from .invoices import ITEMS_PER_PAGE, InvoiceService
from .revenue import RevenueService

__all__ = [
    "CustomerService",
    "DashboardService",
    "DataAccessError",
    "guard_store_errors",
    "ITEMS_PER_PAGE",
    "InvoiceService",
    "RevenueService",
]
