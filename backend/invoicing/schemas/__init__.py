"""Expose Pydantic schemas for convenient imports."""

from .customer import CustomerField, CustomersTableRow
from .dashboard import CardData, RevenueChart
from .invoice import (
    InvoiceForm,
    InvoicePage,
    InvoicePagesResponse,
    InvoicesTableRow,
    LatestInvoice,
)
from .revenue import Revenue

__all__ = [
    "CardData",
    "CustomerField",
    "CustomersTableRow",
    "InvoiceForm",
    "InvoicePage",
    "InvoicePagesResponse",
    "InvoicesTableRow",
    "LatestInvoice",
    "Revenue",
    "RevenueChart",
]
