"""Expose SQLAlchemy models for convenient imports."""

from .customer import Customer
from .invoice import Invoice, InvoiceStatus
from .revenue import Revenue

__all__ = [
    "Customer",
    "Invoice",
    "InvoiceStatus",
    "Revenue",
]
