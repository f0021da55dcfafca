"""SQLAlchemy model definitions for invoices."""

from __future__ import annotations

import enum
import uuid

from sqlalchemy import Column, Date, Enum, ForeignKey, Integer
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID


class InvoiceStatus(str, enum.Enum):
    """Payment state of an invoice."""

    PENDING = "pending"
    PAID = "paid"


class Invoice(Base):
    """An invoice issued to a customer.

    ``amount`` is stored in minor currency units (cents).
    """

    __tablename__ = "invoices"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    customer_id = Column(GUID(), ForeignKey("customers.id"), nullable=False)
    amount = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    status = Column(
        Enum(
            InvoiceStatus,
            name="invoice_status_enum",
            native_enum=False,
            length=255,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )

    customer = relationship("Customer", back_populates="invoices")
