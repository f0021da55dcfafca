"""SQLAlchemy model definitions for customers."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID


class Customer(Base):
    """A customer billed through invoices."""

    __tablename__ = "customers"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    image_url = Column(String(255), nullable=False)

    invoices = relationship("Invoice", back_populates="customer")
