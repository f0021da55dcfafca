"""Pydantic schemas describing invoice query results."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from ..models.invoice import InvoiceStatus


class LatestInvoice(BaseModel):
    """Recent invoice with its amount already formatted for display."""

    id: str
    name: str
    email: str
    image_url: str
    amount: str

    model_config = ConfigDict(from_attributes=True)


class InvoicesTableRow(BaseModel):
    """Invoice joined with its customer; ``amount`` stays in cents."""

    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: datetime.date
    amount: int
    status: InvoiceStatus

    model_config = ConfigDict(from_attributes=True)


class InvoiceForm(BaseModel):
    """Invoice prepared for the edit form; ``amount`` is in major units."""

    id: str
    customer_id: str
    amount: Decimal
    status: InvoiceStatus


class InvoicePagesResponse(BaseModel):
    total_pages: int = Field(..., ge=0)


class InvoicePage(BaseModel):
    """One page of the invoices table together with pager metadata."""

    items: List[InvoicesTableRow]
    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    pagination: List[Union[int, str]] = Field(default_factory=list)
