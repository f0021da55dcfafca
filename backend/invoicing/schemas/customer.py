"""Pydantic schemas describing customer query results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CustomerField(BaseModel):
    """Minimal customer representation used by selection widgets."""

    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class CustomersTableRow(BaseModel):
    """Customer with invoice aggregates; totals are formatted currency strings."""

    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int = Field(..., ge=0)
    total_pending: str
    total_paid: str
