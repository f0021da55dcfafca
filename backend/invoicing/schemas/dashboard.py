from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from .revenue import Revenue


class CardData(BaseModel):
    """Aggregated figures presented in the dashboard summary cards."""

    number_of_invoices: int = Field(..., ge=0)
    number_of_customers: int = Field(..., ge=0)
    total_paid_invoices: str
    total_pending_invoices: str


class RevenueChart(BaseModel):
    """Revenue series with the y-axis labels used to draw the chart."""

    items: List[Revenue]
    y_axis_labels: List[str] = Field(default_factory=list)
    top_label: int = Field(default=0, ge=0)
