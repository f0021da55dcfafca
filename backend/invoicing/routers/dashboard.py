"""Router exposing the dashboard overview figures."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncEngine

from .. import schemas
from ..database import get_engine
from ..formatting import generate_y_axis
from ..services import DashboardService, DataAccessError, InvoiceService, RevenueService

router = APIRouter()


@router.get("/revenue", response_model=schemas.RevenueChart)
async def get_revenue(engine: AsyncEngine = Depends(get_engine)) -> schemas.RevenueChart:
    """Return the revenue series and the labels for its chart axis."""
    try:
        revenue = await RevenueService.fetch_revenue(engine)
    except DataAccessError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    labels, top_label = generate_y_axis(item.revenue for item in revenue)
    return schemas.RevenueChart(items=revenue, y_axis_labels=labels, top_label=top_label)


@router.get("/latest-invoices", response_model=List[schemas.LatestInvoice])
async def get_latest_invoices(
    engine: AsyncEngine = Depends(get_engine),
) -> List[schemas.LatestInvoice]:
    try:
        return await InvoiceService.fetch_latest_invoices(engine)
    except DataAccessError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc


@router.get("/cards", response_model=schemas.CardData)
async def get_card_data(engine: AsyncEngine = Depends(get_engine)) -> schemas.CardData:
    try:
        return await DashboardService.fetch_card_data(engine)
    except DataAccessError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
