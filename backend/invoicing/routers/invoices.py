"""Router exposing the invoices table and invoice lookups."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncEngine

from .. import schemas
from ..database import get_engine
from ..formatting import generate_pagination
from ..services import DataAccessError, InvoiceService

router = APIRouter()


@router.get("/", response_model=schemas.InvoicePage)
async def list_invoices(
    query: str = Query("", description="Case-insensitive search across customer and invoice fields"),
    page: int = Query(1, ge=1, description="1-indexed page number"),
    engine: AsyncEngine = Depends(get_engine),
) -> schemas.InvoicePage:
    """Return one page of matching invoices along with pager links."""
    normalized_query = query.strip()
    try:
        items = await InvoiceService.fetch_filtered_invoices(engine, normalized_query, page)
        total_pages = await InvoiceService.fetch_invoices_pages(engine, normalized_query)
    except DataAccessError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    return schemas.InvoicePage(
        items=items,
        current_page=page,
        total_pages=total_pages,
        pagination=generate_pagination(page, total_pages),
    )


@router.get("/pages", response_model=schemas.InvoicePagesResponse)
async def get_invoice_pages(
    query: str = Query("", description="Case-insensitive search across customer and invoice fields"),
    engine: AsyncEngine = Depends(get_engine),
) -> schemas.InvoicePagesResponse:
    try:
        total_pages = await InvoiceService.fetch_invoices_pages(engine, query.strip())
    except DataAccessError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    return schemas.InvoicePagesResponse(total_pages=total_pages)


@router.get("/{invoice_id}", response_model=schemas.InvoiceForm)
async def get_invoice(
    invoice_id: str, engine: AsyncEngine = Depends(get_engine)
) -> schemas.InvoiceForm:
    """Retrieve a single invoice prepared for the edit form."""
    try:
        invoice = await InvoiceService.fetch_invoice_by_id(engine, invoice_id)
    except DataAccessError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    if invoice is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return invoice
