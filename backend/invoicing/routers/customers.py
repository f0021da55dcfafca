"""Router exposing the customer directory and customers table."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncEngine

from .. import schemas
from ..database import get_engine
from ..services import CustomerService, DataAccessError

router = APIRouter()


@router.get("/", response_model=List[schemas.CustomerField])
async def list_customers(
    engine: AsyncEngine = Depends(get_engine),
) -> List[schemas.CustomerField]:
    """Return every customer ordered by name, for selection widgets."""
    try:
        return await CustomerService.fetch_customers(engine)
    except DataAccessError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc


@router.get("/table", response_model=List[schemas.CustomersTableRow])
async def get_customers_table(
    query: str = Query("", description="Case-insensitive search by customer name or email"),
    engine: AsyncEngine = Depends(get_engine),
) -> List[schemas.CustomersTableRow]:
    try:
        return await CustomerService.fetch_filtered_customers(engine, query.strip())
    except DataAccessError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
