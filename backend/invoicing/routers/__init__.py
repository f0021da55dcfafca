"""Routers package."""

from .customers import router as customers_router
from .dashboard import router as dashboard_router
from .invoices import router as invoices_router

__all__ = [
    "customers_router",
    "dashboard_router",
    "invoices_router",
]
