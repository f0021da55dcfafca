from __future__ import annotations

import sys
import uuid
from datetime import date
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import Session, sessionmaker

# Ensure the project root (which exposes the ``backend`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.invoicing import models
from backend.invoicing.database import Base, build_engine, get_engine
from backend.invoicing.main import app

CUSTOMER_IDS = {
    "delba": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
    "lee": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
    "hector": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
    "steven": "76d65c26-f784-44a2-ac19-586678f7c2f2",
    "amy": "cc27c14a-0acf-4f4a-a6c9-d45682c144b9",
}

# (invoice number, customer, amount in cents, status, date)
INVOICE_ROWS = [
    (1, "delba", 15795, models.InvoiceStatus.PENDING, date(2022, 12, 6)),
    (2, "lee", 20348, models.InvoiceStatus.PENDING, date(2022, 11, 14)),
    (3, "hector", 3040, models.InvoiceStatus.PAID, date(2022, 10, 29)),
    (4, "steven", 44800, models.InvoiceStatus.PAID, date(2023, 9, 10)),
    (5, "delba", 34577, models.InvoiceStatus.PENDING, date(2023, 8, 5)),
    (6, "lee", 54246, models.InvoiceStatus.PENDING, date(2023, 7, 16)),
    (7, "hector", 666, models.InvoiceStatus.PENDING, date(2023, 6, 27)),
    (8, "steven", 32545, models.InvoiceStatus.PAID, date(2023, 6, 9)),
    (9, "delba", 1250, models.InvoiceStatus.PAID, date(2023, 6, 17)),
    (10, "lee", 8546, models.InvoiceStatus.PAID, date(2023, 6, 7)),
    (11, "hector", 500, models.InvoiceStatus.PAID, date(2023, 8, 19)),
    (12, "steven", 8945, models.InvoiceStatus.PAID, date(2023, 6, 3)),
    (13, "delba", 1000, models.InvoiceStatus.PAID, date(2022, 6, 5)),
    (14, "lee", 125000, models.InvoiceStatus.PAID, date(2024, 1, 15)),
]

REVENUE_ROWS = [
    ("Jan", 2000),
    ("Feb", 1800),
    ("Mar", 2200),
    ("Apr", 2500),
    ("May", 2300),
    ("Jun", 3200),
    ("Jul", 3500),
    ("Aug", 3700),
    ("Sep", 2500),
    ("Oct", 2800),
    ("Nov", 3000),
    ("Dec", 4800),
]


def invoice_id(number: int) -> str:
    return str(uuid.UUID(int=number))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def database_url(tmp_path) -> Generator[str, None, None]:
    """SQLite file with the dashboard schema and no rows."""

    url = f"sqlite:///{(tmp_path / 'dashboard.db').as_posix()}"
    sync_engine = create_engine(url)
    Base.metadata.create_all(bind=sync_engine)
    yield url
    sync_engine.dispose()


@pytest.fixture
def db_session(database_url: str) -> Generator[Session, None, None]:
    sync_engine = create_engine(database_url)
    session = sessionmaker(bind=sync_engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        sync_engine.dispose()


@pytest.fixture
def seed_dashboard_data(db_session: Session) -> dict:
    customers = {
        "delba": models.Customer(
            id=CUSTOMER_IDS["delba"],
            name="Delba de Oliveira",
            email="delba@oliveira.com",
            image_url="/customers/delba-de-oliveira.png",
        ),
        "lee": models.Customer(
            id=CUSTOMER_IDS["lee"],
            name="Lee Robinson",
            email="lee@robinson.com",
            image_url="/customers/lee-robinson.png",
        ),
        "hector": models.Customer(
            id=CUSTOMER_IDS["hector"],
            name="Hector Simpson",
            email="hector@simpson.com",
            image_url="/customers/hector-simpson.png",
        ),
        "steven": models.Customer(
            id=CUSTOMER_IDS["steven"],
            name="Steven Tey",
            email="steven@tey.com",
            image_url="/customers/steven-tey.png",
        ),
        "amy": models.Customer(
            id=CUSTOMER_IDS["amy"],
            name="Amy Burns",
            email="amy@burns.com",
            image_url="/customers/amy-burns.png",
        ),
    }
    db_session.add_all(customers.values())

    invoices = {}
    for number, customer_key, amount, status, issued_on in INVOICE_ROWS:
        invoices[number] = models.Invoice(
            id=invoice_id(number),
            customer_id=CUSTOMER_IDS[customer_key],
            amount=amount,
            status=status,
            date=issued_on,
        )
    db_session.add_all(invoices.values())

    db_session.add_all(
        models.Revenue(month=month, revenue=amount) for month, amount in REVENUE_ROWS
    )
    db_session.commit()

    return {"customers": customers, "invoices": invoices}


@pytest.fixture
def engine(database_url: str) -> AsyncEngine:
    return build_engine(database_url)


@pytest.fixture
def broken_engine(tmp_path) -> AsyncEngine:
    """Engine pointing at a database without the dashboard tables."""

    return build_engine(f"sqlite:///{(tmp_path / 'missing_tables.db').as_posix()}")


@pytest.fixture
def api_client(engine: AsyncEngine, database_url: str, monkeypatch) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("POSTGRES_URL", database_url)
    app.dependency_overrides[get_engine] = lambda: engine
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_engine, None)
