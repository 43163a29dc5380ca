"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import AsyncGenerator, Awaitable, Callable
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker
from invoice_gateway.api.main import create_app
from invoice_gateway.domain.credentials import hash_password
from invoice_gateway.infrastructure.database.models import (
    Base,
    CustomerModel,
    InvoiceModel,
    RevenueModel,
    UserModel,
)
from invoice_gateway.infrastructure.database.session import Database


USER_ID = "410544b2-4001-4271-9855-fec4b6a6442a"
USER_EMAIL = "user@nextmail.com"
USER_PASSWORD = "123456"

DELBA_ID = "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"
LEE_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"
HECTOR_ID = "3958dc9e-742f-4377-85e9-fec4b6a6442a"


@pytest.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """Create an on-disk SQLite database with the schema"""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture
def add_rows(database: Database) -> Callable[..., Awaitable[None]]:
    """Insert ORM rows and commit"""
    session_factory = async_sessionmaker(database.engine, expire_on_commit=False)

    async def _add(*rows) -> None:
        async with session_factory() as session:
            session.add_all(rows)
            await session.commit()

    return _add


@pytest.fixture
async def sample_data(add_rows) -> None:
    """
    Three customers, seven invoices, three revenue months and one user.

    Paid total:    3040 + 44800 = 47840 cents
    Pending total: 15795 + 20348 + 34577 + 54246 + 666 = 125632 cents
    """
    await add_rows(
        CustomerModel(id=DELBA_ID, name="Delba de Oliveira", email="delba@oliveira.com", image_url="/customers/delba.png"),
        CustomerModel(id=LEE_ID, name="Lee Robinson", email="lee@robinson.com", image_url="/customers/lee.png"),
        CustomerModel(id=HECTOR_ID, name="Hector Simpson", email="hector@simpson.com", image_url="/customers/hector.png"),
    )
    await add_rows(
        InvoiceModel(id="inv-1", customer_id=DELBA_ID, amount=15795, status="pending", date=date(2022, 12, 6)),
        InvoiceModel(id="inv-2", customer_id=LEE_ID, amount=20348, status="pending", date=date(2022, 11, 14)),
        InvoiceModel(id="inv-3", customer_id=DELBA_ID, amount=3040, status="paid", date=date(2022, 10, 29)),
        InvoiceModel(id="inv-4", customer_id=LEE_ID, amount=44800, status="paid", date=date(2023, 9, 10)),
        InvoiceModel(id="inv-5", customer_id=DELBA_ID, amount=34577, status="pending", date=date(2023, 8, 5)),
        InvoiceModel(id="inv-6", customer_id=LEE_ID, amount=54246, status="pending", date=date(2023, 7, 16)),
        InvoiceModel(id="inv-7", customer_id=DELBA_ID, amount=666, status="pending", date=date(2023, 6, 27)),
        RevenueModel(month="Jan", revenue=2000),
        RevenueModel(month="Feb", revenue=1800),
        RevenueModel(month="Mar", revenue=2200),
        UserModel(id=USER_ID, name="User", email=USER_EMAIL, password=hash_password(USER_PASSWORD, rounds=4)),
    )


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """Create an HTTP client bound to an app using the test database"""
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
