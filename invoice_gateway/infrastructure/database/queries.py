"""Query gateway: parameterized reads shaped into view records"""

import asyncio
import functools
import math
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from sqlalchemy import Text, case, cast, func, or_, select

from invoice_gateway.domain.exceptions import DataAccessError
from invoice_gateway.domain.models import (
    CardData,
    CustomerAggregate,
    CustomerField,
    InvoiceForm,
    InvoiceRow,
    LatestInvoice,
    Revenue,
    User,
)
from invoice_gateway.domain.records import (
    card_data_from_rows,
    count_from_row,
    customer_aggregate_from_row,
    customer_field_from_row,
    invoice_form_from_row,
    invoice_row_from_row,
    latest_invoice_from_row,
    revenue_from_row,
    user_from_row,
)
from invoice_gateway.infrastructure.database.models import (
    CustomerModel,
    InvoiceModel,
    RevenueModel,
    UserModel,
)
from invoice_gateway.infrastructure.database.session import Database
from invoice_gateway.infrastructure.observability.logging import log_query_failure
from invoice_gateway.infrastructure.observability.metrics import (
    query_duration_histogram,
    query_failure_counter,
)

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5
LIKE_ESCAPE = "\\"

T = TypeVar("T")


def gateway_operation(message: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Wrap a query function so any failure surfaces as DataAccessError.

    Driver errors and malformed rows are logged, counted and re-raised with a
    stable caller-facing message; the original error stays chained.
    """

    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        operation = fn.__name__

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with query_duration_histogram.labels(operation=operation).time():
                try:
                    return await fn(*args, **kwargs)
                except Exception as e:
                    query_failure_counter.labels(operation=operation).inc()
                    log_query_failure(operation, e)
                    raise DataAccessError(message, operation=operation) from e

        return wrapper

    return decorator


def _contains(query: str) -> str:
    """Build an ILIKE pattern that matches query as a literal substring"""
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _invoice_search(query: str):
    pattern = _contains(query)
    return or_(
        CustomerModel.name.ilike(pattern, escape=LIKE_ESCAPE),
        CustomerModel.email.ilike(pattern, escape=LIKE_ESCAPE),
        cast(InvoiceModel.amount, Text).ilike(pattern, escape=LIKE_ESCAPE),
        cast(InvoiceModel.date, Text).ilike(pattern, escape=LIKE_ESCAPE),
        InvoiceModel.status.ilike(pattern, escape=LIKE_ESCAPE),
    )


def _sum_by_status(status: str):
    return func.sum(case((InvoiceModel.status == status, InvoiceModel.amount), else_=0))


@gateway_operation("Failed to fetch revenue data.")
async def fetch_revenue(db: Database) -> List[Revenue]:
    """Fetch the full monthly revenue series"""
    rows = await db.fetch_all(select(RevenueModel.month, RevenueModel.revenue))
    return [revenue_from_row(row) for row in rows]


@gateway_operation("Failed to fetch the latest invoices.")
async def fetch_latest_invoices(db: Database) -> List[LatestInvoice]:
    """Fetch the five most recent invoices with customer details"""
    statement = (
        select(
            InvoiceModel.amount,
            CustomerModel.name,
            CustomerModel.image_url,
            CustomerModel.email,
            InvoiceModel.id,
        )
        .select_from(InvoiceModel)
        .join(CustomerModel, InvoiceModel.customer_id == CustomerModel.id)
        .order_by(InvoiceModel.date.desc())
        .limit(LATEST_INVOICES_LIMIT)
    )
    rows = await db.fetch_all(statement)
    return [latest_invoice_from_row(row) for row in rows]


@gateway_operation("Failed to fetch card data.")
async def fetch_card_data(db: Database) -> CardData:
    """
    Fetch dashboard totals.

    The three aggregates run concurrently on separate pooled connections and
    the result is only assembled once all of them have returned. A failure in
    any one of them fails the whole call.
    """
    invoice_counts, customer_counts, status_totals = await asyncio.gather(
        db.fetch_one(select(func.count(InvoiceModel.id).label("count"))),
        db.fetch_one(select(func.count(CustomerModel.id).label("count"))),
        db.fetch_one(
            select(
                _sum_by_status("paid").label("paid"),
                _sum_by_status("pending").label("pending"),
            )
        ),
    )
    return card_data_from_rows(invoice_counts, customer_counts, status_totals)


@gateway_operation("Failed to fetch invoices.")
async def fetch_filtered_invoices(db: Database, query: str, current_page: int) -> List[InvoiceRow]:
    """
    Fetch one page of invoices matching query, newest first.

    query is matched case-insensitively against customer name and email and
    the invoice amount, date and status. current_page starts at 1 and is not
    clamped here.
    """
    offset = (current_page - 1) * ITEMS_PER_PAGE
    statement = (
        select(
            InvoiceModel.id,
            InvoiceModel.customer_id,
            InvoiceModel.amount,
            InvoiceModel.date,
            InvoiceModel.status,
            CustomerModel.name,
            CustomerModel.email,
            CustomerModel.image_url,
        )
        .select_from(InvoiceModel)
        .join(CustomerModel, InvoiceModel.customer_id == CustomerModel.id)
        .where(_invoice_search(query))
        .order_by(InvoiceModel.date.desc(), InvoiceModel.id)
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
    )
    rows = await db.fetch_all(statement)
    return [invoice_row_from_row(row) for row in rows]


@gateway_operation("Failed to fetch total number of invoices.")
async def fetch_invoices_pages(db: Database, query: str) -> int:
    """Count pages of invoices matching query (0 when nothing matches)"""
    statement = (
        select(func.count(InvoiceModel.id).label("count"))
        .select_from(InvoiceModel)
        .join(CustomerModel, InvoiceModel.customer_id == CustomerModel.id)
        .where(_invoice_search(query))
    )
    row = await db.fetch_one(statement)
    return math.ceil(count_from_row(row) / ITEMS_PER_PAGE)


@gateway_operation("Failed to fetch invoice.")
async def fetch_invoice_by_id(db: Database, invoice_id: str) -> Optional[InvoiceForm]:
    """Fetch an invoice for editing, or None if no invoice has this id"""
    statement = select(
        InvoiceModel.id,
        InvoiceModel.customer_id,
        InvoiceModel.amount,
        InvoiceModel.status,
    ).where(InvoiceModel.id == invoice_id)
    row = await db.fetch_one(statement)
    if row is None:
        return None
    return invoice_form_from_row(row)


@gateway_operation("Failed to fetch all customers.")
async def fetch_customers(db: Database) -> List[CustomerField]:
    """Fetch every customer's id and name, alphabetically"""
    statement = select(CustomerModel.id, CustomerModel.name).order_by(CustomerModel.name.asc())
    rows = await db.fetch_all(statement)
    return [customer_field_from_row(row) for row in rows]


@gateway_operation("Failed to fetch customer table.")
async def fetch_filtered_customers(db: Database, query: str) -> List[CustomerAggregate]:
    """Fetch customers matching query with their invoice count and pending/paid totals"""
    pattern = _contains(query)
    statement = (
        select(
            CustomerModel.id,
            CustomerModel.name,
            CustomerModel.email,
            CustomerModel.image_url,
            func.count(InvoiceModel.id).label("total_invoices"),
            _sum_by_status("pending").label("total_pending"),
            _sum_by_status("paid").label("total_paid"),
        )
        .select_from(CustomerModel)
        .outerjoin(InvoiceModel, CustomerModel.id == InvoiceModel.customer_id)
        .where(
            or_(
                CustomerModel.name.ilike(pattern, escape=LIKE_ESCAPE),
                CustomerModel.email.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        .group_by(
            CustomerModel.id,
            CustomerModel.name,
            CustomerModel.email,
            CustomerModel.image_url,
        )
        .order_by(CustomerModel.name.asc())
    )
    rows = await db.fetch_all(statement)
    return [customer_aggregate_from_row(row) for row in rows]


@gateway_operation("Failed to fetch user.")
async def get_user(db: Database, email: str) -> Optional[User]:
    """Look up a user by exact email; the first row wins if several match"""
    statement = select(
        UserModel.id,
        UserModel.name,
        UserModel.email,
        UserModel.password,
    ).where(UserModel.email == email)
    row = await db.fetch_one(statement)
    if row is None:
        return None
    return user_from_row(row)
