"""Row-to-record mapping with explicit column checks"""

from datetime import date, datetime
from typing import Any, Mapping

from invoice_gateway.domain.formatting import cents_to_dollars, format_currency, to_int, to_number
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


def column(row: Mapping[str, Any], name: str, kind: type | tuple[type, ...]) -> Any:
    """
    Read a required column from a result row.

    Raises:
        KeyError: column missing from the row
        TypeError: column present but holds the wrong type
    """
    if name not in row:
        raise KeyError(f"Missing column {name!r}")

    value = row[name]
    if not isinstance(value, kind):
        raise TypeError(f"Column {name!r} has type {type(value).__name__}")
    return value


def _text(row: Mapping[str, Any], name: str) -> str:
    return column(row, name, str)


def _date(row: Mapping[str, Any], name: str) -> date:
    value = row.get(name)
    # SQLite hands back ISO text when the column type is lost in an expression
    if isinstance(value, str):
        return date.fromisoformat(value)
    if isinstance(value, datetime):
        return value.date()
    return column(row, name, date)


def _sum(row: Mapping[str, Any], name: str) -> int:
    """Aggregate sums are NULL when no rows contributed"""
    if name not in row:
        raise KeyError(f"Missing column {name!r}")
    value = row[name]
    return 0 if value is None else to_int(value)


def revenue_from_row(row: Mapping[str, Any]) -> Revenue:
    if "revenue" not in row:
        raise KeyError("Missing column 'revenue'")
    return Revenue(month=_text(row, "month"), revenue=to_number(row["revenue"]))


def latest_invoice_from_row(row: Mapping[str, Any]) -> LatestInvoice:
    return LatestInvoice(
        id=_text(row, "id"),
        name=_text(row, "name"),
        image_url=_text(row, "image_url"),
        email=_text(row, "email"),
        amount=format_currency(to_int(column(row, "amount", object))),
    )


def invoice_row_from_row(row: Mapping[str, Any]) -> InvoiceRow:
    return InvoiceRow(
        id=_text(row, "id"),
        customer_id=_text(row, "customer_id"),
        name=_text(row, "name"),
        email=_text(row, "email"),
        image_url=_text(row, "image_url"),
        date=_date(row, "date"),
        amount=to_int(column(row, "amount", object)),
        status=_text(row, "status"),
    )


def invoice_form_from_row(row: Mapping[str, Any]) -> InvoiceForm:
    return InvoiceForm(
        id=_text(row, "id"),
        customer_id=_text(row, "customer_id"),
        amount=cents_to_dollars(to_int(column(row, "amount", object))),
        status=_text(row, "status"),
    )


def customer_field_from_row(row: Mapping[str, Any]) -> CustomerField:
    return CustomerField(id=_text(row, "id"), name=_text(row, "name"))


def customer_aggregate_from_row(row: Mapping[str, Any]) -> CustomerAggregate:
    return CustomerAggregate(
        id=_text(row, "id"),
        name=_text(row, "name"),
        email=_text(row, "email"),
        image_url=_text(row, "image_url"),
        total_invoices=to_int(column(row, "total_invoices", object)),
        total_pending=format_currency(_sum(row, "total_pending")),
        total_paid=format_currency(_sum(row, "total_paid")),
    )


def user_from_row(row: Mapping[str, Any]) -> User:
    return User(
        id=_text(row, "id"),
        name=_text(row, "name"),
        email=_text(row, "email"),
        password_hash=_text(row, "password"),
    )


def card_data_from_rows(
    invoice_counts: Mapping[str, Any],
    customer_counts: Mapping[str, Any],
    status_totals: Mapping[str, Any],
) -> CardData:
    """Assemble dashboard totals from the three aggregate query rows"""
    return CardData(
        invoice_count=count_from_row(invoice_counts),
        customer_count=count_from_row(customer_counts),
        total_paid=format_currency(_sum(status_totals, "paid")),
        total_pending=format_currency(_sum(status_totals, "pending")),
    )


def count_from_row(row: Mapping[str, Any]) -> int:
    return to_int(column(row, "count", object))
