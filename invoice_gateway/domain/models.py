"""Domain models - pure Python dataclasses representing view records"""

from dataclasses import dataclass
from datetime import date
from typing import Union

Number = Union[int, float]


@dataclass
class Revenue:
    """Monthly revenue figure"""

    month: str
    revenue: Number


@dataclass
class LatestInvoice:
    """Recent invoice joined with its customer, amount already formatted"""

    id: str
    name: str
    image_url: str
    email: str
    amount: str


@dataclass
class CardData:
    """Dashboard summary totals"""

    invoice_count: int
    customer_count: int
    total_paid: str
    total_pending: str


@dataclass
class InvoiceRow:
    """Invoice table row joined with customer details"""

    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: date
    amount: int  # cents
    status: str  # "pending" or "paid"


@dataclass
class InvoiceForm:
    """Invoice shaped for an edit form, amount in dollars"""

    id: str
    customer_id: str
    amount: float
    status: str


@dataclass
class CustomerField:
    """Customer option for select inputs"""

    id: str
    name: str


@dataclass
class CustomerAggregate:
    """Customer with invoice totals formatted as currency"""

    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str


@dataclass
class User:
    """Stored user record, password_hash is a bcrypt hash"""

    id: str
    name: str
    email: str
    password_hash: str
