"""Pydantic schemas for API responses"""

from datetime import date
from typing import Union

from pydantic import BaseModel


class RevenueSchema(BaseModel):
    """Monthly revenue point"""

    month: str
    revenue: Union[int, float]


class LatestInvoiceSchema(BaseModel):
    """Recent invoice with formatted amount"""

    id: str
    name: str
    image_url: str
    email: str
    amount: str


class CardDataResponse(BaseModel):
    """Response for GET /v1/cards"""

    invoice_count: int
    customer_count: int
    total_paid: str
    total_pending: str


class InvoiceRowSchema(BaseModel):
    """Invoice table row, amount in cents"""

    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: date
    amount: int
    status: str


class InvoicePagesResponse(BaseModel):
    """Response for GET /v1/invoices/pages"""

    query: str
    total_pages: int


class InvoiceFormSchema(BaseModel):
    """Response for GET /v1/invoices/{invoice_id}, amount in dollars"""

    id: str
    customer_id: str
    amount: float
    status: str


class CustomerFieldSchema(BaseModel):
    """Customer select option"""

    id: str
    name: str


class CustomerAggregateSchema(BaseModel):
    """Customer table row with formatted totals"""

    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str


class AuthorizedUserResponse(BaseModel):
    """Response for POST /v1/auth/authorize, never includes the password hash"""

    id: str
    name: str
    email: str
