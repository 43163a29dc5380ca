"""GET /v1/invoices - searchable, paginated invoice table and invoice lookup"""

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, Query

from invoice_gateway.api.v1.schemas import InvoiceFormSchema, InvoicePagesResponse, InvoiceRowSchema
from invoice_gateway.api.dependencies import get_database
from invoice_gateway.domain.exceptions import NotFoundError
from invoice_gateway.infrastructure.database.session import Database
from invoice_gateway.infrastructure.database.queries import (
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)

router = APIRouter()


@router.get("/invoices", response_model=List[InvoiceRowSchema])
async def list_invoices(
    query: str = Query("", description="Case-insensitive search text"),
    page: int = Query(1, ge=1, description="1-based page number"),
    db: Database = Depends(get_database),
):
    """One page of invoices matching the search text, newest first"""
    invoices = await fetch_filtered_invoices(db, query, page)
    return [InvoiceRowSchema(**asdict(inv)) for inv in invoices]


@router.get("/invoices/pages", response_model=InvoicePagesResponse)
async def get_invoice_pages(
    query: str = Query("", description="Case-insensitive search text"),
    db: Database = Depends(get_database),
):
    """Number of pages the search text spans"""
    total_pages = await fetch_invoices_pages(db, query)
    return InvoicePagesResponse(query=query, total_pages=total_pages)


@router.get("/invoices/{invoice_id}", response_model=InvoiceFormSchema)
async def get_invoice(invoice_id: str, db: Database = Depends(get_database)):
    """
    Retrieve a single invoice for editing.

    Returns:
        Invoice with amount converted to dollars
    """
    invoice = await fetch_invoice_by_id(db, invoice_id)

    if invoice is None:
        raise NotFoundError("Invoice not found")

    return InvoiceFormSchema(**asdict(invoice))
