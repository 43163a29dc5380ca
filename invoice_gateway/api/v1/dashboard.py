"""GET /v1/revenue, /v1/invoices/latest, /v1/cards - dashboard overview"""

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends

from invoice_gateway.api.v1.schemas import CardDataResponse, LatestInvoiceSchema, RevenueSchema
from invoice_gateway.api.dependencies import get_database
from invoice_gateway.infrastructure.database.session import Database
from invoice_gateway.infrastructure.database.queries import (
    fetch_card_data,
    fetch_latest_invoices,
    fetch_revenue,
)

router = APIRouter()


@router.get("/revenue", response_model=List[RevenueSchema])
async def get_revenue(db: Database = Depends(get_database)):
    """Monthly revenue series for the revenue chart"""
    revenue = await fetch_revenue(db)
    return [RevenueSchema(**asdict(r)) for r in revenue]


@router.get("/invoices/latest", response_model=List[LatestInvoiceSchema])
async def get_latest_invoices(db: Database = Depends(get_database)):
    """Five most recent invoices"""
    invoices = await fetch_latest_invoices(db)
    return [LatestInvoiceSchema(**asdict(inv)) for inv in invoices]


@router.get("/cards", response_model=CardDataResponse)
async def get_cards(db: Database = Depends(get_database)):
    """
    Dashboard summary cards.

    Returns:
        Invoice and customer counts with paid/pending totals as currency
    """
    card_data = await fetch_card_data(db)
    return CardDataResponse(**asdict(card_data))
