"""GET /v1/customers - customer options and customer table"""

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, Query

from invoice_gateway.api.v1.schemas import CustomerAggregateSchema, CustomerFieldSchema
from invoice_gateway.api.dependencies import get_database
from invoice_gateway.infrastructure.database.session import Database
from invoice_gateway.infrastructure.database.queries import fetch_customers, fetch_filtered_customers

router = APIRouter()


@router.get("/customers", response_model=List[CustomerFieldSchema])
async def list_customers(db: Database = Depends(get_database)):
    """All customers, alphabetically"""
    customers = await fetch_customers(db)
    return [CustomerFieldSchema(**asdict(c)) for c in customers]


@router.get("/customers/table", response_model=List[CustomerAggregateSchema])
async def get_customer_table(
    query: str = Query("", description="Matches customer name or email"),
    db: Database = Depends(get_database),
):
    """Customers with invoice totals"""
    customers = await fetch_filtered_customers(db, query)
    return [CustomerAggregateSchema(**asdict(c)) for c in customers]
