# invoice_dashboard/api/customers.py

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.engine import Engine

from invoice_dashboard.db.engine import get_engine
from invoice_dashboard.db.queries import fetch_customers, fetch_filtered_customers
from invoice_dashboard.models.customers import CustomerField, CustomersTableRow

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("", response_model=List[CustomersTableRow])
def list_customers(
    query: str = Query("", description="Substring matched against name and email"),
    engine: Engine = Depends(get_engine),
) -> List[CustomersTableRow]:
    """
    Customers matching query with their invoice count and paid/pending totals.
    """
    return fetch_filtered_customers(engine, query)


@router.get("/options", response_model=List[CustomerField])
def customer_options(engine: Engine = Depends(get_engine)) -> List[CustomerField]:
    return fetch_customers(engine)
