# invoice_dashboard/api/invoices.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.engine import Engine

from invoice_dashboard.db.engine import get_engine
from invoice_dashboard.db.queries import (
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
)
from invoice_dashboard.models.invoices import InvoiceForm, InvoicesPage, LatestInvoice

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get("", response_model=InvoicesPage)
def list_invoices(
    query: str = Query("", description="Substring matched against name, email, amount, date and status"),
    page: int = Query(1, ge=1),
    engine: Engine = Depends(get_engine),
) -> InvoicesPage:
    """
    One page of invoices matching query, newest first.
    """
    return InvoicesPage(
        items=fetch_filtered_invoices(engine, query, page),
        page=page,
        total_pages=fetch_invoices_pages(engine, query),
    )


@router.get("/latest", response_model=List[LatestInvoice])
def latest_invoices(engine: Engine = Depends(get_engine)) -> List[LatestInvoice]:
    return fetch_latest_invoices(engine)


@router.get("/{invoice_id}", response_model=InvoiceForm)
def get_invoice(invoice_id: str, engine: Engine = Depends(get_engine)) -> InvoiceForm:
    """
    Look up a single invoice by id; amount is returned in dollars.
    """
    invoice = fetch_invoice_by_id(engine, invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice
