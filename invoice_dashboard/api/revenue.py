# invoice_dashboard/api/revenue.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from invoice_dashboard.db.engine import get_engine
from invoice_dashboard.db.queries import fetch_card_data, fetch_revenue
from invoice_dashboard.models.dashboard import CardData, Revenue

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/revenue", response_model=List[Revenue])
def list_revenue(engine: Engine = Depends(get_engine)) -> List[Revenue]:
    return fetch_revenue(engine)


@router.get("/dashboard/cards", response_model=CardData)
async def card_data(engine: Engine = Depends(get_engine)) -> CardData:
    """
    Invoice/customer counts and collected/pending totals.
    """
    return await fetch_card_data(engine)
