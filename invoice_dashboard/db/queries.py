# invoice_dashboard/db/queries.py
"""
Read-side data access for the dashboard.

Every function runs parameterized SQLAlchemy Core statements against the
given engine and reshapes the rows into display-ready models. Database
failures are logged and re-raised as DataFetchError.
"""

import asyncio
import logging
import math
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from invoice_dashboard.core.errors import DataFetchError
from invoice_dashboard.db.schema import customers, invoices, revenue
from invoice_dashboard.lib.utils import format_currency
from invoice_dashboard.models.customers import CustomerField, CustomersTableRow
from invoice_dashboard.models.dashboard import CardData, Revenue
from invoice_dashboard.models.invoices import (
    InvoiceForm,
    InvoicesTableRow,
    LatestInvoice,
)

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


def _paid_total():
    return func.sum(case((invoices.c.status == "paid", invoices.c.amount), else_=0))


def _pending_total():
    return func.sum(case((invoices.c.status == "pending", invoices.c.amount), else_=0))


def _invoice_search(query: str):
    """Case-insensitive substring match across the invoices table columns."""
    pattern = f"%{query}%"
    return or_(
        customers.c.name.ilike(pattern),
        customers.c.email.ilike(pattern),
        cast(invoices.c.amount, String).ilike(pattern),
        cast(invoices.c.date, String).ilike(pattern),
        invoices.c.status.ilike(pattern),
    )


def fetch_revenue(engine: Engine) -> List[Revenue]:
    try:
        with engine.connect() as conn:
            rows = conn.execute(select(revenue.c.month, revenue.c.revenue)).mappings().all()
    except SQLAlchemyError as exc:
        logger.exception("Database Error: fetching revenue")
        raise DataFetchError("Failed to fetch revenue data.") from exc

    return [Revenue(month=row["month"], revenue=row["revenue"]) for row in rows]


def fetch_latest_invoices(engine: Engine) -> List[LatestInvoice]:
    stmt = (
        select(
            invoices.c.amount,
            customers.c.name,
            customers.c.image_url,
            customers.c.email,
            invoices.c.id,
        )
        .select_from(invoices.join(customers))
        .order_by(invoices.c.date.desc())
        .limit(LATEST_INVOICES_LIMIT)
    )

    try:
        with engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        logger.exception("Database Error: fetching latest invoices")
        raise DataFetchError("Failed to fetch the latest invoices.") from exc

    return [
        LatestInvoice(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            image_url=row["image_url"],
            amount=format_currency(row["amount"]),
        )
        for row in rows
    ]


def _fetch_one(engine: Engine, stmt):
    with engine.connect() as conn:
        return conn.execute(stmt).mappings().first()


async def fetch_card_data(engine: Engine) -> CardData:
    """
    Counts and paid/pending totals for the overview cards.

    The three statements are independent and run concurrently on the
    thread pool; if any one fails the whole call fails.
    """
    invoice_count_stmt = select(func.count().label("count")).select_from(invoices)
    customer_count_stmt = select(func.count().label("count")).select_from(customers)
    invoice_status_stmt = select(
        _paid_total().label("paid"),
        _pending_total().label("pending"),
    ).select_from(invoices)

    try:
        invoice_count, customer_count, invoice_status = await asyncio.gather(
            run_in_threadpool(_fetch_one, engine, invoice_count_stmt),
            run_in_threadpool(_fetch_one, engine, customer_count_stmt),
            run_in_threadpool(_fetch_one, engine, invoice_status_stmt),
        )
    except SQLAlchemyError as exc:
        logger.exception("Database Error: fetching card data")
        raise DataFetchError("Failed to fetch card data.") from exc

    return CardData(
        number_of_invoices=int(invoice_count["count"] or 0),
        number_of_customers=int(customer_count["count"] or 0),
        total_paid_invoices=format_currency(invoice_status["paid"] or 0),
        total_pending_invoices=format_currency(invoice_status["pending"] or 0),
    )


def fetch_filtered_invoices(
    engine: Engine, query: str, current_page: int
) -> List[InvoicesTableRow]:
    offset = (max(current_page, 1) - 1) * ITEMS_PER_PAGE

    stmt = (
        select(
            invoices.c.id,
            invoices.c.amount,
            invoices.c.date,
            invoices.c.status,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .select_from(invoices.join(customers))
        .where(_invoice_search(query))
        .order_by(invoices.c.date.desc(), invoices.c.id)
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
    )

    try:
        with engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        logger.exception("Database Error: fetching invoices for query %r", query)
        raise DataFetchError("Failed to fetch invoices.") from exc

    return [InvoicesTableRow(**row) for row in rows]


def fetch_invoices_pages(engine: Engine, query: str) -> int:
    """Number of ITEMS_PER_PAGE pages needed for the invoices matching query."""
    stmt = (
        select(func.count())
        .select_from(invoices.join(customers))
        .where(_invoice_search(query))
    )

    try:
        with engine.connect() as conn:
            total = conn.execute(stmt).scalar_one()
    except SQLAlchemyError as exc:
        logger.exception("Database Error: counting invoices for query %r", query)
        raise DataFetchError("Failed to fetch total number of invoices.") from exc

    return math.ceil(int(total or 0) / ITEMS_PER_PAGE)


def fetch_invoice_by_id(engine: Engine, invoice_id: str) -> Optional[InvoiceForm]:
    stmt = select(
        invoices.c.id,
        invoices.c.customer_id,
        invoices.c.amount,
        invoices.c.status,
    ).where(invoices.c.id == invoice_id)

    try:
        with engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
    except SQLAlchemyError as exc:
        logger.exception("Database Error: fetching invoice %s", invoice_id)
        raise DataFetchError("Failed to fetch invoice.") from exc

    if row is None:
        return None

    return InvoiceForm(
        id=row["id"],
        customer_id=row["customer_id"],
        # cents -> dollars
        amount=Decimal(row["amount"]) / 100,
        status=row["status"],
    )


def fetch_customers(engine: Engine) -> List[CustomerField]:
    stmt = select(customers.c.id, customers.c.name).order_by(customers.c.name.asc())

    try:
        with engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        logger.exception("Database Error: fetching customers")
        raise DataFetchError("Failed to fetch all customers.") from exc

    return [CustomerField(id=row["id"], name=row["name"]) for row in rows]


def fetch_filtered_customers(engine: Engine, query: str) -> List[CustomersTableRow]:
    pattern = f"%{query}%"

    stmt = (
        select(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
            func.count(invoices.c.id).label("total_invoices"),
            _pending_total().label("total_pending"),
            _paid_total().label("total_paid"),
        )
        .select_from(customers.outerjoin(invoices))
        .where(
            or_(
                customers.c.name.ilike(pattern),
                customers.c.email.ilike(pattern),
            )
        )
        .group_by(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .order_by(customers.c.name.asc())
    )

    try:
        with engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        logger.exception("Database Error: fetching customers for query %r", query)
        raise DataFetchError("Failed to fetch customer table.") from exc

    return [
        CustomersTableRow(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            image_url=row["image_url"],
            total_invoices=row["total_invoices"] or 0,
            total_pending=format_currency(row["total_pending"]),
            total_paid=format_currency(row["total_paid"]),
        )
        for row in rows
    ]
