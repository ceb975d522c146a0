# invoice_dashboard/services/actions.py
"""
Write-side actions behind the invoice form.

Each action validates the submitted fields, issues a single statement inside
a transaction and then notifies the cache layer. The request-boundary side
effects (cache revalidation, HTTP redirect) are passed in by the caller.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, TypeVar, Union
from zoneinfo import ZoneInfo

from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from invoice_dashboard.core.settings import get_settings
from invoice_dashboard.db.schema import invoices
from invoice_dashboard.models.invoices import (
    FormState,
    to_cents,
    validate_invoice_form,
)

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"

T = TypeVar("T")
Revalidate = Callable[[str], None]


def server_today() -> date:
    return datetime.now(ZoneInfo(get_settings().timezone)).date()


def create_invoice(
    engine: Engine,
    form: Mapping[str, Any],
    *,
    revalidate_path: Revalidate,
    redirect: Callable[[str], T],
    today: Optional[date] = None,
) -> Union[FormState, T]:
    validated, errors = validate_invoice_form(form)
    if validated is None:
        return FormState(
            errors=errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    amount_in_cents = to_cents(validated.amount)
    invoice_date = today or server_today()

    try:
        with engine.begin() as conn:
            conn.execute(
                insert(invoices).values(
                    customer_id=validated.customer_id,
                    amount=amount_in_cents,
                    status=validated.status,
                    date=invoice_date,
                )
            )
    except SQLAlchemyError:
        logger.exception("Database Error: creating invoice for customer %s", validated.customer_id)
        return FormState(message="Database Error: Failed to Create Invoice.")

    logger.info(
        "Created invoice for customer %s: %d cents, %s",
        validated.customer_id,
        amount_in_cents,
        validated.status,
    )
    revalidate_path(INVOICES_PATH)
    return redirect(INVOICES_PATH)


def update_invoice(
    engine: Engine,
    invoice_id: str,
    form: Mapping[str, Any],
    *,
    revalidate_path: Revalidate,
    redirect: Callable[[str], T],
) -> Union[FormState, T]:
    validated, errors = validate_invoice_form(form)
    if validated is None:
        return FormState(
            errors=errors,
            message="Missing Fields. Failed to Update Invoice.",
        )

    amount_in_cents = to_cents(validated.amount)

    try:
        with engine.begin() as conn:
            result = conn.execute(
                update(invoices)
                .where(invoices.c.id == invoice_id)
                .values(
                    customer_id=validated.customer_id,
                    amount=amount_in_cents,
                    status=validated.status,
                )
            )
    except SQLAlchemyError:
        logger.exception("Database Error: updating invoice %s", invoice_id)
        return FormState(message="Database Error: Failed to Update Invoice.")

    if result.rowcount == 0:
        logger.warning("Update matched no invoice with id %s", invoice_id)

    revalidate_path(INVOICES_PATH)
    return redirect(INVOICES_PATH)


def delete_invoice(
    engine: Engine,
    invoice_id: str,
    *,
    revalidate_path: Revalidate,
) -> None:
    """
    Delete one invoice. Failures are logged and never raised to the caller.
    """
    try:
        with engine.begin() as conn:
            result = conn.execute(delete(invoices).where(invoices.c.id == invoice_id))
    except SQLAlchemyError:
        logger.exception("Error deleting invoice %s", invoice_id)
        return

    if result.rowcount == 0:
        logger.error("Error deleting invoice %s: no such invoice", invoice_id)
        return

    revalidate_path(INVOICES_PATH)
