# invoice_dashboard/models/invoices.py

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

InvoiceStatus = Literal["pending", "paid"]

# Form field name -> message shown under that field, whatever the failure
FIELD_ERROR_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}

FieldErrors = Dict[str, List[str]]

# Largest amount whose cents fit a signed 64-bit INTEGER column
MAX_AMOUNT = Decimal("92233720368547758.07")


class InvoiceFormSchema(BaseModel):
    """
    Fields a user may submit when creating or updating an invoice.

    id and date are never taken from the form; the server assigns them.
    """

    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT)
    status: InvoiceStatus

    @field_validator("amount")
    @classmethod
    def amount_has_whole_cents(cls, value: Decimal) -> Decimal:
        if to_cents(value) < 1:
            raise ValueError("amount rounds to less than one cent")
        return value


class FormState(BaseModel):
    errors: FieldErrors = Field(default_factory=dict)
    message: Optional[str] = None


def validate_invoice_form(
    raw: Mapping[str, Any],
) -> Tuple[Optional[InvoiceFormSchema], FieldErrors]:
    """
    Validate raw form values (strings, or missing) against InvoiceFormSchema.

    Returns the parsed record and an empty mapping on success, otherwise None
    and a mapping of form field name to its error messages.
    """
    values = {name: raw.get(name) for name in FIELD_ERROR_MESSAGES}

    try:
        return InvoiceFormSchema.model_validate(values), {}
    except ValidationError as exc:
        errors: FieldErrors = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            message = FIELD_ERROR_MESSAGES.get(field, error["msg"])
            messages = errors.setdefault(field, [])
            if message not in messages:
                messages.append(message)
        return None, errors


def to_cents(amount: Decimal) -> int:
    """Dollars -> integer cents, rounded half-up to the nearest cent."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    """An invoice as loaded into the edit form; amount is in dollars."""

    id: str
    customer_id: str
    amount: Decimal
    status: InvoiceStatus


class InvoicesTableRow(BaseModel):
    id: str
    # Integer cents, formatted by the page
    amount: int
    date: date
    status: InvoiceStatus
    name: str
    email: str
    image_url: str


class InvoicesPage(BaseModel):
    items: List[InvoicesTableRow]
    page: int
    total_pages: int


class LatestInvoice(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    amount: str
