from decimal import Decimal

import pytest

from invoice_dashboard.lib.utils import format_currency
from invoice_dashboard.models.invoices import to_cents, validate_invoice_form

AMOUNT_ERROR = "Please enter an amount greater than $0."
STATUS_ERROR = "Please select an invoice status."
CUSTOMER_ERROR = "Please select a customer."


def form(**overrides):
    values = {"customerId": "abc", "amount": "15.50", "status": "paid"}
    values.update(overrides)
    return values


def test_valid_form_is_parsed():
    data, errors = validate_invoice_form(form())
    assert errors == {}
    assert data.customer_id == "abc"
    assert data.amount == Decimal("15.50")
    assert data.status == "paid"


@pytest.mark.parametrize(
    "amount",
    ["0", "-1", "-0.01", "", "abc", "NaN", "inf", None, "0.004", "1e20", "1e30", "92233720368547758.08"],
)
def test_invalid_or_unstorable_amount_is_rejected(amount):
    data, errors = validate_invoice_form(form(amount=amount))
    assert data is None
    assert errors == {"amount": [AMOUNT_ERROR]}


def test_smallest_and_largest_storable_amounts_are_accepted():
    data, errors = validate_invoice_form(form(amount="0.005"))
    assert errors == {}
    assert to_cents(data.amount) == 1

    data, errors = validate_invoice_form(form(amount="92233720368547758.07"))
    assert errors == {}
    assert to_cents(data.amount) == 2**63 - 1


@pytest.mark.parametrize("status", ["", "PAID", "overdue", "draft", None])
def test_status_outside_closed_set_is_rejected(status):
    data, errors = validate_invoice_form(form(status=status))
    assert data is None
    assert errors == {"status": [STATUS_ERROR]}


@pytest.mark.parametrize("customer_id", ["", None, 42])
def test_missing_or_mistyped_customer_is_rejected(customer_id):
    data, errors = validate_invoice_form(form(customerId=customer_id))
    assert data is None
    assert errors == {"customerId": [CUSTOMER_ERROR]}


def test_empty_form_reports_every_field():
    data, errors = validate_invoice_form({})
    assert data is None
    assert errors == {
        "customerId": [CUSTOMER_ERROR],
        "amount": [AMOUNT_ERROR],
        "status": [STATUS_ERROR],
    }


def test_id_and_date_are_not_read_from_the_form():
    data, errors = validate_invoice_form(form(id="forged", date="1999-01-01"))
    assert errors == {}
    assert "id" not in data.model_dump()
    assert "date" not in data.model_dump()


def test_amount_round_trips_through_cents():
    cents = to_cents(Decimal("12.34"))
    assert cents == 1234
    assert format_currency(cents) == "$12.34"


def test_to_cents_rounds_half_up():
    assert to_cents(Decimal("15.50")) == 1550
    assert to_cents(Decimal("0.005")) == 1
    assert to_cents(Decimal("19.999")) == 2000
