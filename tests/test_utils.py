from datetime import date
from decimal import Decimal

from invoice_dashboard.lib.utils import (
    format_currency,
    format_date_to_local,
    generate_pagination,
    generate_y_axis,
)
from invoice_dashboard.models.dashboard import Revenue


def test_format_currency():
    assert format_currency(1234) == "$12.34"
    assert format_currency(123456) == "$1,234.56"
    assert format_currency(0) == "$0.00"
    assert format_currency(None) == "$0.00"
    assert format_currency("1550") == "$15.50"
    assert format_currency(Decimal("99")) == "$0.99"
    assert format_currency(-500) == "-$5.00"


def test_format_date_to_local():
    assert format_date_to_local(date(2026, 10, 17)) == "Oct 17, 2026"
    assert format_date_to_local("2023-06-09") == "Jun 9, 2023"


def test_generate_pagination_lists_all_pages_when_few():
    assert generate_pagination(1, 0) == []
    assert generate_pagination(2, 5) == [1, 2, 3, 4, 5]
    assert generate_pagination(7, 7) == [1, 2, 3, 4, 5, 6, 7]


def test_generate_pagination_near_start():
    assert generate_pagination(2, 10) == [1, 2, 3, "...", 9, 10]


def test_generate_pagination_near_end():
    assert generate_pagination(9, 10) == [1, 2, "...", 8, 9, 10]


def test_generate_pagination_in_middle():
    assert generate_pagination(5, 10) == [1, "...", 4, 5, 6, "...", 10]


def test_generate_y_axis():
    revenue = [Revenue(month="Jan", revenue=2000), Revenue(month="Feb", revenue=3200)]
    labels, top_label = generate_y_axis(revenue)
    assert top_label == 4000
    assert labels == ["$4K", "$3K", "$2K", "$1K", "$0K"]


def test_generate_y_axis_without_revenue():
    assert generate_y_axis([]) == (["$0K"], 0)
