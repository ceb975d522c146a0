# invoice_dashboard/lib/utils.py
"""Display helpers shared by the query functions and the dashboard pages."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Sequence, Tuple, Union

from invoice_dashboard.models.dashboard import Revenue

GAP = "..."
PageLink = Union[int, str]


def format_currency(cents: Union[int, Decimal, str, None]) -> str:
    """Format an amount in cents as US dollars, e.g. 123456 -> "$1,234.56"."""
    if cents is None or cents == "":
        cents = 0
    dollars = Decimal(str(cents)) / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def format_date_to_local(value: Union[date, datetime, str]) -> str:
    """en-US medium date, e.g. "Oct 17, 2026"."""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return f"{value:%b} {value.day}, {value.year}"


def generate_pagination(current_page: int, total_pages: int) -> List[PageLink]:
    # Few enough pages to show them all
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        return [1, 2, 3, GAP, total_pages - 1, total_pages]

    if current_page >= total_pages - 2:
        return [1, 2, GAP, total_pages - 2, total_pages - 1, total_pages]

    return [
        1,
        GAP,
        current_page - 1,
        current_page,
        current_page + 1,
        GAP,
        total_pages,
    ]


def generate_y_axis(revenue: Sequence[Revenue]) -> Tuple[List[str], int]:
    """
    Labels for the revenue chart's y-axis, highest first, in $1K steps.

    Returns (labels, top_label) where top_label is the highest revenue
    rounded up to the next thousand.
    """
    highest = max((month.revenue for month in revenue), default=0)
    top_label = -(-highest // 1000) * 1000

    labels = [f"${i // 1000}K" for i in range(top_label, -1, -1000)]
    return labels, top_label
