"""Formatting helpers for rental cost output.

Amounts are shown the way the booking portal shows them to tenants:
currency code, thousands separators and always two decimals
(e.g. ``'KES 23,741.94'``).
"""

from __future__ import annotations

from datetime import date, datetime

DEFAULT_CURRENCY = "KES"


def format_currency(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount as ``'<CUR> 1,234.50'``; negatives keep a leading sign."""
    if amount < 0:
        return f"-{currency} {abs(amount):,.2f}"
    return f"{currency} {amount:,.2f}"


def format_quick_price(price_per_month: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Format a monthly price for a room card, e.g. ``'KES 15,000.00/mo'``."""
    return f"{format_currency(price_per_month, currency)}/mo"


def format_payment_date(value: date | str) -> str:
    """Format a due date as ``'1 February 2024'``."""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    elif isinstance(value, datetime):
        value = value.date()
    return f"{value.day} {value:%B %Y}"
