"""Formatting utilities for currency and date display."""

from __future__ import annotations

from datetime import date
from typing import Optional, Union


def format_currency(
    amount: Optional[Union[float, int]],
    include_sign: bool = True,
    show_cents: bool = True,
) -> str:
    """Format a currency amount with thousands separators.

    Args:
        amount: The amount to format; ``None`` and NaN render as zero
        include_sign: Whether to include the dollar sign
        show_cents: Whether to show two decimal places

    Returns:
        Formatted currency string (e.g. "$1,234.56" or "1,235")

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(None)
        '$0.00'
        >>> format_currency(-42.5)
        '-$42.50'
    """
    if amount is None or amount != amount:
        amount = 0.0
    formatted = f"{abs(amount):,.2f}" if show_cents else f"{abs(amount):,.0f}"
    sign = "-" if amount < 0 else ""
    return f"{sign}${formatted}" if include_sign else f"{sign}{formatted}"


def format_date(value: Optional[date]) -> str:
    """Short human-readable date, e.g. ``'Jan 05, 2024'``."""
    if value is None:
        return ''
    return value.strftime('%b %d, %Y')
