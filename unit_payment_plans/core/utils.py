from __future__ import annotations

import calendar
import math
from datetime import date
from typing import Optional


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves away from zero.

    Python's built-in ``round`` uses banker's rounding, which would move
    ``x.5`` net prices down half of the time.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def format_currency(value: float, currency: str = "EGP") -> str:
    return f"{currency} {value:,.0f}"


def parse_price(text: Optional[str]) -> float:
    """Parse a free-text price typed in the unit form.

    Grouping separators (commas, spaces, underscores) are ignored and a ``k``
    or ``m`` suffix multiplies by a thousand or a million. Empty input means
    "no price yet" and returns 0.

    Raises
    ------
    ValueError
        If the remaining text is not a number.
    """
    if text is None:
        return 0.0
    cleaned = str(text).strip().lower()
    for sep in (",", " ", "_"):
        cleaned = cleaned.replace(sep, "")
    if not cleaned:
        return 0.0
    factor = 1.0
    if cleaned.endswith("k"):
        factor = 1_000.0
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = 1_000_000.0
        cleaned = cleaned[:-1]
    try:
        value = float(cleaned) * factor
    except ValueError as exc:
        raise ValueError(f"Invalid price: {text}") from exc
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"Invalid price: {text}")
    return value


def timing_label(month: int) -> str:
    return "At Contract" if month == 0 else f"Month {month}"


def add_months(dt: date, months: int) -> date:
    """Return the date ``months`` after ``dt``, clamping the day to the month end."""
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def due_date(month: int, start: date) -> str:
    return add_months(start, month).strftime("%d %b %Y")
