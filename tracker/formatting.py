"""Display formatting for amounts, dates and month keys.

Amounts are rendered for a single locale (Indonesian Rupiah): ``.`` groups
thousands and no minor units are shown. Rounding is half away from zero on
the exact binary value, which is what browsers do for ``toFixed``.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float]

CURRENCY_SYMBOL = "Rp"
THOUSANDS_SEPARATOR = "."


def _round(value: Number, places: int = 0) -> Decimal:
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_currency(amount: Number, symbol: str = CURRENCY_SYMBOL) -> str:
    """``1500000`` -> ``"Rp 1.500.000"``; negatives get a leading minus."""
    rounded = int(_round(abs(amount)))
    digits = f"{rounded:,}".replace(",", THOUSANDS_SEPARATOR)
    sign = "-" if amount < 0 and rounded else ""
    return f"{sign}{symbol} {digits}"


def format_compact(amount: Number) -> str:
    """Short chart label: ``2.5M``, ``2K`` or the plain number."""
    if amount >= 1_000_000:
        return f"{_round(amount / 1_000_000, 1)}M"
    if amount >= 1_000:
        return f"{_round(amount / 1_000)}K"
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def format_date(iso_date: str) -> str:
    try:
        d = date.fromisoformat(iso_date)
    except (TypeError, ValueError):
        return iso_date
    return f"{d.day} {d.strftime('%b %Y')}"


def short_month(year: int, month: int) -> str:
    return date(year, month, 1).strftime("%b")


def month_label(period_key: str) -> str:
    """``"2024-03"`` -> ``"March 2024"``."""
    try:
        year, month = (int(part) for part in period_key.split("-")[:2])
        return date(year, month, 1).strftime("%B %Y")
    except ValueError:
        return period_key
