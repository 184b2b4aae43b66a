"""Display formatting shared by every calculator.

Numbers are rendered with ``en-US`` grouping (comma thousands separator, dot
decimal separator) regardless of the request locale; only unit labels and
summary templates are localized.
"""

from __future__ import annotations

from datetime import date, timedelta
from types import MappingProxyType
from typing import Iterable, Mapping

from .utils import round_half_up

DEFAULT_CURRENCY = "USD"

CURRENCY_SYMBOLS: Mapping[str, str] = MappingProxyType(
    {
        "USD": "$",
        "EUR": "€",
        "GBP": "£",
        "MXN": "MX$",
        "BRL": "R$",
        "JPY": "¥",
        "INR": "₹",
        "CAD": "C$",
        "AUD": "A$",
        "CHF": "CHF ",
        "COP": "COL$",
        "ARS": "AR$",
        "PEN": "S/",
        "CLP": "CLP ",
        "CNY": "¥",
        "KRW": "₩",
        "PLN": "zł",
        "TRY": "₺",
        "ZAR": "R",
    }
)

_MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

EMPTY_VALUE = "—"


def currency_symbol(field_units: Mapping[str, str], fields: Iterable[str]) -> str:
    """Return the symbol for the first currency selected among ``fields``."""

    code = DEFAULT_CURRENCY
    for field in fields:
        selected = field_units.get(field)
        if selected:
            code = selected
            break
    return CURRENCY_SYMBOLS.get(code, CURRENCY_SYMBOLS[DEFAULT_CURRENCY])


def format_currency(value: float, symbol: str = "$") -> str:
    """Format ``value`` as money.

    Amounts of 100 or more drop the cents, smaller amounts keep two decimals.
    Negative amounts place the minus sign before the symbol.
    """

    if value == 0:
        return f"{symbol}0"

    magnitude = abs(value)
    if magnitude >= 100:
        text = f"{round_half_up(magnitude):,.0f}"
    else:
        text = f"{round_half_up(magnitude, 2):,.2f}"

    return f"-{symbol}{text}" if value < 0 else f"{symbol}{text}"


def format_number(value: float) -> str:
    """Format a whole number, grouping thousands from 1,000 upwards."""

    if value == 0:
        return "0"
    rounded = round_half_up(value)
    if value < 1000:
        return f"{rounded:.0f}"
    return f"{rounded:,.0f}"


def format_decimal(value: float, places: int = 1) -> str:
    return f"{round_half_up(value, places):.{places}f}"


def format_percent(value: float, places: int = 1) -> str:
    """Format a percentage already expressed on the 0-100 scale."""

    return f"{format_decimal(value, places)}%"


def render_template(template: str | None, replacements: Mapping[str, str]) -> str:
    """Substitute ``{token}`` placeholders in ``template``.

    Unknown tokens are left untouched; a missing template renders as an empty
    string.
    """

    if not template:
        return ""

    rendered = template
    for token, value in replacements.items():
        rendered = rendered.replace(f"{{{token}}}", value)
    return rendered


def tax_freedom_day(year: int, tax_share: float) -> str:
    """Return the ``Mon D`` label of the day taxes for ``year`` are paid off.

    ``tax_share`` is total tax divided by gross income; the label counts that
    share of a 365-day year forward from 1 January.
    """

    offset = int(round_half_up(tax_share * 365)) if tax_share > 0 else 0
    day = date(year, 1, 1) + timedelta(days=offset)
    return f"{_MONTH_ABBREVIATIONS[day.month - 1]} {day.day}"


__all__ = [
    "CURRENCY_SYMBOLS",
    "DEFAULT_CURRENCY",
    "EMPTY_VALUE",
    "currency_symbol",
    "format_currency",
    "format_decimal",
    "format_number",
    "format_percent",
    "render_template",
    "tax_freedom_day",
]
