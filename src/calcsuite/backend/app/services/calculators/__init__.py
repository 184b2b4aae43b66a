"""Calculator implementations and the helpers they share."""

from .btu import calculate_btu
from .formatting import (
    currency_symbol,
    format_currency,
    format_number,
    format_percent,
    render_template,
)
from .income_tax import calculate_income_tax
from .paycheck import calculate_paycheck
from .units import convert_to_base
from .utils import round_currency, round_half_up, round_rate, round_to_step
from .water_intake import calculate_water_intake

__all__ = [
    "calculate_btu",
    "calculate_income_tax",
    "calculate_paycheck",
    "calculate_water_intake",
    "convert_to_base",
    "currency_symbol",
    "format_currency",
    "format_number",
    "format_percent",
    "render_template",
    "round_currency",
    "round_half_up",
    "round_rate",
    "round_to_step",
]
