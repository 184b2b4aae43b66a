"""Federal income tax estimate with FICA, self-employment and state add-ons."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from calcsuite.backend.app.models import (
    CalculatorPayload,
    CalculatorResult,
    IncomeTaxInputs,
    ResultMetadata,
)
from calcsuite.backend.config.year_config import (
    TaxYearConfiguration,
    default_year,
    load_year_configuration,
)

from .federal import (
    BracketSlice,
    calculate_bracket_tax,
    calculate_payroll_taxes,
    calculate_self_employment_tax,
)
from .formatting import (
    EMPTY_VALUE,
    currency_symbol,
    format_currency,
    format_decimal,
    format_percent,
    render_template,
    tax_freedom_day,
)
from .utils import round_currency, round_half_up, round_rate

_LOGGER = logging.getLogger(__name__)

WORK_HOURS_PER_YEAR = 2080
DEFAULT_SUMMARY = (
    "Your estimated {year} federal tax is {totalTax} on {taxableIncome} taxable "
    "income, for an effective rate of {effectiveRate}."
)


def resolve_tax_year(payload: CalculatorPayload) -> TaxYearConfiguration:
    """Load the configuration for the payload year, or the latest configured year."""

    year = payload.year if payload.year is not None else default_year()
    return load_year_configuration(year)


def _bracket_label(rate: float) -> str:
    return f"{format_decimal(rate * 100, 0)}%"


def _bracket_row(entry: BracketSlice, symbol: str) -> dict[str, str]:
    upper = "∞" if entry.upper is None else format_currency(entry.upper, symbol)
    return {
        "bracket": _bracket_label(entry.rate),
        "range": f"{format_currency(entry.lower, symbol)} – {upper}",
        "taxableInBracket": (
            format_currency(entry.taxable, symbol) if entry.taxable > 0 else EMPTY_VALUE
        ),
        "taxInBracket": format_currency(entry.tax, symbol) if entry.tax > 0 else EMPTY_VALUE,
        "cumulativeTax": (
            format_currency(entry.cumulative, symbol) if entry.cumulative > 0 else EMPTY_VALUE
        ),
    }


def calculate_income_tax(payload: CalculatorPayload | Mapping[str, Any]) -> CalculatorResult:
    """Estimate annual federal, payroll and optional state tax."""

    payload = CalculatorPayload.coerce(payload)
    inputs = IncomeTaxInputs.from_values(payload.values)
    text = payload.t

    total_gross = inputs.total_gross
    if total_gross <= 0:
        _LOGGER.debug("Income tax calculation skipped: total gross income is not positive")
        return CalculatorResult.invalid()

    config = resolve_tax_year(payload)
    status = config.federal.status(inputs.filing_status)

    self_employment_tax = 0.0
    if inputs.self_employed:
        self_employment_tax = calculate_self_employment_tax(
            inputs.self_employment_income, config.self_employment, config.payroll
        )
    self_employment_deduction = self_employment_tax * config.self_employment.deductible_share

    student_loan = min(
        inputs.student_loan_interest, config.adjustments.student_loan_interest_cap
    )
    above_the_line = (
        inputs.retirement_401k
        + inputs.ira_contribution
        + inputs.hsa_contribution
        + student_loan
        + self_employment_deduction
    )
    adjusted_gross = total_gross - above_the_line

    standard_deduction = status.standard_deduction
    itemized = inputs.deduction_type == "itemized"
    deduction = max(inputs.itemized_deductions, 0.0) if itemized else standard_deduction
    taxable_income = max(0.0, adjusted_gross - deduction)

    breakdown = calculate_bracket_tax(taxable_income, status)
    marginal_rate = breakdown.marginal_rate

    total_credits = (
        inputs.children_under_17 * config.credits.child_under_17
        + inputs.children_other * config.credits.other_dependent
    )
    federal_tax = max(0.0, breakdown.total - total_credits)

    payroll = calculate_payroll_taxes(inputs.gross_income, status, config.payroll)

    state_tax = 0.0
    if inputs.include_state:
        state_tax = max(0.0, adjusted_gross * inputs.state_rate / 100)

    total_tax = federal_tax + payroll.total + self_employment_tax + state_tax
    effective_rate = total_tax / total_gross * 100
    federal_effective_rate = federal_tax / total_gross * 100
    after_tax = total_gross - total_tax
    monthly_tax = total_tax / 12
    tax_per_hour = total_tax / WORK_HOURS_PER_YEAR
    percent_kept = after_tax / total_gross * 100
    deduction_savings = deduction * marginal_rate

    symbol = currency_symbol(payload.field_units, ("grossIncome",))
    per_hour = text.label("perHour", "/hr")
    if itemized:
        deduction_label = (
            f"{text.label('itemized', 'Itemized')}: "
            f"{format_currency(inputs.itemized_deductions, symbol)}"
        )
    else:
        deduction_label = (
            f"{text.label('standard', 'Standard')}: "
            f"{format_currency(standard_deduction, symbol)}"
        )

    chart_data = [
        {"bracket": _bracket_label(entry.rate), "taxAmount": round_half_up(entry.tax)}
        for entry in breakdown.slices
        if entry.taxable > 0
    ]
    table_data = [_bracket_row(entry, symbol) for entry in breakdown.slices]

    values = {
        "totalTax": round_currency(total_tax),
        "effectiveRate": round_rate(effective_rate),
        "federalEffectiveRate": round_rate(federal_effective_rate),
        "marginalRate": round_rate(marginal_rate * 100),
        "taxableIncome": round_half_up(taxable_income),
        "federalIncomeTax": round_currency(federal_tax),
        "socialSecurity": round_currency(payroll.social_security),
        "medicare": round_currency(payroll.medicare),
        "ficaTotal": round_currency(payroll.total),
        "selfEmploymentTax": round_currency(self_employment_tax),
        "stateTax": round_currency(state_tax),
        "childTaxCredit": total_credits,
        "afterTaxIncome": round_currency(after_tax),
        "monthlyTax": round_currency(monthly_tax),
        "taxPerHour": round_currency(tax_per_hour),
        "percentKept": round_half_up(percent_kept, 1),
        "adjustedGrossIncome": round_currency(adjusted_gross),
        "totalAboveLine": round_currency(above_the_line),
        "deductionUsed": round_currency(deduction),
        "deductionSavings": round_currency(deduction_savings),
    }

    formatted = {
        "totalTax": format_currency(total_tax, symbol),
        "effectiveRate": format_percent(effective_rate),
        "federalEffectiveRate": format_percent(federal_effective_rate),
        "marginalRate": format_percent(marginal_rate * 100, 0),
        "taxableIncome": format_currency(taxable_income, symbol),
        "federalIncomeTax": format_currency(federal_tax, symbol),
        "socialSecurity": format_currency(payroll.social_security, symbol),
        "medicare": format_currency(payroll.medicare, symbol),
        "ficaTotal": format_currency(payroll.total, symbol),
        "selfEmploymentTax": (
            format_currency(self_employment_tax, symbol) if inputs.self_employed else EMPTY_VALUE
        ),
        "stateTax": format_currency(state_tax, symbol) if inputs.include_state else EMPTY_VALUE,
        "childTaxCredit": (
            f"-{format_currency(total_credits, symbol)}" if total_credits > 0 else EMPTY_VALUE
        ),
        "totalCredits": (
            format_currency(total_credits, symbol) if total_credits > 0 else EMPTY_VALUE
        ),
        "afterTaxIncome": format_currency(after_tax, symbol),
        "monthlyTax": format_currency(monthly_tax, symbol),
        "taxPerHour": f"{format_currency(tax_per_hour, symbol)}{per_hour}",
        "percentKept": format_percent(percent_kept),
        "taxFreedomDay": tax_freedom_day(config.year, total_tax / total_gross),
        "adjustedGrossIncome": format_currency(adjusted_gross, symbol),
        "totalAboveLine": (
            format_currency(above_the_line, symbol) if above_the_line > 0 else EMPTY_VALUE
        ),
        "deductionUsed": deduction_label,
        "deductionSavings": format_currency(deduction_savings, symbol),
    }

    summary = render_template(
        text.template() or DEFAULT_SUMMARY,
        {
            "year": str(config.year),
            "totalTax": formatted["totalTax"],
            "taxableIncome": formatted["taxableIncome"],
            "effectiveRate": formatted["effectiveRate"],
        },
    )

    return CalculatorResult(
        values=values,
        formatted=formatted,
        summary=summary,
        is_valid=True,
        metadata=ResultMetadata(chart_data=chart_data, table_data=table_data),
    )


__all__ = ["DEFAULT_SUMMARY", "calculate_income_tax", "resolve_tax_year"]
