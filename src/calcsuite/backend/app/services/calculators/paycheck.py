"""Take-home pay per paycheck after federal, state and payroll withholding."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping

from calcsuite.backend.app.models import (
    CalculatorPayload,
    CalculatorResult,
    PaycheckInputs,
    ResultMetadata,
)

from .federal import calculate_bracket_tax, calculate_payroll_taxes
from .formatting import (
    EMPTY_VALUE,
    currency_symbol,
    format_currency,
    format_percent,
    render_template,
    tax_freedom_day,
)
from .income_tax import resolve_tax_year
from .utils import round_currency, round_half_up, round_rate

_LOGGER = logging.getLogger(__name__)

PAY_PERIODS: Mapping[str, int] = MappingProxyType(
    {"weekly": 52, "biweekly": 26, "semimonthly": 24, "monthly": 12}
)
WEEKS_PER_YEAR = 52
WORK_HOURS_PER_YEAR = 2080
WORK_DAYS_PER_YEAR = 260
DEFAULT_SUMMARY = (
    "Your take-home pay is {netPay} per paycheck ({annualNet} annually) from a "
    "gross of {grossPay} after {totalTax} in total taxes."
)


def _annual_gross(inputs: PaycheckInputs) -> float | None:
    if inputs.pay_type == "hourly":
        if inputs.hourly_rate <= 0 or inputs.hours_per_week < 0:
            return None
        annual = inputs.hourly_rate * inputs.hours_per_week * WEEKS_PER_YEAR
        if inputs.include_overtime:
            annual += (
                inputs.hourly_rate
                * inputs.overtime_rate
                * inputs.overtime_hours
                * WEEKS_PER_YEAR
            )
        return annual if annual > 0 else None

    if inputs.gross_salary <= 0:
        return None
    return inputs.gross_salary


def calculate_paycheck(payload: CalculatorPayload | Mapping[str, Any]) -> CalculatorResult:
    """Split one paycheck into taxes, pre-tax deductions and net pay."""

    payload = CalculatorPayload.coerce(payload)
    inputs = PaycheckInputs.from_values(payload.values)
    text = payload.t

    annual_gross = _annual_gross(inputs)
    if annual_gross is None:
        _LOGGER.debug("Paycheck calculation skipped: pay rate must be positive")
        return CalculatorResult.invalid()

    config = resolve_tax_year(payload)
    status = config.federal.status(inputs.filing_status)
    periods = PAY_PERIODS[inputs.pay_frequency]

    gross_per_paycheck = annual_gross / periods
    pre_tax_per_paycheck = inputs.pre_tax_per_paycheck
    annual_pre_tax = pre_tax_per_paycheck * periods

    allowance_deduction = inputs.allowances * config.withholding.allowance_amount
    annual_taxable = max(
        0.0,
        annual_gross - annual_pre_tax - status.standard_deduction - allowance_deduction,
    )
    annual_federal = calculate_bracket_tax(annual_taxable, status).total
    federal_per_paycheck = annual_federal / periods

    state_rate = config.withholding.state_rate(inputs.state)
    annual_state = max(0.0, (annual_gross - annual_pre_tax) * state_rate)
    state_per_paycheck = annual_state / periods

    payroll = calculate_payroll_taxes(annual_gross, status, config.payroll)
    social_security_per_paycheck = payroll.social_security / periods
    medicare_per_paycheck = payroll.medicare / periods

    tax_per_paycheck = (
        federal_per_paycheck
        + state_per_paycheck
        + social_security_per_paycheck
        + medicare_per_paycheck
    )
    deductions_per_paycheck = tax_per_paycheck + pre_tax_per_paycheck
    net_per_paycheck = gross_per_paycheck - deductions_per_paycheck

    annual_net = net_per_paycheck * periods
    annual_tax = tax_per_paycheck * periods
    effective_rate = annual_tax / annual_gross * 100
    percent_kept = annual_net / annual_gross * 100
    fica_percent = payroll.total / annual_gross * 100
    net_hourly = annual_net / WORK_HOURS_PER_YEAR
    daily_net = annual_net / WORK_DAYS_PER_YEAR
    monthly_net = annual_net / 12
    deduction_savings = annual_pre_tax * effective_rate / 100

    symbol = currency_symbol(payload.field_units, ("grossSalary", "hourlyRate"))

    chart_rows = (
        ("Take-Home", net_per_paycheck),
        ("Federal", federal_per_paycheck),
        ("State", state_per_paycheck),
        ("SS", social_security_per_paycheck),
        ("Medicare", medicare_per_paycheck),
        ("Deductions", pre_tax_per_paycheck),
    )
    chart_data = [
        {"label": text.label(label, label), "amount": round_half_up(amount)}
        for label, amount in chart_rows
    ]

    line_items = (
        ("Gross Pay", gross_per_paycheck),
        ("Federal Tax", -federal_per_paycheck),
        ("State Tax", -state_per_paycheck),
        ("Social Security", -social_security_per_paycheck),
        ("Medicare", -medicare_per_paycheck),
        ("401(k)", -inputs.pre_tax_401k),
        ("Health Insurance", -inputs.pre_tax_health),
        ("HSA", -inputs.pre_tax_hsa),
        ("Other Pre-Tax", -inputs.other_pre_tax),
        ("Net Pay", net_per_paycheck),
    )
    table_data = [
        {
            "item": text.label(name, name),
            "perPaycheck": format_currency(amount, symbol),
            "monthly": format_currency(amount * periods / 12, symbol),
            "annual": format_currency(amount * periods, symbol),
        }
        for name, amount in line_items
    ]

    values = {
        "netPay": round_currency(net_per_paycheck),
        "grossPay": round_currency(gross_per_paycheck),
        "federalTax": round_currency(federal_per_paycheck),
        "stateTax": round_currency(state_per_paycheck),
        "socialSecurity": round_currency(social_security_per_paycheck),
        "medicare": round_currency(medicare_per_paycheck),
        "totalTax": round_currency(tax_per_paycheck),
        "totalDeductions": round_currency(deductions_per_paycheck),
        "effectiveTaxRate": round_rate(effective_rate),
        "annualNet": round_currency(annual_net),
        "annualGross": round_currency(annual_gross),
        "annualTax": round_currency(annual_tax),
        "annualPreTax": round_currency(annual_pre_tax),
        "percentKept": round_half_up(percent_kept, 1),
        "netHourly": round_currency(net_hourly),
        "dailyNet": round_currency(daily_net),
        "monthlyNet": round_currency(monthly_net),
        "ficaPercent": round_rate(fica_percent),
        "periodsPerYear": periods,
    }

    formatted = {
        "netPay": format_currency(net_per_paycheck, symbol),
        "grossPay": format_currency(gross_per_paycheck, symbol),
        "federalTax": format_currency(federal_per_paycheck, symbol),
        "stateTax": (
            format_currency(state_per_paycheck, symbol) if state_rate > 0 else f"{symbol}0"
        ),
        "socialSecurity": format_currency(social_security_per_paycheck, symbol),
        "medicare": format_currency(medicare_per_paycheck, symbol),
        "totalTax": format_currency(tax_per_paycheck, symbol),
        "totalDeductions": format_currency(deductions_per_paycheck, symbol),
        "effectiveTaxRate": format_percent(effective_rate),
        "annualNet": format_currency(annual_net, symbol),
        "annualGross": format_currency(annual_gross, symbol),
        "annualTax": format_currency(annual_tax, symbol),
        "percentKept": format_percent(percent_kept),
        "netHourly": f"{format_currency(net_hourly, symbol)}{text.label('perHour', '/hr')}",
        "dailyNet": f"{format_currency(daily_net, symbol)}{text.label('perDay', '/day')}",
        "monthlyNet": format_currency(monthly_net, symbol),
        "taxFreedomDay": tax_freedom_day(config.year, annual_tax / annual_gross),
        "ficaPercent": format_percent(fica_percent),
        "payFrequency": text.label(inputs.pay_frequency, inputs.pay_frequency),
        "deductionSavings": (
            format_currency(deduction_savings, symbol) if annual_pre_tax > 0 else EMPTY_VALUE
        ),
        "annualPreTax": (
            format_currency(annual_pre_tax, symbol) if annual_pre_tax > 0 else EMPTY_VALUE
        ),
    }

    summary = render_template(
        text.template() or DEFAULT_SUMMARY,
        {
            "netPay": formatted["netPay"],
            "annualNet": formatted["annualNet"],
            "grossPay": formatted["grossPay"],
            "totalTax": formatted["totalTax"],
        },
    )

    return CalculatorResult(
        values=values,
        formatted=formatted,
        summary=summary,
        is_valid=True,
        metadata=ResultMetadata(chart_data=chart_data, table_data=table_data),
    )


__all__ = ["DEFAULT_SUMMARY", "PAY_PERIODS", "calculate_paycheck"]
