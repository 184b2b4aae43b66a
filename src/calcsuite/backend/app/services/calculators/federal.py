"""Federal income tax, FICA and self-employment helpers.

Both the income tax and the paycheck calculators compute federal liability
from the same tax-year tables, so bracket iteration and payroll taxes live
here and take the loaded :class:`TaxYearConfiguration` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

from calcsuite.backend.config.year_config import (
    FilingStatusConfig,
    PayrollTaxConfig,
    SelfEmploymentConfig,
)


@dataclass(frozen=True)
class BracketSlice:
    """Portion of taxable income that falls into one bracket."""

    rate: float
    lower: float
    upper: float | None
    taxable: float
    tax: float
    cumulative: float


@dataclass(frozen=True)
class BracketBreakdown:
    """Federal income tax before credits, with one slice per bracket."""

    slices: tuple[BracketSlice, ...]
    total: float
    marginal_rate: float


@dataclass(frozen=True)
class PayrollTaxes:
    """Employee share of Social Security and Medicare."""

    social_security: float
    medicare: float

    @property
    def total(self) -> float:
        return self.social_security + self.medicare


def calculate_bracket_tax(
    taxable_income: float, status: FilingStatusConfig
) -> BracketBreakdown:
    """Apply the progressive ladder for ``status`` to ``taxable_income``.

    Every bracket is reported, including those the income never reaches, so
    callers can render the full table. The marginal rate is the rate of the
    highest bracket holding a positive slice.
    """

    slices: list[BracketSlice] = []
    total = 0.0
    marginal_rate = 0.0

    for bracket in status.bracket_ranges():
        if taxable_income <= bracket.lower:
            slices.append(
                BracketSlice(
                    rate=bracket.rate,
                    lower=bracket.lower,
                    upper=bracket.upper,
                    taxable=0.0,
                    tax=0.0,
                    cumulative=total,
                )
            )
            continue

        ceiling = taxable_income if bracket.upper is None else min(taxable_income, bracket.upper)
        taxable = ceiling - bracket.lower
        tax = taxable * bracket.rate
        total += tax
        if taxable > 0:
            marginal_rate = bracket.rate
        slices.append(
            BracketSlice(
                rate=bracket.rate,
                lower=bracket.lower,
                upper=bracket.upper,
                taxable=taxable,
                tax=tax,
                cumulative=total,
            )
        )

    return BracketBreakdown(slices=tuple(slices), total=total, marginal_rate=marginal_rate)


def calculate_payroll_taxes(
    wages: float, status: FilingStatusConfig, payroll: PayrollTaxConfig
) -> PayrollTaxes:
    """Return FICA on ``wages``, including the additional Medicare surtax."""

    if wages <= 0:
        return PayrollTaxes(social_security=0.0, medicare=0.0)

    social_security = min(wages, payroll.social_security_wage_base) * payroll.social_security_rate
    medicare = wages * payroll.medicare_rate
    threshold = status.additional_medicare_threshold
    if wages > threshold:
        medicare += (wages - threshold) * payroll.additional_medicare_rate

    return PayrollTaxes(social_security=social_security, medicare=medicare)


def calculate_self_employment_tax(
    net_income: float,
    self_employment: SelfEmploymentConfig,
    payroll: PayrollTaxConfig,
) -> float:
    """Return the combined Social Security and Medicare self-employment tax."""

    if net_income <= 0:
        return 0.0

    base = net_income * self_employment.net_earnings_factor
    capped = min(base, payroll.social_security_wage_base)
    social_security = capped * self_employment.social_security_rate
    medicare = base * self_employment.medicare_rate
    return social_security + medicare


__all__ = [
    "BracketBreakdown",
    "BracketSlice",
    "PayrollTaxes",
    "calculate_bracket_tax",
    "calculate_payroll_taxes",
    "calculate_self_employment_tax",
]
