"""Pydantic models describing the federal tax year configuration schema."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self

FILING_STATUSES: tuple[str, ...] = (
    "single",
    "marriedJoint",
    "marriedSeparate",
    "headOfHousehold",
)


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TaxBracket(ImmutableModel):
    """Represents a single progressive tax bracket."""

    upper_bound: float | None = Field(default=None, alias="upper")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> Self:
        if self.rate < 0:
            raise ConfigurationError("Tax rates must be non-negative")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self


class BracketRange(ImmutableModel):
    """A bracket resolved to explicit ``lower``/``upper`` bounds."""

    lower: float
    upper: float | None
    rate: float


class FilingStatusConfig(ImmutableModel):
    """Bracket ladder and thresholds for one filing status."""

    brackets: Sequence[TaxBracket]
    standard_deduction: float
    additional_medicare_threshold: float

    @model_validator(mode="after")
    def _validate_status(self) -> Self:
        if self.standard_deduction < 0:
            raise ConfigurationError("Standard deductions must be non-negative")
        if self.additional_medicare_threshold <= 0:
            raise ConfigurationError(
                "Additional Medicare thresholds must be positive values"
            )
        _validate_bracket_sequence(self.brackets)
        return self

    def bracket_ranges(self) -> tuple[BracketRange, ...]:
        ranges: list[BracketRange] = []
        lower = 0.0
        for bracket in self.brackets:
            ranges.append(
                BracketRange(lower=lower, upper=bracket.upper_bound, rate=bracket.rate)
            )
            if bracket.upper_bound is not None:
                lower = bracket.upper_bound
        return tuple(ranges)


class FederalConfig(ImmutableModel):
    """Federal income tax tables keyed by filing status."""

    filing_statuses: Mapping[str, FilingStatusConfig]
    default_filing_status: str = "single"

    @model_validator(mode="after")
    def _validate_statuses(self) -> Self:
        missing = [status for status in FILING_STATUSES if status not in self.filing_statuses]
        if missing:
            raise ConfigurationError(
                f"Federal configuration is missing filing statuses: {', '.join(missing)}"
            )
        if self.default_filing_status not in self.filing_statuses:
            raise ConfigurationError(
                "Default filing status must be one of the configured statuses"
            )
        return self

    def status(self, filing_status: str | None) -> FilingStatusConfig:
        """Return the table for ``filing_status``, falling back to the default."""

        if filing_status and filing_status in self.filing_statuses:
            return self.filing_statuses[filing_status]
        return self.filing_statuses[self.default_filing_status]


class PayrollTaxConfig(ImmutableModel):
    """Employee-side FICA rates (Social Security and Medicare)."""

    social_security_rate: float
    social_security_wage_base: float
    medicare_rate: float
    additional_medicare_rate: float

    @model_validator(mode="after")
    def _validate_rates(self) -> Self:
        for name in ("social_security_rate", "medicare_rate", "additional_medicare_rate"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"'{name}' must be non-negative")
        if self.social_security_wage_base <= 0:
            raise ConfigurationError("'social_security_wage_base' must be positive")
        return self


class SelfEmploymentConfig(ImmutableModel):
    """Rates applied to net self-employment earnings."""

    net_earnings_factor: float
    social_security_rate: float
    medicare_rate: float
    deductible_share: float = 0.5

    @model_validator(mode="after")
    def _validate_rates(self) -> Self:
        if not 0 < self.net_earnings_factor <= 1:
            raise ConfigurationError("'net_earnings_factor' must be within (0, 1]")
        if self.social_security_rate < 0 or self.medicare_rate < 0:
            raise ConfigurationError("Self-employment rates must be non-negative")
        if not 0 <= self.deductible_share <= 1:
            raise ConfigurationError("'deductible_share' must be between 0 and 1")
        return self

    @computed_field
    @property
    def combined_rate(self) -> float:
        return self.social_security_rate + self.medicare_rate


class DependentCreditConfig(ImmutableModel):
    """Flat per-dependent credits subtracted from federal income tax."""

    child_under_17: float
    other_dependent: float

    @model_validator(mode="after")
    def _validate_amounts(self) -> Self:
        if self.child_under_17 < 0 or self.other_dependent < 0:
            raise ConfigurationError("Dependent credits must be non-negative")
        return self


class AdjustmentLimits(ImmutableModel):
    """Caps applied to above-the-line adjustments."""

    student_loan_interest_cap: float

    @model_validator(mode="after")
    def _validate_caps(self) -> Self:
        if self.student_loan_interest_cap < 0:
            raise ConfigurationError("'student_loan_interest_cap' must be non-negative")
        return self


class WithholdingConfig(ImmutableModel):
    """Paycheck withholding approximations."""

    allowance_amount: float
    state_rates: Mapping[str, float]

    @field_validator("state_rates", mode="before")
    @classmethod
    def _coerce_state_rates(cls, value: Any) -> Mapping[str, float]:
        if isinstance(value, Mapping):
            return {str(key): float(rate) for key, rate in value.items()}
        raise ConfigurationError("'state_rates' must be a mapping of state codes to rates")

    @model_validator(mode="after")
    def _validate_rates(self) -> Self:
        if self.allowance_amount < 0:
            raise ConfigurationError("'allowance_amount' must be non-negative")
        if "none" not in self.state_rates:
            raise ConfigurationError("'state_rates' must include a 'none' entry")
        for code, rate in self.state_rates.items():
            if rate < 0:
                raise ConfigurationError(f"State rate for '{code}' must be non-negative")
        return self

    def state_rate(self, code: str | None) -> float:
        if not code:
            return 0.0
        return self.state_rates.get(code, 0.0)


class TaxYearConfiguration(ImmutableModel):
    """Structured representation of a federal tax year configuration."""

    year: int
    meta: Mapping[str, Any] = Field(default_factory=dict)
    federal: FederalConfig
    payroll: PayrollTaxConfig
    self_employment: SelfEmploymentConfig
    credits: DependentCreditConfig
    adjustments: AdjustmentLimits
    withholding: WithholdingConfig

    @model_validator(mode="before")
    @classmethod
    def _prepare_sections(cls, data: Any) -> Mapping[str, Any]:
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration file must define a mapping at the top level")

        prepared = dict(data)
        meta = prepared.get("meta")
        if meta is None:
            prepared["meta"] = {}
        elif not isinstance(meta, Mapping):
            raise ConfigurationError("'meta' section must be a mapping if provided")

        for section in (
            "federal",
            "payroll",
            "self_employment",
            "credits",
            "adjustments",
            "withholding",
        ):
            if not isinstance(prepared.get(section), Mapping):
                raise ConfigurationError(f"Configuration requires a '{section}' section")

        return prepared


def _validate_bracket_sequence(brackets: Sequence[TaxBracket]) -> None:
    if not brackets:
        raise ConfigurationError("At least one tax bracket must be defined")
    last_upper: float | None = None
    for bracket in brackets[:-1]:
        upper = bracket.upper_bound
        if upper is None:
            raise ConfigurationError("Only the final tax bracket may have an open upper bound")
        if last_upper is not None and upper <= last_upper:
            raise ConfigurationError("Tax brackets must be in ascending order")
        last_upper = upper
    if brackets[-1].upper_bound is not None:
        raise ConfigurationError("Final tax bracket must have an open upper bound")


class TaxYearManifestEntry(ImmutableModel):
    """Entry describing a supported tax year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Manifest describing the available tax year configuration files."""

    years: Sequence[TaxYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> Self:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "AdjustmentLimits",
    "BracketRange",
    "ConfigurationError",
    "DependentCreditConfig",
    "FILING_STATUSES",
    "FederalConfig",
    "FilingStatusConfig",
    "ImmutableModel",
    "PayrollTaxConfig",
    "SelfEmploymentConfig",
    "TaxBracket",
    "TaxYearConfiguration",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "ValidationError",
    "WithholdingConfig",
]
