"""Semantic checks for tax year configuration files beyond schema validation."""

from __future__ import annotations

import argparse
import re
from typing import Mapping, Sequence

from .year_config import (
    FILING_STATUSES,
    ConfigurationError,
    FederalConfig,
    FilingStatusConfig,
    PayrollTaxConfig,
    SelfEmploymentConfig,
    TaxYearConfiguration,
    WithholdingConfig,
    available_years,
    load_year_configuration,
)

_STATE_CODE = re.compile(r"^[A-Z]{2}$")


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _check_rate(scope: str, label: str, value: float) -> list[str]:
    if value < 0 or value > 1:
        return [_format_scope(scope, f"{label} {value} must be between 0 and 1")]
    return []


def _validate_filing_status(scope: str, status: FilingStatusConfig) -> list[str]:
    errors: list[str] = []
    previous_rate: float | None = None

    for index, bracket in enumerate(status.brackets):
        errors.extend(_check_rate(scope, f"bracket {index + 1} rate", bracket.rate))
        if previous_rate is not None and bracket.rate < previous_rate:
            errors.append(
                _format_scope(
                    scope,
                    f"bracket {index + 1} rate {bracket.rate} is lower than the previous bracket",
                )
            )
        previous_rate = bracket.rate

    return errors


def _validate_federal(federal: FederalConfig) -> list[str]:
    errors: list[str] = []

    for name in FILING_STATUSES:
        errors.extend(
            _validate_filing_status(f"federal.{name}", federal.filing_statuses[name])
        )

    unknown = sorted(set(federal.filing_statuses) - set(FILING_STATUSES))
    if unknown:
        errors.append(
            _format_scope("federal", f"unrecognised filing statuses: {', '.join(unknown)}")
        )

    return errors


def _validate_payroll(payroll: PayrollTaxConfig) -> list[str]:
    errors: list[str] = []
    errors.extend(_check_rate("payroll", "social security rate", payroll.social_security_rate))
    errors.extend(_check_rate("payroll", "medicare rate", payroll.medicare_rate))
    errors.extend(
        _check_rate("payroll", "additional medicare rate", payroll.additional_medicare_rate)
    )
    return errors


def _validate_self_employment(
    self_employment: SelfEmploymentConfig, payroll: PayrollTaxConfig
) -> list[str]:
    errors: list[str] = []
    errors.extend(
        _check_rate("self_employment", "combined rate", self_employment.combined_rate)
    )

    if self_employment.social_security_rate < payroll.social_security_rate:
        errors.append(
            _format_scope(
                "self_employment",
                "social security rate should cover at least the employee share",
            )
        )
    if self_employment.medicare_rate < payroll.medicare_rate:
        errors.append(
            _format_scope(
                "self_employment",
                "medicare rate should cover at least the employee share",
            )
        )

    return errors


def _validate_state_rates(rates: Mapping[str, float]) -> list[str]:
    errors: list[str] = []
    for code, rate in rates.items():
        if code != "none" and not _STATE_CODE.match(code):
            errors.append(
                _format_scope(
                    "withholding.state_rates",
                    f"'{code}' is not a two-letter state code",
                )
            )
        errors.extend(_check_rate("withholding.state_rates", f"rate for '{code}'", rate))

    if rates.get("none", 0.0) != 0.0:
        errors.append(
            _format_scope("withholding.state_rates", "the 'none' entry must be zero")
        )

    return errors


def _validate_withholding(withholding: WithholdingConfig) -> list[str]:
    errors: list[str] = []
    if withholding.allowance_amount <= 0:
        errors.append(
            _format_scope("withholding", "allowance amount should be a positive value")
        )
    errors.extend(_validate_state_rates(withholding.state_rates))
    return errors


def validate_year_configuration(config: TaxYearConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    errors.extend(_validate_federal(config.federal))
    errors.extend(_validate_payroll(config.payroll))
    errors.extend(_validate_self_employment(config.self_employment, config.payroll))
    errors.extend(_validate_withholding(config.withholding))

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        config = load_year_configuration(year)
        results[int(year)] = validate_year_configuration(config)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured federal tax years and report issues."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        try:
            config = load_year_configuration(year)
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{year}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_year_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
