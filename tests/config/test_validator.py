import pytest

from calcsuite.backend.config.validator import (
    main,
    validate_all_years,
    validate_year_configuration,
)
from calcsuite.backend.config.year_config import load_year_configuration


def test_current_configurations_are_valid() -> None:
    results = validate_all_years()
    assert set(results) == {2024, 2025}
    assert all(not issues for issues in results.values()), results


def test_validator_flags_invalid_payroll_rate() -> None:
    config = load_year_configuration(2025)
    payroll = config.payroll.model_copy(update={"medicare_rate": 1.5})
    broken = config.model_copy(update={"payroll": payroll})

    errors = validate_year_configuration(broken)

    assert any("payroll" in error and "between 0 and 1" in error for error in errors)


def test_validator_flags_self_employment_below_employee_share() -> None:
    config = load_year_configuration(2025)
    self_employment = config.self_employment.model_copy(update={"medicare_rate": 0.01})
    broken = config.model_copy(update={"self_employment": self_employment})

    errors = validate_year_configuration(broken)

    assert any(error.startswith("self_employment: medicare rate") for error in errors)


def test_validator_flags_bad_state_codes() -> None:
    config = load_year_configuration(2025)
    rates = dict(config.withholding.state_rates)
    rates["California"] = 0.07
    withholding = config.withholding.model_copy(update={"state_rates": rates})
    broken = config.model_copy(update={"withholding": withholding})

    errors = validate_year_configuration(broken)

    assert any("'California' is not a two-letter state code" in error for error in errors)


def test_validator_flags_decreasing_bracket_rates() -> None:
    config = load_year_configuration(2025)
    single = config.federal.filing_statuses["single"]
    brackets = list(single.brackets)
    brackets[1] = brackets[1].model_copy(update={"rate": 0.05})
    statuses = dict(config.federal.filing_statuses)
    statuses["single"] = single.model_copy(update={"brackets": brackets})
    federal = config.federal.model_copy(update={"filing_statuses": statuses})
    broken = config.model_copy(update={"federal": federal})

    errors = validate_year_configuration(broken)

    assert any(
        error.startswith("federal.single") and "lower than the previous" in error
        for error in errors
    )


def test_main_reports_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["2025"]) == 0
    assert "[2025] OK" in capsys.readouterr().out


def test_main_reports_missing_year(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1999"]) == 1
    assert "[1999] failed to load configuration" in capsys.readouterr().out
