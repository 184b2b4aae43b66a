"""Expose tax-year configuration to API consumers.

The income tax and paycheck calculators read their bracket ladders and payroll
rates from the YAML tables; these endpoints publish the same tables so clients
can show which years are available and what each one contains.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from calcsuite.backend.app.localization import available_locales
from calcsuite.backend.app.services.calculation_service import CALCULATORS
from calcsuite.backend.config.year_config import (
    FilingStatusConfig,
    TaxYearConfiguration,
    available_years,
    load_manifest,
    load_year_configuration,
    manifest_entries,
)
from calcsuite.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    manifest = load_manifest()
    supported_years = list(manifest.supported_years)
    default_year = supported_years[-1] if supported_years else None
    return {
        "version": get_project_version(),
        "supported_years": supported_years,
        "default_year": default_year,
        "locales": available_locales(),
        "calculators": list(CALCULATORS),
    }


def _serialise_status(status: FilingStatusConfig) -> dict[str, Any]:
    return {
        "standard_deduction": status.standard_deduction,
        "additional_medicare_threshold": status.additional_medicare_threshold,
        "brackets": [
            {"lower": bracket.lower, "upper": bracket.upper, "rate": bracket.rate}
            for bracket in status.bracket_ranges()
        ],
    }


def _serialise_tax_tables(config: TaxYearConfiguration) -> dict[str, Any]:
    federal = config.federal
    return {
        "year": config.year,
        "meta": dict(config.meta),
        "federal": {
            "default_filing_status": federal.default_filing_status,
            "filing_statuses": {
                name: _serialise_status(status)
                for name, status in federal.filing_statuses.items()
            },
        },
        "payroll": config.payroll.model_dump(mode="json"),
        "self_employment": config.self_employment.model_dump(mode="json"),
        "credits": config.credits.model_dump(mode="json"),
        "adjustments": config.adjustments.model_dump(mode="json"),
        "withholding": {
            "allowance_amount": config.withholding.allowance_amount,
            "state_rates": dict(sorted(config.withholding.state_rates.items())),
        },
    }


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    return jsonify(get_configuration_metadata()), 200


@blueprint.get("/years")
def list_years() -> tuple[Any, int]:
    """Return all configured years with their manifest status and label."""

    years = []
    for entry in manifest_entries():
        config = load_year_configuration(entry.year)
        years.append(
            {
                "year": entry.year,
                "status": entry.status,
                "label": config.meta.get("label"),
                "notes": config.meta.get("notes"),
            }
        )
    years.sort(key=lambda item: item["year"])

    metadata = get_configuration_metadata()
    payload = {
        "years": years,
        "default_year": metadata["default_year"],
        "supported_years": list(available_years()),
    }
    return jsonify(payload), 200


@blueprint.get("/<int:year>/tax-tables")
def get_tax_tables(year: int) -> tuple[Any, int]:
    """Return the federal, payroll and withholding tables for ``year``."""

    config = load_year_configuration(year)
    return jsonify(_serialise_tax_tables(config)), 200
