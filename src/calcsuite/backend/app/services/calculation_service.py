"""Validate calculation requests and dispatch them to the calculators.

The service coordinates the request models, the translation catalogue and the
tax-year configuration so that each calculator module only has to deal with a
``{values, fieldUnits, t}`` payload. Profiling hooks live here as well, giving
the HTTP layer a single ``calculate`` entry point.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from calcsuite.backend.app.localization import (
    get_calculator_text,
    get_translator,
    normalise_locale,
)
from calcsuite.backend.app.models import (
    CalculationRequest,
    CalculationResponse,
    CalculatorPayload,
    CalculatorResult,
    format_validation_error,
)
from calcsuite.backend.config.year_config import default_year

from .calculators import (
    calculate_btu,
    calculate_income_tax,
    calculate_paycheck,
    calculate_water_intake,
)

_LOGGER = logging.getLogger(__name__)


class UnknownCalculatorError(LookupError):
    """Raised when a request targets a calculator id that is not registered."""

    def __init__(self, calculator_id: str) -> None:
        super().__init__(f"Unknown calculator '{calculator_id}'")
        self.calculator_id = calculator_id


@dataclass(frozen=True)
class CalculatorDefinition:
    """Registry entry binding a public calculator id to its implementation."""

    id: str
    function: Callable[[CalculatorPayload], CalculatorResult]
    uses_tax_year: bool = False


CALCULATORS: Mapping[str, CalculatorDefinition] = MappingProxyType(
    {
        definition.id: definition
        for definition in (
            CalculatorDefinition("btu-calculator", calculate_btu),
            CalculatorDefinition(
                "income-tax-calculator", calculate_income_tax, uses_tax_year=True
            ),
            CalculatorDefinition("paycheck-calculator", calculate_paycheck, uses_tax_year=True),
            CalculatorDefinition("water-intake-calculator", calculate_water_intake),
        )
    }
)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("CALCSUITE_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def get_calculator(calculator_id: str) -> CalculatorDefinition:
    try:
        return CALCULATORS[calculator_id]
    except KeyError as exc:
        raise UnknownCalculatorError(calculator_id) from exc


def list_calculators(locale: str | None = None) -> list[dict[str, Any]]:
    """Describe the registered calculators with localised names."""

    translator = get_translator(locale)
    return [
        {
            "id": definition.id,
            "name": translator(f"calculators.{definition.id}.name"),
            "description": translator(f"calculators.{definition.id}.description"),
            "usesTaxYear": definition.uses_tax_year,
        }
        for definition in CALCULATORS.values()
    ]


def calculate(
    calculator_id: str, payload: Mapping[str, Any] | CalculationRequest
) -> dict[str, Any]:
    """Run ``calculator_id`` against ``payload`` and return the serialised response.

    Raises :class:`UnknownCalculatorError` for unregistered ids and
    :class:`ValueError` for malformed payloads or tax years without a
    published configuration.
    """

    definition = get_calculator(calculator_id)

    if isinstance(payload, CalculationRequest):
        request = payload
    else:
        try:
            request = CalculationRequest.model_validate(payload)
        except ValidationError as exc:
            raise ValueError(format_validation_error(exc)) from exc

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    locale = normalise_locale(request.locale)
    with _profile_section("text", timings):
        text = request.t if request.t is not None else get_calculator_text(definition.id, locale)

    year: int | None = None
    if definition.uses_tax_year:
        year = request.year if request.year is not None else default_year()

    calculator_payload = CalculatorPayload(
        values=request.values,
        field_units=request.field_units,
        t=text,
        year=year,
    )

    with _profile_section(definition.id, timings):
        try:
            result = definition.function(calculator_payload)
        except FileNotFoundError as exc:
            raise ValueError(f"Tax year {year} is not supported") from exc

    if not result.is_valid:
        _LOGGER.debug("Calculator %s returned an invalid result", definition.id)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate timings (ms): %s",
            {name: duration * 1000 for name, duration in timings.items()},
        )

    response = CalculationResponse.model_validate(
        {
            "result": result.to_payload(),
            "meta": {"calculator": definition.id, "locale": locale, "year": year},
        }
    )
    return response.model_dump(mode="json", exclude_none=True)


__all__ = [
    "CALCULATORS",
    "CalculatorDefinition",
    "UnknownCalculatorError",
    "calculate",
    "get_calculator",
    "list_calculators",
]
