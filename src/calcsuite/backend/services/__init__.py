"""Service-layer helpers shared by the HTTP routes."""

from calcsuite.backend.app.services.calculation_service import (
    UnknownCalculatorError,
    calculate,
    list_calculators,
)

from .request_parser import parse_calculation_payload, resolve_request_locale
from .response_builder import build_calculation_response, build_json_response

__all__ = [
    "UnknownCalculatorError",
    "build_calculation_response",
    "build_json_response",
    "calculate",
    "list_calculators",
    "parse_calculation_payload",
    "resolve_request_locale",
]
