"""REST endpoints for listing calculators and running calculations."""

from __future__ import annotations

from flask import Blueprint, Response, request

from calcsuite.backend.services import (
    build_calculation_response,
    build_json_response,
    calculate,
    list_calculators,
    parse_calculation_payload,
    resolve_request_locale,
)

blueprint = Blueprint("calculators", __name__, url_prefix="/api/v1/calculators")


@blueprint.get("")
def get_calculators() -> Response:
    """List the available calculators with names in the requested locale."""

    locale = resolve_request_locale(request)
    payload = {"locale": locale, "calculators": list_calculators(locale)}
    return build_json_response(payload, locale)


@blueprint.post("/<calculator_id>/calculations")
def create_calculation(calculator_id: str) -> Response:
    """Run ``calculator_id`` against the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    result = calculate(calculator_id, payload)

    return build_calculation_response(result)
