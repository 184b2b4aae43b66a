"""JSON responses for the calculator endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from flask import Response, jsonify


def build_json_response(payload: Mapping[str, Any], locale: str | None = None) -> Response:
    """Serialise ``payload`` and tag it with the locale its labels were rendered in."""

    response = jsonify(payload)
    response.status_code = HTTPStatus.OK
    if locale:
        response.headers["Content-Language"] = locale
    return response


def build_calculation_response(payload: Mapping[str, Any]) -> Response:
    """Return the response for a calculation envelope produced by ``calculate``."""

    meta = payload.get("meta") or {}
    return build_json_response(payload, meta.get("locale"))


__all__ = ["build_calculation_response", "build_json_response"]
