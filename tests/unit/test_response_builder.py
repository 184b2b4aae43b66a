"""Unit tests for response formatting helpers."""

from __future__ import annotations

from flask import Flask

from calcsuite.backend.services.response_builder import (
    build_calculation_response,
    build_json_response,
)


def test_build_calculation_response_returns_json(app: Flask) -> None:
    """Calculation envelopes are serialised and tagged with their locale."""

    payload = {
        "result": {"values": {"dailyTotal": 2500}, "isValid": True},
        "meta": {"calculator": "water-intake-calculator", "locale": "es"},
    }

    with app.app_context():
        response = build_calculation_response(payload)

    assert response.status_code == 200
    assert response.get_json() == payload
    assert response.headers["Content-Language"] == "es"


def test_build_json_response_without_locale(app: Flask) -> None:
    with app.app_context():
        response = build_json_response({"calculators": []})

    assert response.status_code == 200
    assert "Content-Language" not in response.headers
