"""Unit coverage for the request and response models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from calcsuite.backend.app.models import (
    CalculationRequest,
    CalculatorPayload,
    CalculatorResult,
    CalculatorText,
    format_validation_error,
)


def test_calculation_request_accepts_camel_case_units() -> None:
    request = CalculationRequest.model_validate(
        {
            "values": {"weight": 70, "weightUnit": "kg", "enabled": True, "note": None},
            "fieldUnits": {"weight": "kg"},
            "locale": "es",
        }
    )

    assert request.field_units == {"weight": "kg"}
    assert request.values["enabled"] is True
    assert request.year is None
    assert request.t is None


def test_calculation_request_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        CalculationRequest.model_validate({"values": {}, "unexpected": 1})


def test_calculation_request_rejects_nested_values() -> None:
    with pytest.raises(ValidationError) as excinfo:
        CalculationRequest.model_validate({"values": {"weight": [70]}})

    message = format_validation_error(excinfo.value)
    assert message.startswith("Invalid calculation payload: values:")
    assert "'weight' must be a number, string, boolean or null" in message


def test_calculation_request_year_must_be_plausible() -> None:
    with pytest.raises(ValidationError):
        CalculationRequest.model_validate({"year": 1800})


def test_calculator_text_helpers() -> None:
    text = CalculatorText.model_validate(
        {"values": {"oz": "oz", "empty": ""}, "formats": {"summary": "{x}"}}
    )

    assert text.label("oz", "fallback") == "oz"
    assert text.label("empty", "fallback") == "fallback"
    assert text.label("missing", "fallback") == "fallback"
    assert text.template() == "{x}"
    assert text.template("other") is None


def test_calculator_payload_coerce_accepts_raw_mapping() -> None:
    payload = CalculatorPayload.coerce(
        {"values": {"weight": 70}, "fieldUnits": {"weight": "lbs"}, "t": None}
    )

    assert payload.unit("weight", "kg") == "lbs"
    assert payload.unit("height", "cm") == "cm"
    assert payload.t == CalculatorText()
    assert CalculatorPayload.coerce(payload) is payload


def test_calculator_payload_coerce_rejects_non_mappings() -> None:
    with pytest.raises(TypeError):
        CalculatorPayload.coerce(["values"])


def test_invalid_result_payload_shape() -> None:
    assert CalculatorResult.invalid().to_payload() == {
        "values": {},
        "formatted": {},
        "summary": "",
        "isValid": False,
    }
