"""Integration tests for the calculator REST endpoints."""

from __future__ import annotations

import json
from http import HTTPStatus
from pathlib import Path
from typing import Dict, Iterable

import pytest
from flask.testing import FlaskClient

DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


def _load_scenarios() -> Iterable[Dict[str, object]]:
    with DATA_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _endpoint(calculator_id: str) -> str:
    return f"/api/v1/calculators/{calculator_id}/calculations"


def test_list_calculators_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/calculators", headers={"Accept-Language": "pt-BR"})

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["locale"] == "pt"
    assert [entry["id"] for entry in payload["calculators"]] == [
        "btu-calculator",
        "income-tax-calculator",
        "paycheck-calculator",
        "water-intake-calculator",
    ]


@pytest.mark.parametrize("scenario", _load_scenarios(), ids=lambda item: item["name"])
def test_calculation_endpoint_matches_regression_scenarios(
    client: FlaskClient, scenario: Dict[str, object]
) -> None:
    """Each regression scenario should remain stable over time."""

    response = client.post(_endpoint(scenario["calculator"]), json=scenario["payload"])
    assert response.status_code == HTTPStatus.OK

    payload = response.get_json()
    expected = scenario["expectations"]

    assert payload["meta"]["calculator"] == scenario["calculator"]
    result = payload["result"]
    for key, value in expected["values"].items():
        assert result["values"][key] == pytest.approx(value)
    for key, value in expected["formatted"].items():
        assert result["formatted"][key] == value


def test_calculation_endpoint_uses_accept_language_header(client: FlaskClient) -> None:
    """Accept-Language header should influence locale if body omits it."""

    response = client.post(
        _endpoint("btu-calculator"),
        json={"values": {"roomLength": 20, "roomWidth": 15}},
        headers={"Accept-Language": "es"},
    )

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["meta"]["locale"] == "es"
    assert payload["result"]["summary"].startswith("Tu cuarto necesita")


def test_calculation_endpoint_returns_chart_metadata(client: FlaskClient) -> None:
    response = client.post(
        _endpoint("paycheck-calculator"), json={"values": {"grossSalary": 52000}}
    )

    assert response.status_code == HTTPStatus.OK
    metadata = response.get_json()["result"]["metadata"]
    assert metadata["chartData"]
    assert metadata["tableData"][0]["item"] == "Gross Pay"


def test_invalid_inputs_return_invalid_result(client: FlaskClient) -> None:
    response = client.post(_endpoint("water-intake-calculator"), json={"values": {}})

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["result"]["isValid"] is False


def test_calculation_endpoint_rejects_non_json(client: FlaskClient) -> None:
    """Invalid payloads should return a structured 400 response."""

    response = client.post(
        _endpoint("btu-calculator"),
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "bad_request"
    assert "JSON" in payload["message"].upper()


def test_calculation_endpoint_rejects_unknown_fields(client: FlaskClient) -> None:
    response = client.post(
        _endpoint("btu-calculator"),
        json={"values": {"roomLength": 20}, "employment": {}},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "employment" in payload["message"]


def test_calculation_endpoint_rejects_unknown_year(client: FlaskClient) -> None:
    response = client.post(
        _endpoint("income-tax-calculator"),
        json={"values": {"grossIncome": 75000}, "year": 1999},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "1999" in payload["message"]


def test_unknown_calculator_returns_not_found(client: FlaskClient) -> None:
    response = client.post(_endpoint("mortgage-calculator"), json={"values": {}})

    assert response.status_code == HTTPStatus.NOT_FOUND
    payload = response.get_json()
    assert payload["error"] == "not_found"
    assert payload["calculator"] == "mortgage-calculator"


@pytest.mark.parametrize("hours", [0, -10])
def test_hourly_pay_without_hours_is_invalid(client: FlaskClient, hours: int) -> None:
    response = client.post(
        _endpoint("paycheck-calculator"),
        json={"values": {"payType": "hourly", "hourlyRate": 20, "hoursPerWeek": hours}},
    )

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["result"]["isValid"] is False


def test_responses_declare_content_language(client: FlaskClient) -> None:
    listing = client.get("/api/v1/calculators?locale=fr")
    calculation = client.post(
        _endpoint("btu-calculator"),
        json={"values": {"roomLength": 20, "roomWidth": 15}, "locale": "de"},
    )

    assert listing.headers["Content-Language"] == "fr"
    assert calculation.headers["Content-Language"] == "de"
