"""Unit tests for the water intake calculator."""

from __future__ import annotations

import math

import pytest

from calcsuite.backend.app.services.calculators import calculate_water_intake
from calcsuite.backend.app.services.calculators.water_intake import DRINKING_SCHEDULE

OFFICE_WORKER = {
    "gender": "male",
    "age": 35,
    "weight": 170,
    "activityLevel": "sedentary",
    "climate": "temperate",
    "caffeineIntake": 3,
    "dietType": "processed",
}


def test_office_worker_scenario() -> None:
    result = calculate_water_intake({"values": OFFICE_WORKER})

    assert result.is_valid is True
    values = result.values
    assert values["dailyTotal"] == 3272
    assert values["fromFood"] == 491
    assert values["fromBeverages"] == 2781
    assert values["weightBased"] == 2695
    assert values["iomBased"] == 3850
    assert values["glasses"] == 12
    assert values["bottles500"] == pytest.approx(5.6)
    assert result.formatted["dailyTotal"] == "111 oz (3.3 L)"
    assert result.formatted["glasses"] == "12 glasses"
    assert result.summary.startswith("Your daily water need is 111 oz (3.3 L).")


def test_metric_weight_shows_litres_first() -> None:
    result = calculate_water_intake(
        {"values": {**OFFICE_WORKER, "weight": 77.11064}, "fieldUnits": {"weight": "kg"}}
    )

    assert result.values["dailyTotal"] == 3272
    assert result.formatted["dailyTotal"] == "3.3 L (111 oz)"
    assert result.metadata.chart_data[0]["amountLabel"].endswith(" mL")


def test_minimum_daily_total_is_enforced() -> None:
    result = calculate_water_intake(
        {
            "values": {
                "gender": "female",
                "age": 10,
                "weight": 20,
                "activityLevel": "sedentary",
                "climate": "cold",
            },
            "fieldUnits": {"weight": "kg"},
        }
    )

    assert result.values["dailyTotal"] == 1500
    assert result.values["fromFood"] == 300
    assert result.values["fromBeverages"] == 1200


def test_beverages_and_food_add_up_to_total() -> None:
    result = calculate_water_intake(
        {"values": {"gender": "female", "age": 28, "weight": 140, "dietType": "highFruitVeg"}}
    )

    values = result.values
    assert values["fromBeverages"] + values["fromFood"] == pytest.approx(
        values["dailyTotal"], abs=1
    )
    assert values["fromFood"] == pytest.approx(values["dailyTotal"] * 0.25, abs=1)


def test_schedule_weights_cover_the_whole_day() -> None:
    assert math.fsum(weight for _, weight in DRINKING_SCHEDULE) == pytest.approx(1.0)

    result = calculate_water_intake({"values": OFFICE_WORKER})
    chart = result.metadata.chart_data
    assert len(chart) == 8
    assert chart[0]["time"] == "7:00 AM"
    assert sum(row["amount"] for row in chart) == pytest.approx(94, abs=4)


def test_pregnancy_and_exercise_increase_needs() -> None:
    base = calculate_water_intake({"values": {"weight": 150}}).values["dailyTotal"]
    pregnant = calculate_water_intake(
        {"values": {"weight": 150, "specialCondition": "pregnant"}}
    ).values["dailyTotal"]
    exercising = calculate_water_intake(
        {"values": {"weight": 150, "exerciseMinutes": 60}}
    ).values["dailyTotal"]

    assert pregnant == base + 300
    assert exercising == base + 710


def test_alcohol_adds_offset() -> None:
    base = calculate_water_intake({"values": {"weight": 150}}).values["dailyTotal"]
    with_alcohol = calculate_water_intake(
        {"values": {"weight": 150, "alcoholIntake": 2}}
    ).values["dailyTotal"]

    assert with_alcohol == base + 500


@pytest.mark.parametrize(
    ("values", "units"),
    [
        ({"gender": "male"}, {}),
        ({"weight": 0}, {}),
        ({"weight": -70}, {}),
        ({"weight": 70}, {"weight": "furlong"}),
    ],
)
def test_invalid_weight_returns_invalid_result(
    values: dict[str, object], units: dict[str, str]
) -> None:
    result = calculate_water_intake({"values": values, "fieldUnits": units})

    assert result.is_valid is False
    assert result.formatted == {}
    assert result.summary == ""


def test_labels_come_from_text_bag() -> None:
    result = calculate_water_intake(
        {
            "values": OFFICE_WORKER,
            "t": {"values": {"glasses": "vasos", "7:00 AM": "7:00"}},
        }
    )

    assert result.formatted["glasses"] == "12 vasos"
    assert result.metadata.chart_data[0]["time"] == "7:00"


def test_calculation_is_idempotent() -> None:
    payload = {
        "values": {**OFFICE_WORKER, "exerciseMinutes": 45, "specialCondition": "breastfeeding"},
        "fieldUnits": {"weight": "kg"},
    }

    first = calculate_water_intake(payload).to_payload()
    second = calculate_water_intake(payload).to_payload()

    assert first == second
    assert payload["values"]["exerciseMinutes"] == 45
