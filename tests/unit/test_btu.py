"""Unit tests for the BTU sizing calculator."""

from __future__ import annotations

import pytest

from calcsuite.backend.app.services.calculators import calculate_btu


def _bedroom(**overrides: object) -> dict[str, object]:
    values: dict[str, object] = {"roomLength": 20, "roomWidth": 15}
    values.update(overrides)
    return {"values": values}


def test_standard_bedroom_needs_six_thousand_btu() -> None:
    result = calculate_btu(_bedroom())

    assert result.is_valid is True
    assert result.values["requiredBTU"] == 6000
    assert result.values["btuRangeLow"] == 5500
    assert result.values["btuRangeHigh"] == 6500
    assert result.values["tonnage"] == 0.5
    assert result.values["roomArea"] == 300
    assert result.values["roomVolume"] == 2400
    assert result.values["baseLoad"] == 6000
    assert result.formatted["requiredBTU"] == "6,000 BTU/hr"
    assert result.formatted["btuRange"] == "5,500 – 6,500 BTU/hr"
    assert result.formatted["tonnage"] == "0.5 tons"
    assert result.formatted["ceilingAdj"] == "No adjustment (8 ft)"
    assert result.formatted["monthlyCost"] == "—"
    assert result.metadata is not None
    assert result.metadata.chart_data == [{"factor": "Base Load", "btu": 6000}]


@pytest.mark.parametrize(
    "values",
    [
        {"roomWidth": 15},
        {"roomLength": 20},
        {"roomLength": 0, "roomWidth": 15},
        {"roomLength": -4, "roomWidth": 15},
        {"roomLength": "wide", "roomWidth": 15},
    ],
)
def test_missing_dimensions_return_invalid_result(values: dict[str, object]) -> None:
    result = calculate_btu({"values": values})

    assert result.is_valid is False
    assert result.values == {}
    assert result.formatted == {}
    assert result.summary == ""


def test_result_is_always_a_multiple_of_the_step() -> None:
    result = calculate_btu(
        _bedroom(
            roomLength=17,
            roomWidth=13,
            ceilingHeight=10,
            sunExposure="highSun",
            insulationQuality="poor",
            numberOfOccupants=5,
            numberOfWindows=4,
            roomType="kitchen",
        )
    )

    required = result.values["requiredBTU"]
    assert required % 500 == 0
    assert result.values["btuRangeLow"] <= required <= result.values["btuRangeHigh"]
    assert result.values["tonnage"] == pytest.approx(
        (required / 12000 * 2 + 0.5) // 1 / 2
    )


def test_adjustments_are_added_to_the_base_load() -> None:
    result = calculate_btu(
        _bedroom(ceilingHeight=10, numberOfOccupants=4, numberOfWindows=3, roomType="office")
    )

    # 6000 base, +1500 ceiling, +1200 occupants, +1000 windows, +1000 office
    assert result.values["ceilingAdj"] == 1500
    assert result.values["occupantLoad"] == 1200
    assert result.values["windowSunAdj"] == 1000
    assert result.values["requiredBTU"] == 10500
    assert result.formatted["ceilingAdj"] == "+1,500 BTU/hr"
    factors = [row["factor"] for row in result.metadata.chart_data]
    assert factors == ["Base Load", "Ceiling Height", "Occupants", "Windows", "Room Type"]


def test_metric_dimensions_are_converted_to_feet() -> None:
    imperial = calculate_btu(_bedroom())
    metric = calculate_btu(
        {
            "values": {"roomLength": 6.096, "roomWidth": 4.572, "ceilingHeight": 2.4384},
            "fieldUnits": {"roomLength": "m", "roomWidth": "m", "ceilingHeight": "m"},
        }
    )

    assert metric.values["requiredBTU"] == imperial.values["requiredBTU"]
    assert metric.values["roomArea"] == imperial.values["roomArea"]


def test_heating_uses_the_higher_rate_and_climate_multiplier() -> None:
    result = calculate_btu(
        _bedroom(calculationType="heating", showAdvanced=True, climateZone="cold")
    )

    # 300 sq ft * 25 BTU = 7500, cold heating multiplier 1.25
    assert result.values["baseLoad"] == 7500
    assert result.values["requiredBTU"] == 9500


def test_climate_zone_is_ignored_without_advanced_options() -> None:
    result = calculate_btu(_bedroom(climateZone="veryCold"))

    assert result.values["requiredBTU"] == 6000


def test_energy_cost_requires_advanced_options() -> None:
    basic = calculate_btu(_bedroom(estimateEnergyCost=True))
    advanced = calculate_btu(
        _bedroom(estimateEnergyCost=True, showAdvanced=True, electricityRate=0.15)
    )

    assert basic.values["monthlyCost"] == 0
    assert advanced.values["monthlyCost"] > 0
    assert advanced.formatted["monthlyCost"].endswith("/month")


def test_unknown_enums_fall_back_to_defaults() -> None:
    result = calculate_btu(
        _bedroom(roomType="garage", sunExposure="eclipse", calculationType="venting")
    )

    assert result.values["requiredBTU"] == 6000


def test_summary_uses_localized_template() -> None:
    result = calculate_btu(
        {
            "values": {"roomLength": 20, "roomWidth": 15},
            "t": {
                "values": {"cooling": "enfriamiento", "tons": "toneladas"},
                "formats": {"summary": "{btu} BTU/hr para {type} ({tonnage})"},
            },
        }
    )

    assert result.summary == "6,000 BTU/hr para enfriamiento (0.5)"
    assert result.formatted["tonnage"] == "0.5 toneladas"


def test_summary_is_empty_without_template() -> None:
    assert calculate_btu(_bedroom()).summary == ""


def test_calculation_is_idempotent() -> None:
    payload = _bedroom(numberOfOccupants=3, roomType="sunroom")

    assert calculate_btu(payload) == calculate_btu(payload)
