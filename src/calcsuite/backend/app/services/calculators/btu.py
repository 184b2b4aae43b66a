"""Room BTU sizing for air conditioners and heaters."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping

from calcsuite.backend.app.models import (
    BtuInputs,
    CalculatorPayload,
    CalculatorResult,
    ResultMetadata,
)

from .formatting import EMPTY_VALUE, format_decimal, format_number, render_template
from .utils import round_half_up, round_to_step

_LOGGER = logging.getLogger(__name__)

FEET_PER_METRE = 3.28084
STANDARD_CEILING_FT = 8.0
CEILING_SURCHARGE_PER_FT = 0.125
OCCUPANT_LOAD = 600
WINDOW_LOAD = 1000
EXTERIOR_WALL_SURCHARGE = 0.05
BTU_STEP = 500
BTU_PER_TON = 12000
ENERGY_EFFICIENCY_RATIO = 14 * 0.875

BTU_PER_SQFT: Mapping[str, int] = MappingProxyType({"cooling": 20, "heating": 25})

SUN_MULTIPLIERS: Mapping[str, float] = MappingProxyType(
    {"heavyShade": 0.9, "average": 1.0, "highSun": 1.1}
)

INSULATION_MULTIPLIERS: Mapping[str, float] = MappingProxyType(
    {"poor": 1.25, "average": 1.0, "good": 0.9, "excellent": 0.85}
)

# Room types adjust either by a fixed BTU amount or by a share of the base load.
ROOM_FIXED_ADJUSTMENTS: Mapping[str, float] = MappingProxyType({"kitchen": 4000, "office": 1000})
ROOM_SHARE_ADJUSTMENTS: Mapping[str, float] = MappingProxyType(
    {"attic": 0.2, "sunroom": 0.3, "basement": -0.1}
)

CLIMATE_MULTIPLIERS: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        "cooling": MappingProxyType(
            {
                "hotHumid": 1.15,
                "hotDry": 1.1,
                "moderate": 1.0,
                "cool": 0.95,
                "cold": 0.9,
                "veryCold": 0.85,
            }
        ),
        "heating": MappingProxyType(
            {
                "hotHumid": 0.8,
                "hotDry": 0.85,
                "moderate": 1.0,
                "cool": 1.1,
                "cold": 1.25,
                "veryCold": 1.4,
            }
        ),
    }
)


def _to_feet(value: float, unit: str) -> float:
    return value * FEET_PER_METRE if unit == "m" else value


def _signed(value: float, unit: str) -> str:
    prefix = "+" if value > 0 else ""
    return f"{prefix}{format_number(round_half_up(value))} {unit}"


def calculate_btu(payload: CalculatorPayload | Mapping[str, Any]) -> CalculatorResult:
    """Return the recommended BTU/hr rating for a room."""

    payload = CalculatorPayload.coerce(payload)
    inputs = BtuInputs.from_values(payload.values)
    text = payload.t

    length = inputs.room_length
    width = inputs.room_width
    if length is None or width is None or length <= 0 or width <= 0:
        _LOGGER.debug("BTU calculation skipped: room length and width are required")
        return CalculatorResult.invalid()

    length_ft = _to_feet(length, payload.unit("roomLength", "ft"))
    width_ft = _to_feet(width, payload.unit("roomWidth", "ft"))
    ceiling_ft = _to_feet(inputs.ceiling_height, payload.unit("ceilingHeight", "ft"))

    room_area = length_ft * width_ft
    room_volume = room_area * ceiling_ft
    mode = inputs.calculation_type
    base_load = room_area * BTU_PER_SQFT[mode]

    ceiling_adjustment = 0.0
    if ceiling_ft > STANDARD_CEILING_FT:
        ceiling_adjustment = (
            base_load * (ceiling_ft - STANDARD_CEILING_FT) * CEILING_SURCHARGE_PER_FT
        )

    sun_adjustment = base_load * (SUN_MULTIPLIERS[inputs.sun_exposure] - 1.0)
    insulation_adjustment = base_load * (
        INSULATION_MULTIPLIERS[inputs.insulation_quality] - 1.0
    )
    occupant_adjustment = max(0.0, inputs.number_of_occupants - 2) * OCCUPANT_LOAD
    window_adjustment = max(0.0, inputs.number_of_windows - 2) * WINDOW_LOAD

    room_type = inputs.room_type
    room_adjustment = ROOM_FIXED_ADJUSTMENTS.get(room_type, 0.0) + base_load * (
        ROOM_SHARE_ADJUSTMENTS.get(room_type, 0.0)
    )

    climate_multiplier = 1.0
    wall_adjustment = 0.0
    if inputs.show_advanced:
        climate_multiplier = CLIMATE_MULTIPLIERS[mode][inputs.climate_zone]
        if inputs.number_of_exterior_walls > 2:
            wall_adjustment = (
                base_load
                * (inputs.number_of_exterior_walls - 2)
                * EXTERIOR_WALL_SURCHARGE
            )

    subtotal = (
        base_load
        + ceiling_adjustment
        + sun_adjustment
        + insulation_adjustment
        + occupant_adjustment
        + window_adjustment
        + room_adjustment
        + wall_adjustment
    )
    total = round_half_up(subtotal * climate_multiplier)

    recommended = round_to_step(total, BTU_STEP)
    range_low = round_to_step(recommended * 0.9, BTU_STEP)
    range_high = round_to_step(recommended * 1.1, BTU_STEP)
    tonnage = round_half_up(recommended / BTU_PER_TON * 2) / 2

    estimate_cost = inputs.estimate_energy_cost and inputs.show_advanced
    monthly_cost = 0.0
    if estimate_cost:
        watts = recommended / ENERGY_EFFICIENCY_RATIO
        kwh_per_month = watts * inputs.hours_per_day * 30 / 1000
        monthly_cost = kwh_per_month * inputs.electricity_rate

    btu_unit = text.label("btuHr", "BTU/hr")
    sqft_unit = text.label("sqft", "sq ft")
    cuft_unit = text.label("cuft", "cu ft")
    month_unit = text.label("month", "/month")
    ton_label = text.label("ton", "ton") if tonnage == 1 else text.label("tons", "tons")

    window_sun = sun_adjustment + window_adjustment

    chart_rows = [
        ("Base Load", base_load, True),
        ("Ceiling Height", ceiling_adjustment, ceiling_adjustment != 0),
        ("Sun Exposure", sun_adjustment, sun_adjustment != 0),
        ("Insulation", insulation_adjustment, insulation_adjustment != 0),
        ("Occupants", occupant_adjustment, occupant_adjustment > 0),
        ("Windows", window_adjustment, window_adjustment > 0),
        ("Room Type", room_adjustment, room_adjustment != 0),
        ("Exterior Walls", wall_adjustment, wall_adjustment > 0),
    ]
    chart_data = [
        {"factor": text.label(label, label), "btu": round_half_up(amount)}
        for label, amount, include in chart_rows
        if include
    ]

    values = {
        "requiredBTU": recommended,
        "btuRangeLow": range_low,
        "btuRangeHigh": range_high,
        "tonnage": tonnage,
        "roomArea": round_half_up(room_area),
        "roomVolume": round_half_up(room_volume),
        "monthlyCost": monthly_cost,
        "baseLoad": round_half_up(base_load),
        "ceilingAdj": round_half_up(ceiling_adjustment),
        "occupantLoad": occupant_adjustment,
        "windowSunAdj": round_half_up(window_sun),
    }

    formatted = {
        "requiredBTU": f"{format_number(recommended)} {btu_unit}",
        "btuRange": f"{format_number(range_low)} – {format_number(range_high)} {btu_unit}",
        "tonnage": f"{format_decimal(tonnage)} {ton_label}",
        "roomArea": f"{format_number(round_half_up(room_area))} {sqft_unit}",
        "roomVolume": f"{format_number(round_half_up(room_volume))} {cuft_unit}",
        "monthlyCost": (
            f"${format_decimal(monthly_cost, 2)}{month_unit}" if estimate_cost else EMPTY_VALUE
        ),
        "baseLoad": f"{format_number(round_half_up(base_load))} {btu_unit}",
        "ceilingAdj": (
            _signed(ceiling_adjustment, btu_unit)
            if ceiling_adjustment != 0
            else text.label("noCeilingAdjustment", "No adjustment (8 ft)")
        ),
        "occupantLoad": (
            _signed(occupant_adjustment, btu_unit)
            if occupant_adjustment > 0
            else text.label("standardOccupancy", "Standard (≤2 people)")
        ),
        "windowSunAdj": (
            _signed(window_sun, btu_unit)
            if window_sun != 0
            else text.label("noAdjustment", "No adjustment")
        ),
    }

    summary = render_template(
        text.template(),
        {
            "btu": format_number(recommended),
            "type": text.label(mode, mode),
            "tonnage": format_decimal(tonnage),
        },
    )

    return CalculatorResult(
        values=values,
        formatted=formatted,
        summary=summary,
        is_valid=True,
        metadata=ResultMetadata(chart_data=chart_data),
    )


__all__ = ["calculate_btu"]
