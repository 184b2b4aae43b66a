"""Daily water intake estimate and drinking schedule."""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Any, Mapping

from calcsuite.backend.app.models import (
    CalculatorPayload,
    CalculatorResult,
    ResultMetadata,
    WaterIntakeInputs,
)

from .formatting import format_decimal, format_number, render_template
from .units import convert_to_base, supported_units
from .utils import round_half_up

_LOGGER = logging.getLogger(__name__)

ACTIVITY_MULTIPLIERS: Mapping[str, float] = MappingProxyType(
    {"sedentary": 1.0, "light": 1.1, "moderate": 1.2, "active": 1.3, "veryActive": 1.4}
)

CLIMATE_MULTIPLIERS: Mapping[str, float] = MappingProxyType(
    {"temperate": 1.0, "hot": 1.15, "hotHumid": 1.3, "cold": 0.95, "highAltitude": 1.2}
)

FOOD_WATER_SHARE: Mapping[str, float] = MappingProxyType(
    {"highFruitVeg": 0.25, "mixed": 0.2, "processed": 0.15}
)

CONDITION_BONUS_ML: Mapping[str, float] = MappingProxyType(
    {"none": 0.0, "pregnant": 300.0, "breastfeeding": 700.0}
)

# Share of the beverage total to drink at each time of day; weights sum to 1.
DRINKING_SCHEDULE: tuple[tuple[str, float], ...] = (
    ("7:00 AM", 0.15),
    ("9:00 AM", 0.14),
    ("11:00 AM", 0.13),
    ("1:00 PM", 0.14),
    ("3:00 PM", 0.13),
    ("5:00 PM", 0.13),
    ("7:00 PM", 0.11),
    ("9:00 PM", 0.07),
)

ML_PER_KG: Mapping[str, float] = MappingProxyType({"male": 33.0, "female": 31.0})
IOM_ADULT_ML: Mapping[str, float] = MappingProxyType({"male": 3700.0, "female": 2700.0})
IOM_TEEN_ML: Mapping[str, float] = MappingProxyType({"male": 3300.0, "female": 2300.0})
ADULT_AGE = 18
EXERCISE_ML_PER_30_MIN = 355.0
CAFFEINE_OFFSET_ML = 50.0
ALCOHOL_OFFSET_ML = 250.0
MINIMUM_DAILY_ML = 1500.0
ML_PER_FLUID_OUNCE = 29.5735
GLASS_OUNCES = 8
BOTTLE_ML = 500
DEFAULT_WEIGHT_UNIT = "lbs"
DEFAULT_SUMMARY = (
    "Your daily water need is {dailyTotal}. Drink {fromBeverages} from beverages "
    "({glasses} glasses or {bottles500} bottles). About {fromFood} comes from food."
)


def _age_factor(age: float) -> float:
    if age >= 65:
        return 0.9
    if age >= 56:
        return 0.95
    return 1.0


def _apply_adjustments(baseline_ml: float, inputs: WaterIntakeInputs, age_factor: float) -> float:
    adjusted = baseline_ml * age_factor
    adjusted *= ACTIVITY_MULTIPLIERS[inputs.activity_level]
    adjusted *= CLIMATE_MULTIPLIERS[inputs.climate]
    adjusted += inputs.exercise_minutes / 30 * EXERCISE_ML_PER_30_MIN
    adjusted += CONDITION_BONUS_ML[inputs.special_condition]
    return adjusted


def _format_count(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return format_decimal(value, 1)


def calculate_water_intake(payload: CalculatorPayload | Mapping[str, Any]) -> CalculatorResult:
    """Estimate daily fluid needs from two methods and split them over the day."""

    payload = CalculatorPayload.coerce(payload)
    inputs = WaterIntakeInputs.from_values(payload.values)
    text = payload.t

    weight = inputs.weight
    weight_unit = payload.unit("weight", DEFAULT_WEIGHT_UNIT)
    if weight is None or weight <= 0:
        _LOGGER.debug("Water intake calculation skipped: weight is required")
        return CalculatorResult.invalid()

    if weight_unit not in supported_units("weight"):
        _LOGGER.debug("Water intake calculation skipped: unsupported weight unit %s", weight_unit)
        return CalculatorResult.invalid()
    weight_kg = convert_to_base(weight, weight_unit, "weight")

    sex = "male" if inputs.gender == "male" else "female"
    age_factor = _age_factor(inputs.age)

    weight_based_ml = _apply_adjustments(weight_kg * ML_PER_KG[sex], inputs, age_factor)
    baseline = IOM_TEEN_ML if inputs.age < ADULT_AGE else IOM_ADULT_ML
    iom_ml = _apply_adjustments(baseline[sex], inputs, age_factor)

    offsets_ml = (
        inputs.caffeine_intake * CAFFEINE_OFFSET_ML + inputs.alcohol_intake * ALCOHOL_OFFSET_ML
    )
    total_ml = max((weight_based_ml + iom_ml) / 2 + offsets_ml, MINIMUM_DAILY_ML)
    weight_based_total_ml = weight_based_ml + offsets_ml
    iom_total_ml = iom_ml + offsets_ml

    food_ml = total_ml * FOOD_WATER_SHARE[inputs.diet_type]
    beverages_ml = total_ml - food_ml
    beverages_oz = beverages_ml / ML_PER_FLUID_OUNCE

    glasses = math.ceil(beverages_oz / GLASS_OUNCES)
    bottles = round_half_up(beverages_ml / BOTTLE_ML, 1)

    oz_label = text.label("oz", "oz")
    ml_label = text.label("mL", "mL")
    litre_label = text.label("L", "L")
    if glasses == 1:
        glasses_label = text.label("glass", "glass")
    else:
        glasses_label = text.label("glasses", "glasses")
    if bottles == 1:
        bottles_label = text.label("bottle", "bottle")
    else:
        bottles_label = text.label("bottles", "bottles")
    ounces_first = weight_unit == "lbs"

    def dual(millilitres: float) -> str:
        ounces = format_number(round_half_up(millilitres / ML_PER_FLUID_OUNCE))
        litres = format_decimal(millilitres / 1000, 1)
        if ounces_first:
            return f"{ounces} {oz_label} ({litres} {litre_label})"
        return f"{litres} {litre_label} ({ounces} {oz_label})"

    chart_data = []
    for time_label, weight_share in DRINKING_SCHEDULE:
        if ounces_first:
            amount = round_half_up(beverages_oz * weight_share)
            amount_label = f"{format_number(amount)} {oz_label}"
        else:
            amount = round_half_up(beverages_ml * weight_share)
            amount_label = f"{format_number(amount)} {ml_label}"
        chart_data.append(
            {
                "time": text.label(time_label, time_label),
                "amount": amount,
                "amountLabel": amount_label,
            }
        )

    values = {
        "dailyTotal": round_half_up(total_ml),
        "fromBeverages": round_half_up(beverages_ml),
        "fromFood": round_half_up(food_ml),
        "glasses": glasses,
        "bottles500": bottles,
        "weightBased": round_half_up(weight_based_total_ml),
        "iomBased": round_half_up(iom_total_ml),
    }

    formatted = {
        "dailyTotal": dual(total_ml),
        "fromBeverages": dual(beverages_ml),
        "fromFood": dual(food_ml),
        "glasses": f"{glasses} {glasses_label}",
        "bottles500": f"{_format_count(bottles)} {bottles_label}",
        "weightBased": dual(weight_based_total_ml),
        "iomBased": dual(iom_total_ml),
    }

    summary = render_template(
        text.template() or DEFAULT_SUMMARY,
        {
            "dailyTotal": formatted["dailyTotal"],
            "fromBeverages": formatted["fromBeverages"],
            "glasses": str(glasses),
            "bottles500": _format_count(bottles),
            "fromFood": formatted["fromFood"],
        },
    )

    return CalculatorResult(
        values=values,
        formatted=formatted,
        summary=summary,
        is_valid=True,
        metadata=ResultMetadata(chart_data=chart_data),
    )


__all__ = ["DEFAULT_SUMMARY", "DRINKING_SCHEDULE", "calculate_water_intake"]
