"""Typed views over the untyped calculator input bags.

Each calculator receives a loose ``values`` mapping from the UI layer. The
models below read that mapping once, at the boundary, and apply a permissive
default policy: unreadable numbers, unknown enum values and missing toggles
never raise, they resolve to the documented default instead. Calculators then
work with attribute access on a frozen record rather than ad-hoc lookups.

Three numeric policies exist:

* plain fields use their default only when the value is missing or ``null``,
  so an explicit ``0`` is preserved;
* fields listed in ``_FALSY_DEFAULTS`` also treat ``0`` as missing;
* required fields default to ``None`` and are validated by the calculator.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing_extensions import Self

__all__ = [
    "BtuInputs",
    "CalculatorInputs",
    "IncomeTaxInputs",
    "PaycheckInputs",
    "WaterIntakeInputs",
    "coerce_number",
]


def coerce_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None`` when it is not numeric."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


class CalculatorInputs(BaseModel):
    """Base class applying the permissive default policy to an input bag."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    _FALSY_DEFAULTS: ClassVar[frozenset[str]] = frozenset()
    _CHOICES: ClassVar[Mapping[str, tuple[str, ...]]] = {}
    _STRICT_FLAGS: ClassVar[frozenset[str]] = frozenset()
    _LOOSE_FLAGS: ClassVar[frozenset[str]] = frozenset()
    _TEXT_FIELDS: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _apply_default_policy(cls, data: Any) -> dict[str, Any]:
        if not isinstance(data, Mapping):
            return {}

        prepared: dict[str, Any] = {}
        for name, field in cls.model_fields.items():
            key = field.alias or name
            if key in data:
                raw = data[key]
            elif name in data:
                raw = data[name]
            else:
                continue

            if name in cls._CHOICES:
                if isinstance(raw, str) and raw in cls._CHOICES[name]:
                    prepared[name] = raw
            elif name in cls._STRICT_FLAGS:
                prepared[name] = raw is True
            elif name in cls._LOOSE_FLAGS:
                prepared[name] = bool(raw)
            elif name in cls._TEXT_FIELDS:
                if isinstance(raw, str) and raw.strip():
                    prepared[name] = raw.strip()
            else:
                number = coerce_number(raw)
                if number is None:
                    continue
                if number == 0 and name in cls._FALSY_DEFAULTS:
                    continue
                prepared[name] = number
        return prepared

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> Self:
        return cls.model_validate(values)


class BtuInputs(CalculatorInputs):
    """Room dimensions and conditions for BTU sizing."""

    _FALSY_DEFAULTS: ClassVar[frozenset[str]] = frozenset(
        {"ceiling_height", "electricity_rate", "hours_per_day"}
    )
    _CHOICES: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "calculation_type": ("cooling", "heating"),
        "insulation_quality": ("poor", "average", "good", "excellent"),
        "sun_exposure": ("heavyShade", "average", "highSun"),
        "room_type": (
            "bedroom",
            "livingRoom",
            "kitchen",
            "office",
            "bathroom",
            "basement",
            "attic",
            "sunroom",
        ),
        "climate_zone": ("hotHumid", "hotDry", "moderate", "cool", "cold", "veryCold"),
    }
    _LOOSE_FLAGS: ClassVar[frozenset[str]] = frozenset(
        {"show_advanced", "estimate_energy_cost"}
    )

    calculation_type: str = "cooling"
    room_length: float | None = None
    room_width: float | None = None
    ceiling_height: float = 8.0
    insulation_quality: str = "average"
    sun_exposure: str = "average"
    number_of_windows: float = 2.0
    number_of_occupants: float = 2.0
    room_type: str = "bedroom"
    show_advanced: bool = False
    climate_zone: str = "moderate"
    number_of_exterior_walls: float = 2.0
    estimate_energy_cost: bool = False
    electricity_rate: float = 0.12
    hours_per_day: float = 8.0


class IncomeTaxInputs(CalculatorInputs):
    """Annual income, adjustments and credits for the federal estimate."""

    _CHOICES: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "filing_status": ("single", "marriedJoint", "marriedSeparate", "headOfHousehold"),
        "deduction_type": ("standard", "itemized"),
    }
    _STRICT_FLAGS: ClassVar[frozenset[str]] = frozenset({"self_employed", "include_state"})

    filing_status: str = "single"
    gross_income: float = 0.0
    other_income: float = 0.0
    deduction_type: str = "standard"
    itemized_deductions: float = 0.0
    retirement_401k: float = Field(default=0.0, alias="retirement401k")
    ira_contribution: float = 0.0
    hsa_contribution: float = 0.0
    student_loan_interest: float = 0.0
    children_under_17: float = 0.0
    children_other: float = 0.0
    self_employed: bool = False
    self_employment_income: float = 0.0
    include_state: bool = False
    state_rate: float = 5.0

    @property
    def counted_self_employment_income(self) -> float:
        return self.self_employment_income if self.self_employed else 0.0

    @property
    def total_gross(self) -> float:
        return self.gross_income + self.other_income + self.counted_self_employment_income


class PaycheckInputs(CalculatorInputs):
    """Pay, withholding and pre-tax deduction details for one paycheck."""

    _FALSY_DEFAULTS: ClassVar[frozenset[str]] = frozenset({"overtime_rate"})
    _CHOICES: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "pay_type": ("salary", "hourly"),
        "pay_frequency": ("weekly", "biweekly", "semimonthly", "monthly"),
        "filing_status": ("single", "marriedJoint", "marriedSeparate", "headOfHousehold"),
    }
    _STRICT_FLAGS: ClassVar[frozenset[str]] = frozenset({"include_overtime"})
    _TEXT_FIELDS: ClassVar[frozenset[str]] = frozenset({"state"})

    pay_type: str = "salary"
    pay_frequency: str = "biweekly"
    filing_status: str = "single"
    state: str = "none"
    allowances: float = 1.0
    gross_salary: float = 0.0
    hourly_rate: float = 0.0
    hours_per_week: float = 40.0
    include_overtime: bool = False
    overtime_hours: float = 0.0
    overtime_rate: float = 1.5
    pre_tax_401k: float = Field(default=0.0, alias="preTax401k")
    pre_tax_health: float = 0.0
    pre_tax_hsa: float = Field(default=0.0, alias="preTaxHSA")
    other_pre_tax: float = 0.0

    @property
    def pre_tax_per_paycheck(self) -> float:
        return self.pre_tax_401k + self.pre_tax_health + self.pre_tax_hsa + self.other_pre_tax


class WaterIntakeInputs(CalculatorInputs):
    """Body metrics and lifestyle factors for the daily hydration estimate."""

    _FALSY_DEFAULTS: ClassVar[frozenset[str]] = frozenset(
        {"age", "exercise_minutes", "caffeine_intake", "alcohol_intake"}
    )
    _CHOICES: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "gender": ("male", "female"),
        "activity_level": ("sedentary", "light", "moderate", "active", "veryActive"),
        "climate": ("temperate", "hot", "hotHumid", "cold", "highAltitude"),
        "special_condition": ("none", "pregnant", "breastfeeding"),
        "diet_type": ("highFruitVeg", "mixed", "processed"),
    }

    gender: str = "female"
    age: float = 30.0
    weight: float | None = None
    activity_level: str = "moderate"
    exercise_minutes: float = 0.0
    climate: str = "temperate"
    special_condition: str = "none"
    caffeine_intake: float = 0.0
    alcohol_intake: float = 0.0
    diet_type: str = "mixed"
