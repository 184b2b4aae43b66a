"""Linear unit conversion into the base unit of a measurement group."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Factors multiply a value in the given unit to obtain the group's base unit.
UNIT_GROUPS: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        "weight": MappingProxyType(
            {
                "kg": 1.0,
                "lbs": 0.453592,
                "st": 6.35029,
                "g": 0.001,
                "oz": 0.0283495,
            }
        ),
        "length": MappingProxyType(
            {
                "m": 1.0,
                "mm": 0.001,
                "cm": 0.01,
                "dm": 0.1,
                "km": 1000.0,
                "in": 0.0254,
                "ft": 0.3048,
                "yd": 0.9144,
                "mi": 1609.344,
            }
        ),
    }
)


def supported_units(unit_type: str) -> tuple[str, ...]:
    try:
        return tuple(UNIT_GROUPS[unit_type])
    except KeyError as exc:
        raise ValueError(f"Unknown unit group '{unit_type}'") from exc


def convert_to_base(value: float, from_unit: str, unit_type: str) -> float:
    """Convert ``value`` expressed in ``from_unit`` into the group's base unit.

    Weights convert to kilograms and lengths to metres. Unknown groups or
    units raise :class:`ValueError`.
    """

    group = UNIT_GROUPS.get(unit_type)
    if group is None:
        raise ValueError(f"Unknown unit group '{unit_type}'")

    factor = group.get(from_unit)
    if factor is None:
        raise ValueError(f"Unit '{from_unit}' is not supported for {unit_type}")

    return value * factor


__all__ = ["UNIT_GROUPS", "convert_to_base", "supported_units"]
