"""Utility helpers for calculator modules."""

from __future__ import annotations

import math


def round_half_up(value: float, places: int = 0) -> float:
    """Round ``value`` to ``places`` decimals, sending halves towards +infinity.

    Python's :func:`round` uses banker's rounding, which would move results
    such as ``2.5`` down to ``2``; calculator outputs are published with the
    conventional half-up rule instead.
    """

    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def round_to_step(value: float, step: float) -> float:
    """Round ``value`` half-up to the nearest multiple of ``step``."""

    return round_half_up(value / step) * step


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals."""

    return round_half_up(value, 2)


def round_rate(value: float) -> float:
    """Round percentage values to two decimals."""

    return round_half_up(value, 2)


__all__ = ["round_currency", "round_half_up", "round_rate", "round_to_step"]
