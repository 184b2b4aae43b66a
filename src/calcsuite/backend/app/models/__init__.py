"""Typed request/response models shared across the calculation services.

Requests arrive as loose JSON bags. ``api`` holds the envelope models that
validate the transport shape, while ``inputs`` holds the per-calculator records
that read a ``values`` bag with the permissive default policy. Keeping both
here lets routes, the calculation service and direct library callers share a
single schema.
"""

from __future__ import annotations

from .api import (
    CalculationRequest,
    CalculationResponse,
    CalculatorPayload,
    CalculatorResult,
    CalculatorText,
    ResponseMeta,
    ResultMetadata,
    format_validation_error,
)
from .inputs import (
    BtuInputs,
    CalculatorInputs,
    IncomeTaxInputs,
    PaycheckInputs,
    WaterIntakeInputs,
    coerce_number,
)

__all__ = [
    "BtuInputs",
    "CalculationRequest",
    "CalculationResponse",
    "CalculatorInputs",
    "CalculatorPayload",
    "CalculatorResult",
    "CalculatorText",
    "IncomeTaxInputs",
    "PaycheckInputs",
    "ResponseMeta",
    "ResultMetadata",
    "WaterIntakeInputs",
    "coerce_number",
    "format_validation_error",
]
