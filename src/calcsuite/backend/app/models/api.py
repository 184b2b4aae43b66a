"""Pydantic models describing the public API surface."""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Real
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from typing_extensions import Self

__all__ = [
    "CalculationRequest",
    "CalculationResponse",
    "CalculatorPayload",
    "CalculatorResult",
    "CalculatorText",
    "ResponseMeta",
    "ResultMetadata",
    "format_validation_error",
]


def _validate_scalar_bag(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError("Values must be an object mapping field identifiers to scalars")

    bag: dict[str, Any] = {}
    for key, raw in value.items():
        if raw is not None and not isinstance(raw, (str, bool, Real)):
            raise ValueError(
                f"Value for '{key}' must be a number, string, boolean or null"
            )
        bag[str(key)] = raw
    return bag


def _validate_string_map(value: Any, label: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{label} must be an object mapping identifiers to strings")
    return {str(key): str(raw) for key, raw in value.items() if raw is not None}


class CalculatorText(BaseModel):
    """Localized unit labels and summary templates consumed by a calculator."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    values: Mapping[str, str] = Field(default_factory=dict)
    formats: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("values", "formats", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> dict[str, str]:
        return _validate_string_map(value, "Text entries")

    def label(self, key: str, default: str) -> str:
        return self.values.get(key) or default

    def template(self, key: str = "summary") -> str | None:
        return self.formats.get(key) or None


class CalculatorPayload(BaseModel):
    """Input bag handed to a calculator function."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    values: Mapping[str, Any] = Field(default_factory=dict)
    field_units: Mapping[str, str] = Field(default_factory=dict, alias="fieldUnits")
    t: CalculatorText = Field(default_factory=CalculatorText)
    year: int | None = None

    @field_validator("values", mode="before")
    @classmethod
    def _coerce_values(cls, value: Any) -> dict[str, Any]:
        return _validate_scalar_bag(value)

    @field_validator("field_units", mode="before")
    @classmethod
    def _coerce_units(cls, value: Any) -> dict[str, str]:
        return _validate_string_map(value, "Field units")

    @field_validator("t", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def coerce(cls, payload: "CalculatorPayload | Mapping[str, Any]") -> Self:
        """Accept either a payload instance or a raw ``{values, fieldUnits, t}`` mapping."""

        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, Mapping):
            raise TypeError("Calculator payload must be a mapping")
        return cls.model_validate(payload)

    def unit(self, field: str, default: str) -> str:
        return self.field_units.get(field) or default


class ResultMetadata(BaseModel):
    """Auxiliary chart and table payloads rendered by the UI layer."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    chart_data: list[dict[str, Any]] | None = Field(default=None, alias="chartData")
    table_data: list[dict[str, Any]] | None = Field(default=None, alias="tableData")


class CalculatorResult(BaseModel):
    """Outcome of a single calculator invocation."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    values: dict[str, float] = Field(default_factory=dict)
    formatted: dict[str, str] = Field(default_factory=dict)
    summary: str = ""
    is_valid: bool = Field(default=True, alias="isValid")
    metadata: ResultMetadata | None = None

    @classmethod
    def invalid(cls) -> Self:
        """Return the sentinel used when required inputs are missing or out of range."""

        return cls(values={}, formatted={}, summary="", is_valid=False)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CalculationRequest(BaseModel):
    """Request body accepted by the calculation endpoint."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    values: dict[str, Any] = Field(default_factory=dict)
    field_units: dict[str, str] = Field(default_factory=dict, alias="fieldUnits")
    locale: str | None = None
    year: int | None = Field(default=None, ge=1900, le=2100)
    t: CalculatorText | None = None

    @field_validator("values", mode="before")
    @classmethod
    def _validate_values(cls, value: Any) -> dict[str, Any]:
        return _validate_scalar_bag(value)

    @field_validator("field_units", mode="before")
    @classmethod
    def _validate_units(cls, value: Any) -> dict[str, str]:
        return _validate_string_map(value, "Field units")


class ResponseMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    calculator: str
    locale: str
    year: int | None = None


class CalculationResponse(BaseModel):
    """Full response payload produced by the calculation service."""

    model_config = ConfigDict(extra="forbid")

    result: dict[str, Any]
    meta: ResponseMeta


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
