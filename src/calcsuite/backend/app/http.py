"""Problem payloads returned by the CalcSuite error handlers."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from types import MappingProxyType
from typing import Any, Literal, Mapping

from flask import jsonify

ProblemCode = Literal["bad_request", "not_found", "validation_error"]

DEFAULT_STATUSES: Mapping[str, HTTPStatus] = MappingProxyType(
    {
        "bad_request": HTTPStatus.BAD_REQUEST,
        "not_found": HTTPStatus.NOT_FOUND,
        "validation_error": HTTPStatus.BAD_REQUEST,
    }
)


@dataclass(frozen=True)
class ProblemResponse:
    """RFC 7807-style error body: a machine-readable code plus optional detail."""

    error: ProblemCode
    status: HTTPStatus
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.extra:
            payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), int(self.status)


def problem_response(
    error: ProblemCode,
    *,
    message: str | None = None,
    status: HTTPStatus | int | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a problem for ``error``; the status defaults to the code's usual one."""

    resolved = DEFAULT_STATUSES[error] if status is None else HTTPStatus(status)
    return ProblemResponse(
        error=error, status=resolved, message=message, extra=dict(extra) or None
    )


__all__ = ["DEFAULT_STATUSES", "ProblemCode", "ProblemResponse", "problem_response"]
