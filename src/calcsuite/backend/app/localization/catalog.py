"""Translation catalogues stored as JSON resources inside the package."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import cache
from importlib import resources
from typing import Any, Mapping

from calcsuite.backend.app.models import CalculatorText

_BASE_LOCALE = "en"
_TRANSLATIONS_PACKAGE = "calcsuite.translations"
_CALCULATOR_PREFIX = "calculators."


@dataclass(frozen=True)
class Translator:
    """Callable helper for retrieving localized strings."""

    locale: str
    _messages: Mapping[str, str]
    _fallback: Mapping[str, str]

    def __call__(self, key: str) -> str:
        return self._messages.get(key) or self._fallback.get(key, key)


@dataclass(frozen=True)
class Catalogue:
    """Backend and frontend strings published for one locale."""

    locale: str
    backend: Mapping[str, str]
    frontend: Mapping[str, Any]


@cache
def _available_locales() -> tuple[str, ...]:
    root = resources.files(_TRANSLATIONS_PACKAGE)
    locales = sorted(
        entry.name.removesuffix(".json")
        for entry in root.iterdir()
        if entry.name.endswith(".json")
    )
    return tuple(locales) or (_BASE_LOCALE,)


@cache
def _read_catalogue_payload(locale: str) -> dict[str, Any]:
    """Load the raw translation payload for the requested locale."""

    resource = resources.files(_TRANSLATIONS_PACKAGE).joinpath(f"{locale}.json")
    if not resource.is_file():
        return {"backend": {}, "frontend": {}}

    with resource.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    backend = payload.get("backend") or {}
    frontend = payload.get("frontend") or {}
    if not isinstance(backend, dict) or not isinstance(frontend, dict):
        raise ValueError(f"Translation catalogue '{locale}' must contain objects")

    return {"backend": backend, "frontend": frontend}


@cache
def _load_catalogue(locale: str) -> Catalogue:
    payload = _read_catalogue_payload(locale)
    backend = {key: str(value) for key, value in payload["backend"].items()}
    return Catalogue(locale=locale, backend=backend, frontend=payload["frontend"])


def available_locales() -> list[str]:
    """Return the locales with a published catalogue, sorted alphabetically."""

    return list(_available_locales())


def normalise_locale(locale: str | None) -> str:
    """Normalise requested locale to a supported catalogue key."""

    if not locale:
        return _BASE_LOCALE

    normalized = locale.strip().lower().replace("_", "-").split("-")[0]
    return normalized if normalized in _available_locales() else _BASE_LOCALE


def get_translator(locale: str | None = None) -> Translator:
    """Return a translator instance for the requested locale."""

    normalized = normalise_locale(locale)
    catalogue = _load_catalogue(normalized)
    fallback = _load_catalogue(_BASE_LOCALE)

    return Translator(
        locale=catalogue.locale,
        _messages=catalogue.backend,
        _fallback=fallback.backend,
    )


def _collect_section(
    messages: Mapping[str, str], calculator_id: str, section: str
) -> dict[str, str]:
    prefix = f"{_CALCULATOR_PREFIX}{calculator_id}.{section}."
    return {
        key[len(prefix):]: value
        for key, value in messages.items()
        if key.startswith(prefix) and value
    }


@cache
def _calculator_text(calculator_id: str, locale: str) -> CalculatorText:
    catalogue = _load_catalogue(locale)
    fallback = _load_catalogue(_BASE_LOCALE)

    values = _collect_section(fallback.backend, calculator_id, "values")
    values.update(_collect_section(catalogue.backend, calculator_id, "values"))
    formats = _collect_section(fallback.backend, calculator_id, "formats")
    formats.update(_collect_section(catalogue.backend, calculator_id, "formats"))
    return CalculatorText(values=values, formats=formats)


def get_calculator_text(calculator_id: str, locale: str | None = None) -> CalculatorText:
    """Return the unit labels and summary templates of one calculator.

    Keys missing from the requested locale are filled from the English
    catalogue, so a partially translated locale still renders every label.
    """

    return _calculator_text(calculator_id, normalise_locale(locale))


def load_translations(locale: str | None = None) -> dict[str, Any]:
    """Expose combined backend/frontend translations for API consumers."""

    normalized = normalise_locale(locale)
    catalogue = _load_catalogue(normalized)
    fallback = _load_catalogue(_BASE_LOCALE)

    return {
        "locale": normalized,
        "available_locales": list(_available_locales()),
        "backend": dict(catalogue.backend),
        "frontend": catalogue.frontend,
        "fallback": {
            "locale": _BASE_LOCALE,
            "backend": dict(fallback.backend),
            "frontend": fallback.frontend,
        },
    }


__all__ = [
    "Catalogue",
    "Translator",
    "available_locales",
    "get_calculator_text",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
