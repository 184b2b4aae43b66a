"""Tests for the localisation catalogue helpers."""

from __future__ import annotations

import json
from pathlib import Path

from calcsuite.backend.app.localization import (
    available_locales,
    get_calculator_text,
    get_translator,
    load_translations,
    normalise_locale,
)

TRANSLATIONS_DIR = Path(__file__).resolve().parents[2] / "src" / "calcsuite" / "translations"


def _read_backend_value(locale: str, key: str) -> str:
    payload = json.loads(
        TRANSLATIONS_DIR.joinpath(f"{locale}.json").read_text(encoding="utf-8")
    )
    return str(payload["backend"][key])


def test_available_locales_lists_shipped_catalogues() -> None:
    assert available_locales() == ["de", "en", "es", "fr", "pt"]


def test_normalise_locale_reduces_to_primary_tag() -> None:
    assert normalise_locale("es-MX") == "es"
    assert normalise_locale(" PT_br ") == "pt"
    assert normalise_locale("el") == "en"
    assert normalise_locale(None) == "en"
    assert normalise_locale("") == "en"


def test_get_translator_loads_shared_catalogue() -> None:
    """The translator should pull labels from the shared JSON catalogue."""

    translator = get_translator("de")
    key = "calculators.btu-calculator.name"

    assert translator.locale == "de"
    assert translator(key) == _read_backend_value("de", key)


def test_get_translator_falls_back_to_default_locale() -> None:
    """Unknown locales should fall back to the base catalogue."""

    translator = get_translator("ja")
    key = "calculators.paycheck-calculator.name"

    assert translator.locale == "en"
    assert translator(key) == _read_backend_value("en", key)
    assert translator("calculators.unknown.name") == "calculators.unknown.name"


def test_get_calculator_text_strips_prefixes() -> None:
    text = get_calculator_text("btu-calculator", "es")

    assert text.values["cooling"] == "enfriamiento"
    assert text.values["Base Load"] == _read_backend_value(
        "es", "calculators.btu-calculator.values.Base Load"
    )
    assert "{btu}" in text.formats["summary"]
    assert "name" not in text.values


def test_get_calculator_text_for_unknown_calculator_is_empty() -> None:
    text = get_calculator_text("mortgage-calculator", "en")

    assert dict(text.values) == {}
    assert text.template() is None


def test_load_translations_exposes_catalogue_payload() -> None:
    """The API helper should expose both backend and frontend catalogues."""

    payload = load_translations("fr-CA")
    key = "calculators.water-intake-calculator.name"

    assert payload["locale"] == "fr"
    assert payload["available_locales"] == available_locales()
    assert payload["backend"][key] == _read_backend_value("fr", key)
    assert isinstance(payload["frontend"], dict)
    assert payload["fallback"]["locale"] == "en"
    assert payload["fallback"]["backend"][key] == _read_backend_value("en", key)
