"""Locale catalogues shared by the calculators and the HTTP layer."""

from .catalog import (
    Translator,
    available_locales,
    get_calculator_text,
    get_translator,
    load_translations,
    normalise_locale,
)

__all__ = [
    "Translator",
    "available_locales",
    "get_calculator_text",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
