#!/usr/bin/env python3
"""Check that every translation catalogue matches the English one.

Each locale must define the same backend and frontend keys as ``en.json`` and
use the same ``{placeholder}`` tokens in every message. Every registered
calculator must also publish a name and a summary template.
"""

from __future__ import annotations

import argparse
import json
import re
import sys
from collections import defaultdict
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
TRANSLATIONS_DIR = SRC_DIR / "calcsuite" / "translations"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from calcsuite.backend.app.services.calculation_service import CALCULATORS  # noqa: E402

PLACEHOLDER_PATTERN = re.compile(r"{([a-zA-Z0-9_]+)}")
BASE_LOCALE = "en"
REQUIRED_CALCULATOR_KEYS = ("name", "description", "formats.summary")

Catalogues = dict[str, dict[str, dict[str, str]]]


class ValidationError(Exception):
    """Raised when validation detects unrecoverable issues."""


def _flatten_messages(tree: dict, prefix: str = "") -> dict[str, str]:
    items: dict[str, str] = {}
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            items.update(_flatten_messages(value, path))
        else:
            items[path] = "" if value is None else str(value)
    return items


def load_catalogues(directory: Path = TRANSLATIONS_DIR) -> Catalogues:
    catalogues: Catalogues = {}
    if not directory.is_dir():
        raise ValidationError(f"Missing translations directory: {directory}")

    for path in sorted(directory.glob("*.json")):
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)

        if not isinstance(payload, dict):
            raise ValidationError(f"Unexpected payload format in {path}")

        backend = payload.get("backend") or {}
        frontend = payload.get("frontend") or {}
        if not isinstance(backend, dict) or not isinstance(frontend, dict):
            raise ValidationError(
                f"Translation payload must define backend/frontend mappings: {path}"
            )

        catalogues[path.stem] = {
            "backend": _flatten_messages(backend),
            "frontend": _flatten_messages(frontend),
        }

    if BASE_LOCALE not in catalogues:
        raise ValidationError(f"The '{BASE_LOCALE}' catalogue is required")
    return catalogues


def missing_keys(catalogues: Catalogues) -> list[str]:
    issues: list[str] = []
    base = catalogues[BASE_LOCALE]
    for section in ("backend", "frontend"):
        expected = set(base[section])
        for locale, payload in sorted(catalogues.items()):
            missing = expected - set(payload[section])
            extra = set(payload[section]) - expected
            if missing:
                issues.append(
                    f"Locale '{locale}' missing {len(missing)} {section} keys: "
                    f"{', '.join(sorted(missing))}"
                )
            if extra:
                issues.append(
                    f"Locale '{locale}' defines unknown {section} keys: "
                    f"{', '.join(sorted(extra))}"
                )
    return issues


def placeholder_inconsistencies(catalogues: Catalogues) -> list[str]:
    placeholders: dict[str, dict[str, frozenset[str]]] = defaultdict(dict)
    for locale, sections in catalogues.items():
        for section, messages in sections.items():
            for key, message in messages.items():
                tokens = frozenset(PLACEHOLDER_PATTERN.findall(message))
                placeholders[f"{section}:{key}"][locale] = tokens

    issues: list[str] = []
    for key, locale_map in sorted(placeholders.items()):
        if len(set(locale_map.values())) <= 1:
            continue
        details = ", ".join(
            f"{locale}={{{', '.join(sorted(tokens))}}}"
            for locale, tokens in sorted(locale_map.items())
        )
        issues.append(f"{key} placeholders differ: {details}")
    return issues


def missing_calculator_entries(catalogues: Catalogues) -> list[str]:
    backend = catalogues[BASE_LOCALE]["backend"]
    issues: list[str] = []
    for calculator_id in CALCULATORS:
        for suffix in REQUIRED_CALCULATOR_KEYS:
            key = f"calculators.{calculator_id}.{suffix}"
            if not backend.get(key):
                issues.append(f"Calculator '{calculator_id}' has no '{key}' entry")
    return issues


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--directory",
        type=Path,
        default=TRANSLATIONS_DIR,
        help="Directory holding the <locale>.json catalogues",
    )
    args = parser.parse_args(argv)

    try:
        catalogues = load_catalogues(args.directory)
    except ValidationError as exc:
        print(f"[error] {exc}")
        return 1

    reports = (
        ("missing", missing_keys(catalogues)),
        ("placeholder", placeholder_inconsistencies(catalogues)),
        ("calculator", missing_calculator_entries(catalogues)),
    )

    failed = False
    for label, issues in reports:
        for issue in issues:
            print(f"[{label}] {issue}")
            failed = True

    if not failed:
        print(f"{len(catalogues)} catalogues OK: {', '.join(sorted(catalogues))}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
