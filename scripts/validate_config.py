#!/usr/bin/env python3
"""Check the tax-year YAML tables from a source checkout."""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running from a checkout without installing the package first.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from calcsuite.backend.config.validator import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())
