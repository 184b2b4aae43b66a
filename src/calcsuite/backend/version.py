"""Report the CalcSuite version from package metadata or ``pyproject.toml``."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "calcsuite"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version.

    Source checkouts that were never installed fall back to the ``[project]``
    table of ``pyproject.toml``.
    """

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    if not path.exists():
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    with path.open("rb") as handle:
        project = tomllib.load(handle).get("project", {})

    version = project.get("version")
    if not isinstance(version, str) or not version:
        raise RuntimeError(f"No [project] version declared in {path.name}")
    return version


__all__ = ["PACKAGE_NAME", "get_project_version", "read_pyproject_version"]
