"""Version lookup for ``--version`` output."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path

PACKAGE_NAME = "xcstrings-csv"
PYPROJECT_PATH = Path(__file__).resolve().parents[2] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed version, reading ``pyproject.toml`` in a bare checkout."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        with PYPROJECT_PATH.open("rb") as handle:
            return tomllib.load(handle)["project"]["version"]


__all__ = ["PACKAGE_NAME", "get_project_version"]
