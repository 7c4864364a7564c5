"""Filesystem persistence for catalogues and their tabular exports."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from ..errors import BackupError, CatalogNotFoundError, CatalogParseError, CatalogWriteError
from .schema import Catalog

_LOGGER = logging.getLogger(__name__)

BACKUP_SUFFIX = ".org-"
BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%d-%H.%M.%S"


def _read_text(path: Path, *, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except FileNotFoundError as error:
        raise CatalogNotFoundError(f"{path} not found") from error
    except UnicodeDecodeError as error:
        raise CatalogParseError(f"{path} is not valid UTF-8: {error}") from error
    except OSError as error:
        raise CatalogParseError(f"Cannot read {path}: {error}") from error


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _atomic_write(path: Path, text: str) -> Path:
    """Write ``text`` to a sibling temporary file and move it over ``path``."""

    temp_path: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_path = handle.name
            handle.write(text)
        if path.exists():
            shutil.copymode(path, temp_path)
        else:
            os.chmod(temp_path, 0o666 & ~_current_umask())
        os.replace(temp_path, path)
    except OSError as error:
        if temp_path is not None and os.path.exists(temp_path):
            os.remove(temp_path)
        raise CatalogWriteError(f"Cannot write {path}: {error}") from error
    return path


def load_catalog(path: str | os.PathLike[str]) -> Catalog:
    """Load and validate the ``.xcstrings`` document at ``path``."""

    source = Path(path)
    raw = _read_text(source, encoding="utf-8")

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as error:
        raise CatalogParseError(f"{source} is not valid JSON: {error}") from error

    if not isinstance(payload, dict):
        raise CatalogParseError(f"{source} must contain a JSON object at the top level")

    try:
        return Catalog.from_document(payload)
    except ValidationError as error:
        raise CatalogParseError(f"{source} is not a valid catalogue: {error}") from error


def dump_catalog(catalog: Catalog) -> str:
    """Serialise ``catalog`` using the layout Xcode writes."""

    return (
        json.dumps(
            catalog.to_document(),
            ensure_ascii=False,
            indent=2,
            separators=(",", " : "),
            sort_keys=True,
        )
        + "\n"
    )


def save_catalog(catalog: Catalog, path: str | os.PathLike[str]) -> Path:
    """Persist ``catalog`` as pretty-printed JSON, replacing ``path`` atomically."""

    target = Path(path)
    _LOGGER.info("Writing catalogue with %d entries to %s", len(catalog.entries), target)
    return _atomic_write(target, dump_catalog(catalog))


def backup_path_for(path: str | os.PathLike[str], *, now: datetime | None = None) -> Path:
    """Return the timestamped sibling used to back up ``path``."""

    source = Path(path)
    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    return source.with_name(f"{source.name}{BACKUP_SUFFIX}{stamp}")


def backup(path: str | os.PathLike[str], *, now: datetime | None = None) -> Path | None:
    """Copy an existing file to its timestamped backup path.

    Returns the backup location, or ``None`` when there is nothing to back up.
    A backup taken within the same second as an earlier one gets a numeric
    suffix instead of replacing it.
    """

    source = Path(path)
    if not source.exists():
        return None

    stamped = backup_path_for(source, now=now)
    destination = stamped
    counter = 1
    while destination.exists():
        destination = stamped.with_name(f"{stamped.name}-{counter}")
        counter += 1

    try:
        shutil.copy2(source, destination)
    except OSError as error:
        raise BackupError(f"Cannot back up {source} to {destination}: {error}") from error

    _LOGGER.info("Backed up %s to %s", source, destination)
    return destination


def read_table(path: str | os.PathLike[str]) -> str:
    """Return the text of a delimited table file, ignoring a leading BOM."""

    return _read_text(Path(path), encoding="utf-8-sig")


def write_table(text: str, path: str | os.PathLike[str]) -> Path:
    """Write delimited table text to ``path`` atomically."""

    return _atomic_write(Path(path), text)


__all__ = [
    "BACKUP_SUFFIX",
    "BACKUP_TIMESTAMP_FORMAT",
    "backup",
    "backup_path_for",
    "dump_catalog",
    "load_catalog",
    "read_table",
    "save_catalog",
    "write_table",
]
