"""Exception hierarchy shared by the catalogue store, codec and CLI."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for failures raised by catalogue operations."""


class CatalogNotFoundError(CatalogError, FileNotFoundError):
    """Raised when a catalogue or table file does not exist."""


class CatalogParseError(CatalogError, ValueError):
    """Raised when a document cannot be parsed into a catalogue."""


class MissingKeyColumnError(CatalogParseError):
    """Raised when a table header has no column matching the key column name."""


class CatalogWriteError(CatalogError, OSError):
    """Raised when persisting a document fails."""


class BackupError(CatalogWriteError):
    """Raised when copying an existing file to its backup path fails."""


class InvalidDelimiterError(CatalogError, ValueError):
    """Raised when a delimiter cannot be used to separate table fields."""


__all__ = [
    "BackupError",
    "CatalogError",
    "CatalogNotFoundError",
    "CatalogParseError",
    "CatalogWriteError",
    "InvalidDelimiterError",
    "MissingKeyColumnError",
]
