"""Catalogue model, persistence and merge helpers."""

from .merge import merge
from .schema import Catalog, Entry, Translation
from .store import backup, load_catalog, read_table, save_catalog, write_table

__all__ = [
    "Catalog",
    "Entry",
    "Translation",
    "backup",
    "load_catalog",
    "merge",
    "read_table",
    "save_catalog",
    "write_table",
]
