"""Conversion between catalogues and delimited translation tables.

Exported tables have one header row, ``Key<d><lang...><d>Comment``, followed
by one row per catalogue entry sorted by key. A field is wrapped in double
quotes, with embedded quotes doubled, only when it contains the delimiter, a
quote or a line break. Imported tables are read with the :mod:`csv` module so
that spreadsheet exports using the same conventions decode losslessly.
"""

from __future__ import annotations

import csv
import io
import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

from ..catalog.schema import (
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_VERSION,
    Catalog,
    Entry,
    Translation,
)
from ..catalog.store import read_table, write_table
from ..errors import CatalogParseError, InvalidDelimiterError, MissingKeyColumnError

_LOGGER = logging.getLogger(__name__)

DEFAULT_DELIMITER = ";"
DEFAULT_KEY_COLUMN = "Key"
DEFAULT_COMMENT_COLUMN = "comment"
KEY_HEADER = "Key"
COMMENT_HEADER = "Comment"
QUOTE = '"'
IMPORTED_STATE = "translated"
IMPORTED_EXTRACTION_STATE = "manual"

_BYTE_ORDER_MARK = "\ufeff"


def validate_delimiter(delimiter: str) -> str:
    """Return ``delimiter`` when it can separate fields, raising otherwise."""

    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise InvalidDelimiterError(f"Delimiter must be a single character, got {delimiter!r}")
    if delimiter in (QUOTE, "\n", "\r"):
        raise InvalidDelimiterError(f"{delimiter!r} cannot be used as a delimiter")
    return delimiter


def quote_field(value: str, delimiter: str) -> str:
    """Quote ``value`` when it would otherwise break the row structure."""

    if delimiter in value or QUOTE in value or "\n" in value or "\r" in value:
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def export_languages(catalog: Catalog, languages: Iterable[str] | None = None) -> list[str]:
    """Return the language columns an export of ``catalog`` will contain.

    Without a filter every language used by any entry is exported, sorted.
    With a filter the requested languages keep their given order and those no
    entry carries are left out.
    """

    available = catalog.languages()
    if languages is None:
        return available

    present = set(available)
    return [language for language in dict.fromkeys(languages) if language in present]


def encode_table(
    catalog: Catalog,
    languages: Iterable[str] | None = None,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    """Render ``catalog`` as delimited text with one row per entry."""

    delimiter = validate_delimiter(delimiter)
    columns = export_languages(catalog, languages)

    def _row(fields: Sequence[str]) -> str:
        return delimiter.join(quote_field(field, delimiter) for field in fields)

    lines = [_row([KEY_HEADER, *columns, COMMENT_HEADER])]
    for key, entry in catalog.sorted_entries():
        values = [entry.value_for(language) or "" for language in columns]
        lines.append(_row([key, *values, entry.comment or ""]))

    return "\n".join(lines) + "\n"


def _find_column(names: Sequence[str], wanted: str, *, skip: int | None = None) -> int | None:
    target = wanted.strip().casefold()
    for index, name in enumerate(names):
        if index != skip and name.casefold() == target:
            return index
    return None


def _language_columns(
    names: Sequence[str],
    reserved: Iterable[str],
    languages: Iterable[str] | None,
) -> list[tuple[str, int]]:
    excluded = {name.strip().casefold() for name in reserved}
    selected = set(languages) if languages is not None else None

    columns: list[tuple[str, int]] = []
    for index, name in enumerate(names):
        if not name or name.casefold() in excluded:
            continue
        if selected is not None and name not in selected:
            continue
        columns.append((name, index))
    return columns


def _cell(row: Sequence[str], index: int | None) -> str | None:
    if index is None or index >= len(row):
        return None
    return row[index]


def decode_table(
    text: str,
    key_column: str = DEFAULT_KEY_COLUMN,
    comment_column: str = DEFAULT_COMMENT_COLUMN,
    delimiter: str = DEFAULT_DELIMITER,
    languages: Iterable[str] | None = None,
    *,
    source_language: str = DEFAULT_SOURCE_LANGUAGE,
    version: str = DEFAULT_VERSION,
) -> Catalog:
    """Parse delimited text into a partial catalogue.

    Raises :class:`MissingKeyColumnError` when no header cell matches
    ``key_column`` (case-insensitively). Rows without a key are skipped with a
    warning; a repeated key replaces the earlier row.
    """

    delimiter = validate_delimiter(delimiter)
    if text.startswith(_BYTE_ORDER_MARK):
        text = text[1:]

    reader = csv.reader(
        io.StringIO(text, newline=""), delimiter=delimiter, quotechar=QUOTE, strict=True
    )
    entries: dict[str, Entry] = {}

    try:
        header = next(reader, None)
        names = [cell.strip() for cell in header or []]
        key_index = _find_column(names, key_column)
        if key_index is None:
            raise MissingKeyColumnError(f"A key column named '{key_column}' was not found")
        comment_index = _find_column(names, comment_column, skip=key_index)
        columns = _language_columns(names, (key_column, comment_column), languages)

        for row in reader:
            if not row:
                continue
            key = _cell(row, key_index)
            if key is None or not key.strip():
                _LOGGER.warning(
                    "Skipping line %d: no value in key column '%s'", reader.line_num, key_column
                )
                continue

            translations: dict[str, Translation] = {}
            for language, index in columns:
                value = _cell(row, index)
                if value is not None:
                    translations[language] = Translation(state=IMPORTED_STATE, value=value)

            entries[key] = Entry(
                comment=_cell(row, comment_index) or None,
                extraction_state=IMPORTED_EXTRACTION_STATE,
                translations=translations,
            )
    except csv.Error as error:
        raise CatalogParseError(f"Malformed table at line {reader.line_num}: {error}") from error

    return Catalog(source_language=source_language, version=version, entries=entries)


def export_table(
    catalog: Catalog,
    path: str | os.PathLike[str],
    languages: Iterable[str] | None = None,
    delimiter: str = DEFAULT_DELIMITER,
) -> Path:
    """Encode ``catalog`` and write the table to ``path``."""

    return write_table(encode_table(catalog, languages, delimiter), path)


def import_table(
    path: str | os.PathLike[str],
    key_column: str = DEFAULT_KEY_COLUMN,
    comment_column: str = DEFAULT_COMMENT_COLUMN,
    delimiter: str = DEFAULT_DELIMITER,
    languages: Iterable[str] | None = None,
    *,
    source_language: str = DEFAULT_SOURCE_LANGUAGE,
    version: str = DEFAULT_VERSION,
) -> Catalog:
    """Read the table at ``path`` and decode it into a partial catalogue."""

    return decode_table(
        read_table(path),
        key_column,
        comment_column,
        delimiter,
        languages,
        source_language=source_language,
        version=version,
    )


__all__ = [
    "COMMENT_HEADER",
    "DEFAULT_COMMENT_COLUMN",
    "DEFAULT_DELIMITER",
    "DEFAULT_KEY_COLUMN",
    "KEY_HEADER",
    "decode_table",
    "encode_table",
    "export_languages",
    "export_table",
    "import_table",
    "quote_field",
    "validate_delimiter",
]
