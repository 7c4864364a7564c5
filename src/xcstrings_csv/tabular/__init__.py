"""Delimited table import and export for translation round trips."""

from .codec import (
    DEFAULT_COMMENT_COLUMN,
    DEFAULT_DELIMITER,
    DEFAULT_KEY_COLUMN,
    decode_table,
    encode_table,
    export_languages,
    export_table,
    import_table,
    quote_field,
    validate_delimiter,
)

__all__ = [
    "DEFAULT_COMMENT_COLUMN",
    "DEFAULT_DELIMITER",
    "DEFAULT_KEY_COLUMN",
    "decode_table",
    "encode_table",
    "export_languages",
    "export_table",
    "import_table",
    "quote_field",
    "validate_delimiter",
]
