"""Export ``.xcstrings`` catalogues to CSV and merge translated tables back.

The functions re-exported here are the operations the command-line front end
is built from; they can be used directly from other tooling.
"""

from .catalog import (
    Catalog,
    Entry,
    Translation,
    backup,
    load_catalog,
    merge,
    read_table,
    save_catalog,
    write_table,
)
from .errors import (
    BackupError,
    CatalogError,
    CatalogNotFoundError,
    CatalogParseError,
    CatalogWriteError,
    InvalidDelimiterError,
    MissingKeyColumnError,
)
from .tabular import decode_table, encode_table, export_table, import_table

__all__ = [
    "BackupError",
    "Catalog",
    "CatalogError",
    "CatalogNotFoundError",
    "CatalogParseError",
    "CatalogWriteError",
    "Entry",
    "InvalidDelimiterError",
    "MissingKeyColumnError",
    "Translation",
    "backup",
    "decode_table",
    "encode_table",
    "export_table",
    "import_table",
    "load_catalog",
    "merge",
    "read_table",
    "save_catalog",
    "write_table",
]
