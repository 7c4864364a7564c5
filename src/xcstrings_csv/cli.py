"""Command-line entry point for exporting and importing translation tables."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .catalog import backup, load_catalog, merge, save_catalog
from .config import ConfigurationError, ToolSettings, load_settings, parse_languages
from .errors import CatalogError
from .tabular import export_table, import_table
from .version import get_project_version

logger = logging.getLogger(__name__)

CATALOG_SUFFIXES = (".xcstrings",)
TABLE_SUFFIXES = (".csv", ".tsv", ".txt")

_EPILOG = """\
Exporting:
  %(prog)s <source xcstrings file> <dest csv file> [options]

Importing:
  %(prog)s <source csv file> <dest xcstrings file> [options]

Importing into an existing xcstrings file merges the translations into it
after saving a timestamped backup next to it.
"""


def _is_catalog(path: Path) -> bool:
    return path.suffix.lower() in CATALOG_SUFFIXES


def _is_table(path: Path) -> bool:
    return path.suffix.lower() in TABLE_SUFFIXES


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xcstrings-csv",
        description=(
            "Export xcstrings files to csv files and import csv files back into "
            "a new or existing xcstrings file."
        ),
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("source", help="File to read (.xcstrings to export, .csv to import)")
    parser.add_argument("destination", help="File to write")
    parser.add_argument(
        "-l",
        "--languages",
        help="Comma separated list of languages to export or import",
    )
    parser.add_argument(
        "-d",
        "--delimiter",
        help="Delimiter to use for csv (a single character, or \\t / tab)",
    )
    parser.add_argument("--key-column", help="Name of the key column when importing")
    parser.add_argument("--comment-column", help="Name of the comment column when importing")
    parser.add_argument("--config", help="YAML file with default settings")
    parser.add_argument(
        "--no-backup",
        dest="backup",
        action="store_const",
        const=False,
        default=None,
        help="Do not back up an existing xcstrings file before merging",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress details")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_project_version()}"
    )
    return parser


def _resolve_settings(args: argparse.Namespace) -> ToolSettings:
    settings = load_settings(args.config)
    return settings.with_overrides(
        delimiter=args.delimiter,
        languages=parse_languages(args.languages) if args.languages else None,
        key_column=args.key_column,
        comment_column=args.comment_column,
        backup=args.backup,
    )


def run_export(source: Path, destination: Path, settings: ToolSettings) -> Path:
    """Write the catalogue at ``source`` as a table to ``destination``."""

    catalog = load_catalog(source)
    written = export_table(catalog, destination, settings.languages, settings.delimiter)
    print(f"File written to {written}.")
    return written


def run_import(source: Path, destination: Path, settings: ToolSettings) -> Path:
    """Import the table at ``source`` into the catalogue at ``destination``.

    An existing catalogue is merged with the table (and backed up first unless
    disabled); otherwise the table alone becomes a new catalogue.
    """

    incoming = import_table(
        source,
        settings.key_column,
        settings.comment_column,
        settings.delimiter,
        settings.languages,
        source_language=settings.source_language,
        version=settings.version,
    )

    if destination.exists():
        existing = load_catalog(destination)
        result = merge(existing, incoming, settings.languages)
        if settings.backup:
            backup_path = backup(destination)
            if backup_path is not None:
                print(f"Backed up {destination} to {backup_path}.")
    else:
        result = incoming

    print(f"Writing {destination}.")
    return save_catalog(result, destination)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running exports and imports from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        settings = _resolve_settings(args)
    except (ConfigurationError, FileNotFoundError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1

    source = Path(args.source)
    destination = Path(args.destination)

    if not source.exists():
        print(f"{source} not found", file=sys.stderr)
        return 1

    try:
        if _is_catalog(source):
            run_export(source, destination, settings)
        elif _is_table(source) and _is_catalog(destination):
            run_import(source, destination, settings)
        else:
            parser.print_usage(sys.stderr)
            print(
                f"error: cannot convert {source.name} to {destination.name}; "
                "export from .xcstrings or import a table into .xcstrings",
                file=sys.stderr,
            )
            return 2
    except CatalogError as error:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {error}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
