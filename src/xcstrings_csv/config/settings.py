"""Tool defaults loaded from a YAML file and environment variables.

Precedence, lowest first: built-in defaults, the YAML file, ``XCSTRINGS_CSV_*``
environment variables, then explicit overrides supplied by the caller (the
command-line options).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..catalog.schema import DEFAULT_SOURCE_LANGUAGE, DEFAULT_VERSION
from ..errors import InvalidDelimiterError
from ..tabular.codec import (
    DEFAULT_COMMENT_COLUMN,
    DEFAULT_DELIMITER,
    DEFAULT_KEY_COLUMN,
    validate_delimiter,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".xcstrings-csv.yaml"
ENV_PREFIX = "XCSTRINGS_CSV_"

_ENVIRONMENT_FIELDS = {
    "DELIMITER": "delimiter",
    "LANGUAGES": "languages",
    "KEY_COLUMN": "key_column",
    "COMMENT_COLUMN": "comment_column",
}
_DELIMITER_ALIASES = {"\\t": "\t", "tab": "\t"}


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


def parse_delimiter(raw: str) -> str:
    """Translate textual aliases such as ``\\t`` or ``tab`` into the character."""

    return _DELIMITER_ALIASES.get(raw.lower(), raw)


def parse_languages(raw: str) -> tuple[str, ...]:
    """Split a comma-separated language list, dropping blank items."""

    return tuple(item.strip() for item in raw.split(",") if item.strip())


class ToolSettings(BaseModel):
    """Resolved defaults for exporting and importing tables."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    delimiter: str = DEFAULT_DELIMITER
    key_column: str = DEFAULT_KEY_COLUMN
    comment_column: str = DEFAULT_COMMENT_COLUMN
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    version: str = DEFAULT_VERSION
    languages: tuple[str, ...] | None = None
    backup: bool = True

    @field_validator("delimiter", mode="before")
    @classmethod
    def _coerce_delimiter(cls, value: Any) -> Any:
        if isinstance(value, str):
            return validate_delimiter(parse_delimiter(value))
        return value

    @field_validator("version", mode="before")
    @classmethod
    def _coerce_version(cls, value: Any) -> Any:
        # YAML reads an unquoted ``1.0`` as a float.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("languages", mode="before")
    @classmethod
    def _coerce_languages(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            return parse_languages(value)
        if isinstance(value, (list, tuple)):
            return tuple(str(item).strip() for item in value if str(item).strip())
        raise ConfigurationError("Languages must be a list or a comma-separated string")

    @field_validator("key_column", "comment_column", "source_language")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ConfigurationError("Column names and languages must not be blank")
        return value

    def with_overrides(self, **overrides: Any) -> ToolSettings:
        """Return a copy with every non-``None`` override applied and validated."""

        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return ToolSettings.model_validate(values)
        except ValidationError as error:
            raise ConfigurationError(f"Invalid settings: {error}") from error


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        raise ConfigurationError(f"Cannot parse {path}: {error}") from error
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def _environment_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for suffix, field in _ENVIRONMENT_FIELDS.items():
        name = f"{ENV_PREFIX}{suffix}"
        raw = environ.get(name)
        if not raw:
            continue
        if field == "delimiter":
            try:
                raw = validate_delimiter(parse_delimiter(raw))
            except InvalidDelimiterError:
                logger.warning("Ignoring invalid value for %s: %r", name, raw)
                continue
        overrides[field] = raw
    return overrides


def load_settings(
    path: str | os.PathLike[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    search_dir: str | os.PathLike[str] | None = None,
) -> ToolSettings:
    """Resolve settings from ``path`` (or the default file) and the environment."""

    values: dict[str, Any] = {}

    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        values.update(_load_yaml(config_path))
    else:
        default_path = Path(search_dir or Path.cwd()) / CONFIG_FILENAME
        if default_path.is_file():
            logger.info("Using configuration from %s", default_path)
            values.update(_load_yaml(default_path))

    values.update(_environment_overrides(os.environ if environ is None else environ))

    try:
        return ToolSettings.model_validate(values)
    except ValidationError as error:
        raise ConfigurationError(f"Invalid settings: {error}") from error


__all__ = [
    "CONFIG_FILENAME",
    "ConfigurationError",
    "ENV_PREFIX",
    "ToolSettings",
    "load_settings",
    "parse_delimiter",
    "parse_languages",
]
