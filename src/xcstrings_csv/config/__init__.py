"""Configuration helpers for the command-line front end."""

from .settings import (
    CONFIG_FILENAME,
    ConfigurationError,
    ToolSettings,
    load_settings,
    parse_delimiter,
    parse_languages,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigurationError",
    "ToolSettings",
    "load_settings",
    "parse_delimiter",
    "parse_languages",
]
