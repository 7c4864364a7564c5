"""Pydantic models describing the ``.xcstrings`` catalogue document."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_SOURCE_LANGUAGE = "en"
DEFAULT_VERSION = "1.0"


class ImmutableModel(BaseModel):
    """Base class that freezes instances and accepts field names or aliases."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Translation(ImmutableModel):
    """One language's value and status for a catalogue entry.

    The persisted form nests both fields under ``stringUnit``; the wrapper is
    removed on validation and restored by :meth:`to_document`.
    """

    state: str
    value: str

    @model_validator(mode="before")
    @classmethod
    def _unwrap_string_unit(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "stringUnit" in data:
            return data["stringUnit"]
        return data

    def to_document(self) -> dict[str, Any]:
        """Return the localization wrapped in its ``stringUnit`` member."""

        return {"stringUnit": {"state": self.state, "value": self.value}}


class Entry(ImmutableModel):
    """A translatable key with its metadata and per-language translations."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    comment: str | None = None
    extraction_state: str | None = Field(default=None, alias="extractionState")
    translations: Mapping[str, Translation] = Field(
        default_factory=dict, alias="localizations"
    )

    def value_for(self, language: str) -> str | None:
        """Return the translated value for ``language`` when present."""

        translation = self.translations.get(language)
        return translation.value if translation is not None else None

    def to_document(self) -> dict[str, Any]:
        """Return the entry's JSON members, omitting unset metadata.

        Members the model does not know about are written back unchanged.
        """

        document: dict[str, Any] = dict(self.model_extra or {})
        if self.comment is not None:
            document["comment"] = self.comment
        if self.extraction_state is not None:
            document["extractionState"] = self.extraction_state
        document["localizations"] = {
            language: translation.to_document()
            for language, translation in self.translations.items()
        }
        return document


class Catalog(ImmutableModel):
    """The full localisation dataset: every key in every language."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    source_language: str = Field(default=DEFAULT_SOURCE_LANGUAGE, alias="sourceLanguage")
    version: str = DEFAULT_VERSION
    entries: Mapping[str, Entry] = Field(alias="strings")

    @classmethod
    def from_document(cls, payload: Mapping[str, Any]) -> Catalog:
        """Validate a decoded JSON document."""

        return cls.model_validate(payload)

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-serialisable ``.xcstrings`` representation."""

        document: dict[str, Any] = dict(self.model_extra or {})
        document["sourceLanguage"] = self.source_language
        document["strings"] = {key: entry.to_document() for key, entry in self.entries.items()}
        document["version"] = self.version
        return document

    def languages(self) -> list[str]:
        """Return the sorted union of languages used by any entry."""

        found: set[str] = set()
        for entry in self.entries.values():
            found.update(entry.translations)
        return sorted(found)

    def sorted_entries(self) -> Iterable[tuple[str, Entry]]:
        """Yield entries in ascending code-point order of their keys."""

        for key in sorted(self.entries):
            yield key, self.entries[key]


__all__ = [
    "Catalog",
    "DEFAULT_SOURCE_LANGUAGE",
    "DEFAULT_VERSION",
    "Entry",
    "ImmutableModel",
    "Translation",
]
