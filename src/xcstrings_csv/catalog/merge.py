"""One-way reconciliation of an updated catalogue into an existing one."""

from __future__ import annotations

import logging
from typing import Iterable

from .schema import Catalog, Entry, Translation

_LOGGER = logging.getLogger(__name__)


def _merge_entry(
    current: Entry,
    update: Entry,
    languages: frozenset[str] | None,
) -> Entry:
    translations: dict[str, Translation] = dict(current.translations)
    for language, translation in update.translations.items():
        if languages is not None and language not in languages:
            continue
        translations[language] = translation

    comment = current.comment if current.comment is not None else update.comment
    # extraction_state and unknown members stay those of ``current``.
    return current.model_copy(update={"comment": comment, "translations": translations})


def merge(
    existing: Catalog,
    incoming: Catalog,
    languages: Iterable[str] | None = None,
) -> Catalog:
    """Merge translation values from ``incoming`` into a copy of ``existing``.

    ``existing`` defines which keys are valid: incoming keys are trimmed of
    surrounding whitespace and dropped with a warning when they are unknown.
    For known keys, incoming translations overwrite the existing ones (only
    for ``languages`` when given); comments and extraction states of the
    existing catalogue are kept.
    """

    selected = frozenset(languages) if languages is not None else None
    merged: dict[str, Entry] = dict(existing.entries)

    for key, update in incoming.entries.items():
        trimmed_key = key.strip()
        current = merged.get(trimmed_key)
        if current is None:
            _LOGGER.warning("Key '%s' not found in existing catalogue; skipping", trimmed_key)
            continue
        merged[trimmed_key] = _merge_entry(current, update, selected)

    return existing.model_copy(update={"entries": merged})


__all__ = ["merge"]
