"""Unit coverage for loading, saving and backing up catalogue files."""

from __future__ import annotations

import json
import stat
from datetime import datetime
from pathlib import Path

import pytest

from xcstrings_csv.catalog import Catalog, Entry, Translation, backup, load_catalog, save_catalog
from xcstrings_csv.catalog.store import backup_path_for, read_table, write_table
from xcstrings_csv.errors import (
    BackupError,
    CatalogNotFoundError,
    CatalogParseError,
    CatalogWriteError,
)


def test_load_catalog_parses_reference_file(source_catalog: Catalog) -> None:
    """Entries, translations and document metadata should be exposed."""

    assert len(source_catalog.entries) == 3
    assert source_catalog.source_language == "en"
    assert source_catalog.version == "1.0"

    connected = source_catalog.entries["Connected scoreboards"]
    assert len(connected.translations) == 5
    assert connected.comment == "Connected scoreboards"
    assert connected.value_for("de") == "Verbundene Anzeigetafeln"
    assert connected.value_for("fr") == "Tableaux de scores connectés"
    assert connected.translations["fr"].state == "translated"


def test_load_catalog_keeps_missing_comment_absent(source_catalog: Catalog) -> None:
    deuce = source_catalog.entries["Deuce"]

    assert deuce.comment is None
    assert deuce.extraction_state == "manual"


def test_save_catalog_reproduces_xcode_layout(data_dir: Path, tmp_path: Path) -> None:
    """A load/save cycle should leave an Xcode formatted file byte-identical."""

    original = data_dir / "Localizable.xcstrings"
    target = tmp_path / "Localizable.xcstrings"

    save_catalog(load_catalog(original), target)

    assert target.read_text(encoding="utf-8") == original.read_text(encoding="utf-8")


def test_save_catalog_preserves_unknown_members(source_catalog: Catalog, tmp_path: Path) -> None:
    target = save_catalog(source_catalog, tmp_path / "out.xcstrings")

    payload = json.loads(target.read_text(encoding="utf-8"))

    assert payload["strings"]["Deuce"]["shouldTranslate"] is True
    assert "comment" not in payload["strings"]["Deuce"]


def test_save_catalog_writes_nested_string_units(tmp_path: Path) -> None:
    catalog = Catalog(
        source_language="sv",
        version="1.1",
        entries={
            "Score": Entry(
                comment='Says "score"',
                extraction_state="manual",
                translations={"sv": Translation(state="needs_review", value="Poäng\nny rad")},
            )
        },
    )

    payload = json.loads(save_catalog(catalog, tmp_path / "new.xcstrings").read_text("utf-8"))

    assert payload == {
        "sourceLanguage": "sv",
        "version": "1.1",
        "strings": {
            "Score": {
                "comment": 'Says "score"',
                "extractionState": "manual",
                "localizations": {
                    "sv": {"stringUnit": {"state": "needs_review", "value": "Poäng\nny rad"}}
                },
            }
        },
    }


def test_save_catalog_replaces_existing_file(catalog_copy: Path, source_catalog: Catalog) -> None:
    trimmed = source_catalog.model_copy(
        update={"entries": {"Deuce": source_catalog.entries["Deuce"]}}
    )

    save_catalog(trimmed, catalog_copy)

    assert list(load_catalog(catalog_copy).entries) == ["Deuce"]
    assert [path.name for path in catalog_copy.parent.iterdir()] == [catalog_copy.name]


def test_save_catalog_reports_write_failures(source_catalog: Catalog, tmp_path: Path) -> None:
    with pytest.raises(CatalogWriteError):
        save_catalog(source_catalog, tmp_path / "missing" / "out.xcstrings")


def test_load_catalog_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CatalogNotFoundError):
        load_catalog(tmp_path / "absent.xcstrings")


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"sourceLanguage": "en", "version": "1.0"}',
        '{"strings": {"a": {"localizations": {"fr": {"stringUnit": {"state": "new"}}}}}}',
    ],
)
def test_load_catalog_rejects_malformed_documents(tmp_path: Path, content: str) -> None:
    """Invalid JSON or a document without the catalogue shape is a parse error."""

    path = tmp_path / "broken.xcstrings"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(CatalogParseError):
        load_catalog(path)


def test_backup_copies_file_with_timestamp_suffix(catalog_copy: Path) -> None:
    now = datetime(2024, 11, 23, 9, 5, 7)

    created = backup(catalog_copy, now=now)

    assert created == catalog_copy.with_name("Localizable.xcstrings.org-2024-11-23-09.05.07")
    assert created.read_bytes() == catalog_copy.read_bytes()


def test_backup_is_noop_without_existing_file(tmp_path: Path) -> None:
    assert backup(tmp_path / "absent.xcstrings") is None
    assert list(tmp_path.iterdir()) == []


def test_backup_reports_copy_failures(
    catalog_copy: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def refuse_copy(*_: object, **__: object) -> None:
        raise PermissionError("read-only volume")

    monkeypatch.setattr("xcstrings_csv.catalog.store.shutil.copy2", refuse_copy)

    with pytest.raises(BackupError):
        backup(catalog_copy)


def test_backup_path_for_uses_current_time_by_default() -> None:
    path = backup_path_for("Localizable.xcstrings")

    prefix = "Localizable.xcstrings.org-"
    assert path.name.startswith(prefix)
    datetime.strptime(path.name[len(prefix):], "%Y-%m-%d-%H.%M.%S")


def test_read_table_strips_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "export.csv"
    path.write_bytes("\ufeffKey;en;Comment\n".encode("utf-8"))

    assert read_table(path) == "Key;en;Comment\n"


def test_write_table_keeps_line_endings(tmp_path: Path) -> None:
    path = write_table('Key;en;Comment\nA;"x\r\ny";\n', tmp_path / "export.csv")

    assert path.read_bytes() == b'Key;en;Comment\nA;"x\r\ny";\n'


def test_save_catalog_gives_new_files_default_permissions(
    source_catalog: Catalog, tmp_path: Path
) -> None:
    """New files follow the umask like any other file, not the temp file's 0600."""

    reference = tmp_path / "reference.txt"
    reference.write_text("x", encoding="utf-8")
    expected = stat.S_IMODE(reference.stat().st_mode)

    catalog_path = save_catalog(source_catalog, tmp_path / "new.xcstrings")
    table_path = write_table("Key;Comment\n", tmp_path / "new.csv")

    assert oct(stat.S_IMODE(catalog_path.stat().st_mode)) == oct(expected)
    assert oct(stat.S_IMODE(table_path.stat().st_mode)) == oct(expected)


def test_save_catalog_keeps_existing_permissions(
    catalog_copy: Path, source_catalog: Catalog
) -> None:
    catalog_copy.chmod(0o640)

    save_catalog(source_catalog, catalog_copy)

    assert stat.S_IMODE(catalog_copy.stat().st_mode) == 0o640


def test_backup_within_same_second_keeps_earlier_copy(catalog_copy: Path) -> None:
    now = datetime(2024, 11, 23, 9, 5, 7)
    first = backup(catalog_copy, now=now)
    first_bytes = first.read_bytes()
    catalog_copy.write_text("{}", encoding="utf-8")

    second = backup(catalog_copy, now=now)
    third = backup(catalog_copy, now=now)

    assert second == first.with_name(f"{first.name}-1")
    assert third == first.with_name(f"{first.name}-2")
    assert first.read_bytes() == first_bytes
    assert second.read_text(encoding="utf-8") == "{}"
