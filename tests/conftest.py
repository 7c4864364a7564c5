"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path
from shutil import copy2

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install. This keeps developer experience smooth for first-time
# contributors running ``pytest`` directly in VS Code.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402

from xcstrings_csv.catalog import Catalog, load_catalog  # noqa: E402

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Directory holding the sample ``.xcstrings`` catalogues."""

    return DATA_DIR


@pytest.fixture()
def source_catalog() -> Catalog:
    """The reference catalogue with three fully translated keys."""

    return load_catalog(DATA_DIR / "Localizable.xcstrings")


@pytest.fixture()
def catalog_copy(tmp_path: Path) -> Path:
    """A writable copy of the reference catalogue."""

    target = tmp_path / "Localizable.xcstrings"
    copy2(DATA_DIR / "Localizable.xcstrings", target)
    return target
