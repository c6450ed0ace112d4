from __future__ import annotations
from pathlib import Path
import pytest

ROOT = Path(__file__).resolve().parent
DATA_DIR = ROOT / "test-files"


@pytest.fixture(scope="session")
def data_dir() -> Path:
    assert DATA_DIR.exists(), f"Missing test data dir: {DATA_DIR}"
    return DATA_DIR


@pytest.fixture(scope="session")
def people_path(data_dir: Path) -> Path:
    return data_dir / "fwf" / "people.txt"


@pytest.fixture
def tmp_out(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d
