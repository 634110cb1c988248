from __future__ import annotations

import sys
from pathlib import Path
from typing import Generator

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from tinyapi.config import Settings

MOCKS_DIR = Path(__file__).resolve().parent / "fixtures" / "mocks"


@pytest.fixture
def settings() -> Generator[Settings, None, None]:
    """Return a fresh Settings instance that ignores any local .env file."""

    yield Settings(_env_file=None)


@pytest.fixture
def mocks_dir() -> Path:
    return MOCKS_DIR
