"""Shared pytest fixtures for the full inibind test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from loguru import logger
import pytest

_FILES_DIR = Path(__file__).parent / "files"


@pytest.fixture
def fixture_path() -> "FixturePathFactory":
    """Resolve a file name under `tests/files`."""

    return FixturePathFactory(_FILES_DIR)


class FixturePathFactory:
    """Callable resolving fixture file names to paths."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def __call__(self, name: str) -> Path:
        return self._root / name


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Restore the library's disabled logger after tests that enable CLI logging."""

    yield
    logger.remove()
    logger.disable("inibind")
