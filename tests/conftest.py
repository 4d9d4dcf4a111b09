"""Shared pytest fixtures for temploc tests.

Fixtures are organized by category:
- Root fixtures: temporary template root directories
- Template helpers: writing sources with controlled modification times
- Isolation: resetting global registry and logging state between tests
"""

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from temploc.config import RootSet
from temploc.loaders import FileResourceLoader, reset_registry
from tests.fixtures import BASE_MTIME

# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_globals() -> Iterator[None]:
    """Reset the loader registry and temploc log handlers after each test."""
    yield
    reset_registry()
    logger = logging.getLogger("temploc")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Root Fixtures
# =============================================================================


@pytest.fixture
def root_a(tmp_path: Path) -> Path:
    """First-priority template root."""
    path = tmp_path / "a"
    path.mkdir()
    return path


@pytest.fixture
def root_b(tmp_path: Path) -> Path:
    """Second-priority template root."""
    path = tmp_path / "b"
    path.mkdir()
    return path


@pytest.fixture
def two_roots(root_a: Path, root_b: Path) -> RootSet:
    """RootSet searching root_a before root_b."""
    return RootSet((str(root_a), str(root_b)))


@pytest.fixture
def loader(two_roots: RootSet) -> FileResourceLoader:
    """File loader over root_a and root_b."""
    return FileResourceLoader(two_roots)


# =============================================================================
# Template Helpers
# =============================================================================


@pytest.fixture
def write_template() -> Callable[..., Path]:
    """Return a helper that writes a template with a fixed modification time."""

    def _write(root: Path, name: str, content: str = "", mtime: float = BASE_MTIME) -> Path:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content or f"template {name} in {root.name}", encoding="utf-8")
        os.utime(path, (mtime, mtime))
        return path

    return _write
