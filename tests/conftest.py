"""Shared test fixtures for av1d."""

import shutil
import tempfile
from pathlib import Path

import pytest

from av1d.config.models import DaemonConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def library_dir(temp_dir: Path) -> Path:
    """Create a small library tree with videos, non-videos and a hidden dir."""
    library = temp_dir / "library"
    library.mkdir()

    (library / "movie.mkv").write_bytes(b"x" * 100)
    (library / "show.MP4").write_bytes(b"x" * 50)
    (library / "notes.txt").write_text("not a video")

    nested = library / "nested"
    nested.mkdir()
    (nested / "episode.m2ts").write_bytes(b"x" * 10)

    hidden = library / ".hidden"
    hidden.mkdir()
    (hidden / "secret.mkv").write_bytes(b"x")

    return library


@pytest.fixture
def daemon_config(temp_dir: Path) -> DaemonConfig:
    """DaemonConfig pointing at temp directories with no stability wait."""
    return DaemonConfig(
        library_roots=(temp_dir / "library",),
        min_bytes=1000,
        stability_seconds=0,
        temp_output_dir=temp_dir / "out",
    )
