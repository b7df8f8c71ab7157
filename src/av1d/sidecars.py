"""Sidecar files stored next to media files.

Two sidecars exist, both named by appending to the full file name:

- ``movie.mkv.av1skip``: zero-length marker; its presence excludes the file
  from every future scan.
- ``movie.mkv.why.txt``: human-readable explanation of the last skip or
  failure.

Only the presence of the marker matters; its content is never read.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SKIP_MARKER_SUFFIX = ".av1skip"
WHY_FILE_SUFFIX = ".why.txt"


def skip_marker_path(video_path: Path) -> Path:
    return video_path.with_name(video_path.name + SKIP_MARKER_SUFFIX)


def why_file_path(video_path: Path) -> Path:
    return video_path.with_name(video_path.name + WHY_FILE_SUFFIX)


def has_skip_marker(video_path: Path) -> bool:
    return skip_marker_path(video_path).exists()


def create_skip_marker(video_path: Path) -> Path:
    """Create (or truncate) the skip marker for a video.

    Raises:
        OSError: If the marker cannot be written.
    """
    marker = skip_marker_path(video_path)
    marker.write_bytes(b"")
    logger.debug("Created skip marker %s", marker)
    return marker


def write_why_file(video_path: Path, reason: str) -> Path:
    """Write the explanation sidecar, replacing any previous one.

    Raises:
        OSError: If the file cannot be written.
    """
    why_path = why_file_path(video_path)
    why_path.write_text(reason, encoding="utf-8")
    logger.debug("Wrote why-file %s", why_path)
    return why_path
