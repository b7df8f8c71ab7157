"""Discover transcode candidates under the library roots."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from av1d.domain.models import CandidateFile
from av1d.sidecars import has_skip_marker

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = frozenset({"mkv", "mp4", "avi", "mov", "m4v", "ts", "m2ts"})


def is_video_file(path: Path) -> bool:
    """Check the extension against VIDEO_EXTENSIONS, ignoring case."""
    return path.suffix[1:].casefold() in VIDEO_EXTENSIONS


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _walk_error(error: OSError) -> None:
    logger.warning("Cannot read directory %s: %s", error.filename, error.strerror)


def scan_root(root: Path) -> list[CandidateFile]:
    """Scan a single library root.

    Only regular files are candidates; symlinks are neither followed nor
    returned. Hidden directories below the root are pruned; the root itself
    is scanned even if its name starts with a dot.
    Files that vanish or cannot be stat'ed mid-walk are logged and skipped.
    """
    candidates: list[CandidateFile] = []

    for dirpath, dirnames, filenames in os.walk(
        root, followlinks=False, onerror=_walk_error
    ):
        dirnames[:] = sorted(d for d in dirnames if not _is_hidden(d))

        for name in sorted(filenames):
            path = Path(dirpath) / name
            if not is_video_file(path):
                continue
            if has_skip_marker(path):
                logger.debug("Skipping %s: skip marker present", path)
                continue
            try:
                st = path.lstat()
            except OSError as e:
                logger.warning("Cannot stat %s: %s", path, e)
                continue
            if not stat.S_ISREG(st.st_mode):
                logger.debug("Skipping %s: not a regular file", path)
                continue
            candidates.append(
                CandidateFile(
                    path=path,
                    size_bytes=st.st_size,
                    modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                )
            )

    return candidates


def scan_libraries(roots: Iterable[Path]) -> list[CandidateFile]:
    """Find every candidate video under the given library roots.

    Roots that do not exist or are not directories are logged and skipped;
    they never abort the scan.

    Args:
        roots: Library root directories.

    Returns:
        Candidates in deterministic (sorted walk) order.
    """
    candidates: list[CandidateFile] = []
    for root in roots:
        if not root.is_dir():
            logger.warning("Library root %s is not a directory, skipping", root)
            continue
        found = scan_root(root)
        logger.info("Found %d candidate(s) under %s", len(found), root)
        candidates.extend(found)
    return candidates
