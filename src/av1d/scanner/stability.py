"""Detect files that are still being written."""

from __future__ import annotations

import asyncio
import logging

from av1d.core.errors import StabilityCheckError
from av1d.domain.models import CandidateFile

logger = logging.getLogger(__name__)

DEFAULT_STABILITY_SECONDS = 10.0


async def check_stability(
    candidate: CandidateFile,
    duration: float = DEFAULT_STABILITY_SECONDS,
) -> bool:
    """Wait, then compare the file's size with the size seen at scan time.

    A file that is still being copied or downloaded keeps growing; such
    files are left for a later scan.

    Args:
        candidate: File as recorded by the scanner.
        duration: Seconds to wait before re-reading the size.

    Returns:
        True if the size is unchanged.

    Raises:
        StabilityCheckError: If the file cannot be stat'ed after the wait
            (for example, it was deleted or moved).
    """
    await asyncio.sleep(duration)
    try:
        current_size = candidate.path.stat().st_size
    except OSError as e:
        raise StabilityCheckError(candidate.path, e) from e

    stable = current_size == candidate.size_bytes
    if not stable:
        logger.info(
            "File size changed from %d to %d bytes, still being written",
            candidate.size_bytes,
            current_size,
            extra={"path": str(candidate.path)},
        )
    return stable
