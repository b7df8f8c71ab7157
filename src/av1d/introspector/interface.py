"""Prober interface for video metadata extraction."""

from pathlib import Path
from typing import Protocol

from av1d.core.errors import MediaIntrospectionError
from av1d.domain.models import ProbeResult

__all__ = ["MediaIntrospectionError", "Prober"]


class Prober(Protocol):
    """Anything that can describe a media file's streams.

    The pipeline probes both source files and encoder output through this
    protocol, which lets tests substitute canned results.
    """

    async def probe(self, path: Path) -> ProbeResult:
        """Probe a media file.

        Args:
            path: Path to the media file.

        Returns:
            Parsed stream and container metadata.

        Raises:
            MediaIntrospectionError: If the file cannot be probed.
        """
        ...
