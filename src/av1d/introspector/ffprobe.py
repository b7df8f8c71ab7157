"""ffprobe-based implementation of the Prober protocol."""

from __future__ import annotations

import asyncio
import json
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from av1d.core.errors import MediaIntrospectionError
from av1d.core.subprocess_utils import run_command
from av1d.domain.models import ProbeResult
from av1d.introspector.parsers import parse_ffprobe_output

PROBE_TIMEOUT = 60


class FFprobeIntrospector:
    """Probe media files with ffprobe.

    The blocking ffprobe call runs in a worker thread so many files can be
    probed concurrently from the event loop.
    """

    def __init__(self, ffprobe_path: Path | str = "ffprobe") -> None:
        self._ffprobe_path = str(ffprobe_path)

    def build_args(self, path: Path) -> list[str]:
        return [
            self._ffprobe_path,
            "-v",
            "quiet",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            str(path),
        ]

    def probe_sync(self, path: Path) -> ProbeResult:
        """Probe a file, blocking the calling thread.

        Raises:
            MediaIntrospectionError: If ffprobe is missing or cannot be run,
                fails, times out, or prints something that is not JSON.
        """
        try:
            stdout, stderr, returncode = run_command(
                self.build_args(path), timeout=PROBE_TIMEOUT
            )
        except FileNotFoundError as e:
            raise MediaIntrospectionError(
                f"ffprobe not found at {self._ffprobe_path}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise MediaIntrospectionError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e
        except OSError as e:
            raise MediaIntrospectionError(
                f"Cannot run ffprobe at {self._ffprobe_path}: {e}"
            ) from e

        if returncode != 0:
            raise MediaIntrospectionError(
                f"ffprobe failed for {path} (exit {returncode}): {stderr.strip()}"
            )

        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise MediaIntrospectionError(
                f"Invalid ffprobe output for {path}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise MediaIntrospectionError(f"Unexpected ffprobe output for {path}")

        return parse_ffprobe_output(data)

    async def probe(self, path: Path) -> ProbeResult:
        return await asyncio.to_thread(self.probe_sync, path)
