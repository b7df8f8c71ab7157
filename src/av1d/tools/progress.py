"""Parsing for ffmpeg ``-progress`` output.

ffmpeg writes blocks of ``key=value`` lines to the progress pipe, each
block terminated by ``progress=continue`` or, at the end, ``progress=end``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EncodeProgress:
    """Running state assembled from progress lines."""

    out_time_seconds: float | None = None
    total_size: int | None = None
    speed: float | None = None
    finished: bool = False

    def get_percent(self, duration_seconds: float | None) -> float | None:
        """Percent complete (0-100), or None when it cannot be computed."""
        if duration_seconds is None or duration_seconds <= 0:
            return None
        if self.out_time_seconds is None:
            return None
        return max(0.0, min(100.0, self.out_time_seconds / duration_seconds * 100))

    def eta_seconds(self, duration_seconds: float | None) -> float | None:
        if (
            duration_seconds is None
            or self.out_time_seconds is None
            or not self.speed
            or self.speed <= 0
        ):
            return None
        remaining = max(0.0, duration_seconds - self.out_time_seconds)
        return remaining / self.speed


def parse_out_time(value: str) -> float | None:
    """Parse "HH:MM:SS.micro" into seconds."""
    parts = value.split(":")
    if len(parts) != 3:
        return None
    try:
        hours, minutes, seconds = (float(part) for part in parts)
    except ValueError:
        return None
    return hours * 3600 + minutes * 60 + seconds


def parse_progress_line(line: str, progress: EncodeProgress) -> bool:
    """Fold one progress line into ``progress``.

    Unknown keys and unparseable values (ffmpeg prints "N/A" early on) are
    ignored.

    Args:
        line: A single line from the progress pipe.
        progress: State to update in place.

    Returns:
        True if the line marks the end of a progress block.
    """
    key, sep, value = line.strip().partition("=")
    if not sep:
        return False
    key = key.strip()
    value = value.strip()

    if key in ("out_time_ms", "out_time_us"):
        # out_time_ms is misnamed by ffmpeg and is in microseconds too
        try:
            progress.out_time_seconds = int(value) / 1_000_000
        except ValueError:
            pass
    elif key == "out_time":
        if progress.out_time_seconds is None:
            progress.out_time_seconds = parse_out_time(value)
    elif key == "total_size":
        try:
            progress.total_size = int(value)
        except ValueError:
            pass
    elif key == "speed":
        try:
            progress.speed = float(value.rstrip("x"))
        except ValueError:
            pass
    elif key == "progress":
        if value == "end":
            progress.finished = True
        return True
    return False
