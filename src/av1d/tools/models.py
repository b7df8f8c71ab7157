"""Data models for detected external tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from itertools import zip_longest
from pathlib import Path

from av1d.domain.enums import EncoderKind


class ToolStatus(Enum):
    """Outcome of probing for ffmpeg."""

    AVAILABLE = "available"
    MISSING = "missing"  # not on PATH and no usable configured path
    OUTDATED = "outdated"
    ERROR = "error"  # found, but -version or -encoders failed


@dataclass
class FFmpegInfo:
    """The ffmpeg binary av1d will run and the AV1 encoders it was built with.

    ``status_message`` explains any status other than AVAILABLE.
    """

    path: Path | None = None
    version: str | None = None
    version_tuple: tuple[int, ...] | None = None
    status: ToolStatus = ToolStatus.MISSING
    status_message: str | None = None
    av1_encoders: set[EncoderKind] = field(default_factory=set)

    def is_available(self) -> bool:
        return self.status is ToolStatus.AVAILABLE

    def meets_version(self, min_version: tuple[int, ...]) -> bool:
        """True when the parsed version is at least ``min_version``.

        Missing trailing components count as zero, so (8,) equals (8, 0, 0).
        """
        if self.version_tuple is None:
            return False
        for have, need in zip_longest(self.version_tuple, min_version, fillvalue=0):
            if have != need:
                return have > need
        return True
