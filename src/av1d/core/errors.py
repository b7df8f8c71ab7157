"""Exception hierarchy for av1d.

Policy decisions (skips, validation failures, size-gate failures) are
returned as values. Exceptions are reserved for conditions that abort the
processing of a file or the daemon itself.
"""

from __future__ import annotations

from pathlib import Path


class Av1dError(Exception):
    """Base class for all av1d errors."""

    pass


class ConfigError(Av1dError):
    """Configuration file or environment is invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class StabilityCheckError(Av1dError):
    """A file could not be re-read while checking whether it is still growing."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Stability check failed for {path}: {cause}")


class MediaIntrospectionError(Av1dError):
    """Raised when probing a media file fails."""

    pass


class NoEncoderAvailableError(Av1dError):
    """No AV1 encoder is available in the installed ffmpeg."""

    pass


class EncodeError(Av1dError):
    """The encoder process exited unsuccessfully."""

    def __init__(
        self, message: str, returncode: int | None = None, stderr: str = ""
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class ReplaceError(Av1dError):
    """Replacing the original file with the encoded output failed."""

    def __init__(self, message: str, original: Path, restored: bool = True) -> None:
        self.original = original
        self.restored = restored
        super().__init__(message)


class ToolNotFoundError(Av1dError):
    """A required external tool (ffmpeg/ffprobe) is missing or too old."""

    pass
