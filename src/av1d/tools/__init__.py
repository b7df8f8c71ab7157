"""External tool detection and ffmpeg output parsing."""

from av1d.tools.detection import (
    MIN_FFMPEG_VERSION,
    detect_ffmpeg,
    parse_av1_encoders,
    parse_ffmpeg_version,
    require_ffmpeg,
)
from av1d.tools.models import FFmpegInfo, ToolStatus
from av1d.tools.progress import EncodeProgress, parse_progress_line

__all__ = [
    "MIN_FFMPEG_VERSION",
    "EncodeProgress",
    "FFmpegInfo",
    "ToolStatus",
    "detect_ffmpeg",
    "parse_av1_encoders",
    "parse_ffmpeg_version",
    "parse_progress_line",
    "require_ffmpeg",
]
