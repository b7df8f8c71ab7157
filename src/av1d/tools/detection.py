"""Detect ffmpeg, its version, and which AV1 encoders it was built with."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess  # nosec B404 - subprocess is required for tool detection
from pathlib import Path

from av1d.core.errors import ToolNotFoundError
from av1d.core.subprocess_utils import run_command
from av1d.domain.enums import EncoderKind
from av1d.tools.models import FFmpegInfo, ToolStatus

logger = logging.getLogger(__name__)

# Timeout for version/capability detection commands (seconds)
DETECTION_TIMEOUT = 10

MIN_FFMPEG_VERSION: tuple[int, ...] = (8, 0)

_VERSION_LINE = re.compile(r"ffmpeg version\s+(\S+)")

# Format: " V....D libsvtav1            SVT-AV1(Scalable Video Technology ...)"
_ENCODER_LINE = re.compile(r"\s+[VASFXBDI.]{6}\s+(\S+)")


def parse_version_string(version_str: str) -> tuple[int, ...] | None:
    """Parse "8.0.1", "8.0" or "n8.0.1" into a comparable tuple."""
    if not version_str:
        return None
    version_str = version_str.lstrip("nv")
    match = re.match(r"(\d+(?:\.\d+)*)", version_str)
    if not match:
        return None
    return tuple(int(part) for part in match.group(1).split("."))


def parse_ffmpeg_version(output: str) -> tuple[str, tuple[int, ...] | None] | None:
    """Extract the version from ``ffmpeg -version`` output.

    Returns:
        (raw version string, parsed tuple or None), or None if the output
        has no version line.
    """
    match = _VERSION_LINE.search(output)
    if not match:
        return None
    raw = match.group(1)
    return raw, parse_version_string(raw)


def parse_av1_encoders(output: str) -> set[EncoderKind]:
    """Find the AV1 encoders listed in ``ffmpeg -encoders`` output."""
    names = {
        match.group(1).casefold()
        for line in output.splitlines()
        if (match := _ENCODER_LINE.match(line))
    }
    return {kind for kind in EncoderKind if kind.codec_name in names}


def _find_ffmpeg(configured_path: Path | None) -> Path | None:
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning("Configured ffmpeg path is not a file: %s", configured_path)
    which_result = shutil.which("ffmpeg")
    return Path(which_result) if which_result else None


def _run(args: list[str | Path]) -> tuple[str, str, int]:
    try:
        return run_command(args, timeout=DETECTION_TIMEOUT)
    except subprocess.TimeoutExpired:
        return "", "timeout", -1
    except OSError as e:
        return "", str(e), -1


def detect_ffmpeg(configured_path: Path | None = None) -> FFmpegInfo:
    """Locate ffmpeg and probe its version and AV1 encoders.

    Never raises; problems are reported through FFmpegInfo.status and
    status_message.

    Args:
        configured_path: Explicit ffmpeg location; PATH is searched otherwise.
    """
    info = FFmpegInfo()
    path = _find_ffmpeg(configured_path)
    if path is None:
        info.status_message = "ffmpeg not found in PATH"
        return info
    info.path = path

    stdout, stderr, rc = _run([path, "-version"])
    parsed = parse_ffmpeg_version(stdout) if rc == 0 else None
    if parsed is None:
        info.status = ToolStatus.ERROR
        info.status_message = f"Could not determine ffmpeg version: {stderr.strip()}"
        return info
    info.version, info.version_tuple = parsed
    if info.version_tuple is None:
        info.status = ToolStatus.ERROR
        info.status_message = f"Unrecognized ffmpeg version: {info.version}"
        return info

    if not info.meets_version(MIN_FFMPEG_VERSION):
        info.status = ToolStatus.OUTDATED
        info.status_message = (
            f"ffmpeg {info.version} is too old; "
            f"{'.'.join(map(str, MIN_FFMPEG_VERSION))} or newer is required"
        )
        return info

    stdout, stderr, rc = _run([path, "-hide_banner", "-encoders"])
    if rc != 0:
        info.status = ToolStatus.ERROR
        info.status_message = f"Failed to list ffmpeg encoders: {stderr.strip()}"
        return info
    info.av1_encoders = parse_av1_encoders(stdout)
    info.status = ToolStatus.AVAILABLE

    logger.debug(
        "Detected ffmpeg %s at %s with AV1 encoders: %s",
        info.version,
        path,
        ", ".join(sorted(kind.codec_name for kind in info.av1_encoders)) or "none",
    )
    return info


def require_ffmpeg(configured_path: Path | None = None) -> FFmpegInfo:
    """Detect ffmpeg and fail if it is missing, broken or too old.

    Raises:
        ToolNotFoundError: If ffmpeg is not usable.
    """
    info = detect_ffmpeg(configured_path)
    if not info.is_available():
        raise ToolNotFoundError(info.status_message or "ffmpeg is not available")
    return info
