"""Pure parsing functions for ffprobe JSON output.

No I/O happens here; ffprobe.py runs the tool and hands the decoded JSON
to parse_ffprobe_output.
"""

from __future__ import annotations

import logging
from typing import Any

from av1d.domain.models import (
    AudioStream,
    FormatInfo,
    ProbeResult,
    SubtitleStream,
    VideoStream,
)

logger = logging.getLogger(__name__)


def parse_float(value: Any) -> float | None:
    """Parse an ffprobe numeric string (e.g. "3600.000") as float."""
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def parse_int(value: Any) -> int | None:
    """Parse an ffprobe integer string; "N/A" and garbage become None."""
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def _language(stream: dict[str, Any]) -> str | None:
    tags = stream.get("tags") or {}
    return tags.get("language")


def parse_format(data: dict[str, Any] | None) -> FormatInfo:
    if not data:
        return FormatInfo(duration=None, size=0, bitrate=None)
    return FormatInfo(
        duration=parse_float(data.get("duration")),
        size=parse_int(data.get("size")) or 0,
        bitrate=parse_int(data.get("bit_rate")),
    )


def parse_video_stream(stream: dict[str, Any]) -> VideoStream | None:
    """Parse a video stream, or return None if it has no dimensions.

    Cover art and other dimensionless video entries are dropped here.
    """
    width = stream.get("width")
    height = stream.get("height")
    if width is None or height is None:
        logger.debug(
            "Ignoring video stream %s without dimensions", stream.get("index")
        )
        return None
    disposition = stream.get("disposition") or {}
    return VideoStream(
        index=stream.get("index", 0),
        codec_name=stream.get("codec_name", ""),
        width=int(width),
        height=int(height),
        bitrate=parse_int(stream.get("bit_rate")),
        frame_rate=stream.get("r_frame_rate"),
        pix_fmt=stream.get("pix_fmt"),
        bit_depth=parse_int(stream.get("bits_per_raw_sample")),
        is_default=disposition.get("default") == 1,
    )


def parse_ffprobe_output(data: dict[str, Any]) -> ProbeResult:
    """Convert decoded ffprobe JSON into a ProbeResult.

    Args:
        data: Output of ``ffprobe -print_format json -show_format
            -show_streams``, already decoded.

    Returns:
        ProbeResult with video, audio and subtitle streams in ffprobe order.
        Data, attachment and other stream types are ignored.
    """
    video: list[VideoStream] = []
    audio: list[AudioStream] = []
    subtitles: list[SubtitleStream] = []

    for stream in data.get("streams") or []:
        codec_type = stream.get("codec_type")
        if codec_type == "video":
            parsed = parse_video_stream(stream)
            if parsed is not None:
                video.append(parsed)
        elif codec_type == "audio":
            audio.append(
                AudioStream(
                    index=stream.get("index", 0),
                    codec_name=stream.get("codec_name", ""),
                    language=_language(stream),
                )
            )
        elif codec_type == "subtitle":
            subtitles.append(
                SubtitleStream(
                    index=stream.get("index", 0),
                    codec_name=stream.get("codec_name", ""),
                    language=_language(stream),
                )
            )

    return ProbeResult(
        format=parse_format(data.get("format")),
        video_streams=tuple(video),
        audio_streams=tuple(audio),
        subtitle_streams=tuple(subtitles),
    )
