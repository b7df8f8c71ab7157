"""Domain models for candidate files, probe results and transcode jobs."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from av1d.domain.enums import EncoderKind, SourceType

# Dimensions assumed when the source did not report any.
DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080

_HDR_PIX_FMT_MARKERS = (
    "p010",
    "p016",
    "yuv420p10",
    "yuv422p10",
    "yuv444p10",
    "yuv420p12",
)


@dataclass(frozen=True)
class CandidateFile:
    """A video file found by the scanner, before any probing."""

    path: Path
    size_bytes: int
    modified_at: datetime


@dataclass(frozen=True)
class VideoStream:
    """Video stream metadata extracted from ffprobe."""

    index: int
    codec_name: str
    width: int
    height: int
    bitrate: int | None = None
    frame_rate: str | None = None
    pix_fmt: str | None = None
    bit_depth: int | None = None
    is_default: bool = False


@dataclass(frozen=True)
class AudioStream:
    index: int
    codec_name: str
    language: str | None = None


@dataclass(frozen=True)
class SubtitleStream:
    index: int
    codec_name: str
    language: str | None = None


@dataclass(frozen=True)
class FormatInfo:
    """Container-level metadata."""

    duration: float | None
    size: int
    bitrate: int | None = None


@dataclass(frozen=True)
class ProbeResult:
    """Parsed ffprobe output for one file.

    Video streams are kept in the order ffprobe reports them; the gate
    evaluator relies on that order when it inspects the first stream.
    """

    format: FormatInfo
    video_streams: tuple[VideoStream, ...] = ()
    audio_streams: tuple[AudioStream, ...] = ()
    subtitle_streams: tuple[SubtitleStream, ...] = ()

    def main_video_stream(self) -> VideoStream | None:
        """Return the default-disposition video stream, else the first one."""
        for stream in self.video_streams:
            if stream.is_default:
                return stream
        return self.video_streams[0] if self.video_streams else None


@dataclass(frozen=True)
class EncoderChoice:
    """The encoder picked for a job."""

    kind: EncoderKind

    @property
    def codec_name(self) -> str:
        return self.kind.codec_name


@dataclass
class Job:
    """A single transcode attempt for one source file.

    Jobs live in memory for the duration of one pipeline run. Missing source
    dimensions are resolved here via the width/height properties so that the
    command builder never sees an unknown size.
    """

    source_path: Path
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    output_path: Path | None = None
    is_web_like: bool = False

    original_bytes: int | None = None
    new_bytes: int | None = None
    original_duration: float | None = None

    video_codec: str | None = None
    video_bitrate: int | None = None
    video_width: int | None = None
    video_height: int | None = None
    video_frame_rate: str | None = None
    source_pix_fmt: str | None = None
    source_bit_depth: int | None = None
    is_hdr: bool | None = None

    encoder_used: EncoderKind | None = None
    crf_used: int | None = None
    preset_used: int | None = None

    @property
    def width(self) -> int:
        return self.video_width if self.video_width is not None else DEFAULT_WIDTH

    @property
    def height(self) -> int:
        if self.video_height is not None:
            return self.video_height
        return DEFAULT_HEIGHT


def is_hdr_pix_fmt(pix_fmt: str | None) -> bool | None:
    """Guess whether a pixel format carries HDR (10/12-bit) content.

    Returns None when the pixel format is unknown.
    """
    if pix_fmt is None:
        return None
    return any(marker in pix_fmt for marker in _HDR_PIX_FMT_MARKERS)


def create_job(
    candidate: CandidateFile,
    probe: ProbeResult,
    source_type: SourceType,
) -> Job:
    """Build a Job from a scanned file, its probe result and classification.

    Args:
        candidate: The file to transcode.
        probe: ffprobe result for the file.
        source_type: Classification of the file's provenance.

    Returns:
        A new Job with a fresh id.
    """
    main_video = probe.main_video_stream()
    job = Job(
        source_path=candidate.path,
        is_web_like=source_type is SourceType.WEB_LIKE,
        original_bytes=candidate.size_bytes,
        original_duration=probe.format.duration,
    )
    if main_video is not None:
        job.video_codec = main_video.codec_name
        job.video_bitrate = main_video.bitrate
        job.video_width = main_video.width
        job.video_height = main_video.height
        job.video_frame_rate = main_video.frame_rate
        job.source_pix_fmt = main_video.pix_fmt
        job.source_bit_depth = main_video.bit_depth
        job.is_hdr = is_hdr_pix_fmt(main_video.pix_fmt)
    return job
