"""Domain enums for av1d."""

from enum import Enum


class SkipReason(Enum):
    """Why a file was not selected for transcoding.

    Gate order is fixed: the skip marker is checked first, then video
    presence, then size, then the current codec.
    """

    HAS_SKIP_MARKER = "has_skip_marker"
    NO_VIDEO = "no_video"
    TOO_SMALL = "too_small"
    ALREADY_AV1 = "already_av1"

    @property
    def description(self) -> str:
        """Human-readable text written to why-files and logs."""
        return _SKIP_DESCRIPTIONS[self]


_SKIP_DESCRIPTIONS = {
    SkipReason.HAS_SKIP_MARKER: "File has a skip marker",
    SkipReason.NO_VIDEO: "No video streams found",
    SkipReason.TOO_SMALL: "File is smaller than the minimum size",
    SkipReason.ALREADY_AV1: "Video is already AV1",
}


class EncoderKind(Enum):
    """AV1 encoder implementations available through ffmpeg.

    The value is the ffmpeg encoder (codec) name.
    """

    SVT_AV1 = "libsvtav1"
    LIBAOM_AV1 = "libaom-av1"
    LIBRAV1E = "librav1e"

    @property
    def codec_name(self) -> str:
        return self.value


class EncoderPreference(Enum):
    """Operator-facing encoder names used in configuration."""

    SVT = "svt"
    AOM = "aom"
    RAV1E = "rav1e"

    def to_kind(self) -> EncoderKind:
        return {
            EncoderPreference.SVT: EncoderKind.SVT_AV1,
            EncoderPreference.AOM: EncoderKind.LIBAOM_AV1,
            EncoderPreference.RAV1E: EncoderKind.LIBRAV1E,
        }[self]


class QualityTier(Enum):
    """Target quality level; VERY_HIGH lowers CRF and preset by two steps."""

    HIGH = "high"
    VERY_HIGH = "very_high"


class SourceType(Enum):
    """Provenance of a source file, inferred from its name and bitrate."""

    WEB_LIKE = "web_like"  # Streaming service rips, often with broken timestamps
    DISC_LIKE = "disc_like"  # Blu-ray/UHD remuxes
    UNKNOWN = "unknown"


class PipelineStatus(Enum):
    """Terminal status of one file's trip through the pipeline."""

    REPLACED = "replaced"
    SKIPPED = "skipped"
    UNSTABLE = "unstable"
    FAILED = "failed"
