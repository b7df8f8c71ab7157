"""Domain types shared across the av1d pipeline."""

from av1d.domain.enums import (
    EncoderKind,
    EncoderPreference,
    PipelineStatus,
    QualityTier,
    SkipReason,
    SourceType,
)
from av1d.domain.models import (
    AudioStream,
    CandidateFile,
    EncoderChoice,
    FormatInfo,
    Job,
    ProbeResult,
    SubtitleStream,
    VideoStream,
    create_job,
)

__all__ = [
    "AudioStream",
    "CandidateFile",
    "EncoderChoice",
    "EncoderKind",
    "EncoderPreference",
    "FormatInfo",
    "Job",
    "PipelineStatus",
    "ProbeResult",
    "QualityTier",
    "SkipReason",
    "SourceType",
    "SubtitleStream",
    "VideoStream",
    "create_job",
]
