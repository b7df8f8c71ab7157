"""AV1 encoding: encoder selection, ffmpeg command construction and execution."""

from av1d.executor.encode.command import (
    build_aom_command,
    build_command,
    build_rav1e_command,
    build_svt_command,
)
from av1d.executor.encode.runner import EncodeOutcome, run_encode
from av1d.executor.encode.selection import (
    ENCODER_HIERARCHY,
    select_crf,
    select_encoder,
    select_preset,
)

__all__ = [
    "ENCODER_HIERARCHY",
    "EncodeOutcome",
    "build_aom_command",
    "build_command",
    "build_rav1e_command",
    "build_svt_command",
    "run_encode",
    "select_crf",
    "select_encoder",
    "select_preset",
]
