"""Build complete ffmpeg command lines for each AV1 encoder.

Every builder produces the same layout:

    ffmpeg -hide_banner -y [web-safe flags] -i SRC [mapping] [-vf pad]
        <encoder params> -c:a copy -c:s copy -max_muxing_queue_size 2048 OUT

All functions are pure; nothing here touches the filesystem.
"""

from __future__ import annotations

import logging
from pathlib import Path

from av1d.domain.enums import EncoderKind, QualityTier
from av1d.domain.models import EncoderChoice, Job
from av1d.executor.encode.common import input_args, output_args
from av1d.executor.encode.selection import select_crf, select_preset

logger = logging.getLogger(__name__)


def select_tiles(height: int) -> str:
    """libaom tile layout (columns x rows) for a given height."""
    if height > 2160:
        return "3x2"
    if height > 1080:
        return "2x2"
    return "2x1"


def select_cpu_used(height: int) -> int:
    """libaom speed setting; above 1080p trades a little speed for quality."""
    return 3 if height > 1080 else 4


def build_aom_command(job: Job, crf: int, output_path: Path | str) -> list[str]:
    args = input_args(job)
    args.extend(
        [
            "-c:v",
            EncoderKind.LIBAOM_AV1.codec_name,
            "-b:v",
            "0",
            "-crf",
            str(crf),
            "-cpu-used",
            str(select_cpu_used(job.height)),
            "-row-mt",
            "1",
            "-tiles",
            select_tiles(job.height),
        ]
    )
    args.extend(output_args(str(output_path)))
    return args


def build_svt_command(
    job: Job, crf: int, preset: int, output_path: Path | str
) -> list[str]:
    args = input_args(job)
    args.extend(
        [
            "-c:v",
            EncoderKind.SVT_AV1.codec_name,
            "-crf",
            str(crf),
            "-preset",
            str(preset),
            "-threads",
            "0",
            "-svtav1-params",
            "lp=0",
        ]
    )
    args.extend(output_args(str(output_path)))
    return args


def build_rav1e_command(job: Job, crf: int, output_path: Path | str) -> list[str]:
    """rav1e takes a quantizer rather than a CRF; the CRF value is passed as -qp."""
    args = input_args(job)
    args.extend(["-c:v", EncoderKind.LIBRAV1E.codec_name, "-qp", str(crf)])
    args.extend(output_args(str(output_path)))
    return args


def build_command(
    job: Job,
    encoder: EncoderChoice,
    quality_tier: QualityTier,
    output_path: Path | str,
) -> list[str]:
    """Build the ffmpeg command for a job with the selected encoder.

    CRF (and, for SVT-AV1, the preset) is derived from the job's height and
    the quality tier. The values used are recorded on the job.

    Args:
        job: The job to encode.
        encoder: Selected encoder.
        quality_tier: Target quality tier.
        output_path: Where ffmpeg writes the encoded file.

    Returns:
        Full argument list, starting with "ffmpeg".
    """
    crf = select_crf(job.height, quality_tier)
    job.encoder_used = encoder.kind
    job.crf_used = crf

    if encoder.kind is EncoderKind.SVT_AV1:
        preset = select_preset(job.height, quality_tier)
        job.preset_used = preset
        command = build_svt_command(job, crf, preset, output_path)
    elif encoder.kind is EncoderKind.LIBAOM_AV1:
        command = build_aom_command(job, crf, output_path)
    else:
        command = build_rav1e_command(job, crf, output_path)

    logger.debug("Built %s command: %s", encoder.codec_name, " ".join(command))
    return command
