"""Validate encoder output before it is allowed to replace the original."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from av1d.core.errors import MediaIntrospectionError
from av1d.domain.models import ProbeResult
from av1d.introspector.interface import Prober

logger = logging.getLogger(__name__)

# Maximum allowed difference between source and output duration (seconds)
DURATION_TOLERANCE = 2.0


@dataclass(frozen=True)
class ProbeFailure:
    detail: str

    def __str__(self) -> str:
        return f"Output could not be probed: {self.detail}"


@dataclass(frozen=True)
class NoAv1Stream:
    def __str__(self) -> str:
        return "Output has no AV1 video stream"


@dataclass(frozen=True)
class MultipleAv1Streams:
    def __str__(self) -> str:
        return "Output has more than one AV1 video stream"


@dataclass(frozen=True)
class DurationMismatch:
    expected: float
    actual: float

    def __str__(self) -> str:
        return (
            f"Output duration {self.actual:.2f}s differs from source "
            f"{self.expected:.2f}s"
        )


ValidationError = ProbeFailure | NoAv1Stream | MultipleAv1Streams | DurationMismatch


@dataclass(frozen=True)
class Valid:
    probe: ProbeResult


@dataclass(frozen=True)
class Invalid:
    error: ValidationError


ValidationResult = Valid | Invalid


def check_output_probe(
    output_probe: ProbeResult, original_probe: ProbeResult
) -> ValidationResult:
    """Apply the stream and duration checks to an already-probed output."""
    av1_count = sum(
        1 for stream in output_probe.video_streams if stream.codec_name == "av1"
    )
    if av1_count == 0:
        return Invalid(NoAv1Stream())
    if av1_count > 1:
        return Invalid(MultipleAv1Streams())

    expected = original_probe.format.duration
    actual = output_probe.format.duration
    if expected is not None and actual is not None:
        if abs(expected - actual) > DURATION_TOLERANCE:
            return Invalid(DurationMismatch(expected=expected, actual=actual))

    return Valid(output_probe)


async def validate_output(
    output_path: Path,
    original_probe: ProbeResult,
    prober: Prober,
) -> ValidationResult:
    """Check that the encoded file is a usable AV1 copy of the source.

    The output must be probe-able, contain exactly one video stream whose
    codec is "av1", and (when both durations are known) be within
    DURATION_TOLERANCE seconds of the source. A probe failure is final;
    there is no retry.

    Args:
        output_path: The encoded file.
        original_probe: Probe result of the source.
        prober: Probe implementation.

    Returns:
        Valid with the output's probe, or Invalid with the first failure.
    """
    try:
        output_probe = await prober.probe(output_path)
    except MediaIntrospectionError as e:
        logger.warning("Output probe failed: %s", e)
        return Invalid(ProbeFailure(str(e)))

    result = check_output_probe(output_probe, original_probe)
    if isinstance(result, Invalid):
        logger.warning("Output validation failed: %s", result.error)
    return result
