"""Gate evaluation: decide whether a probed file should be transcoded.

Gates are an ordered table of (predicate, reason) pairs. The first
predicate that matches decides the skip reason, so the order of the table
is the priority order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from av1d.config.models import DaemonConfig
from av1d.domain.enums import SkipReason
from av1d.domain.models import CandidateFile, ProbeResult
from av1d.sidecars import has_skip_marker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatePass:
    """The file cleared every gate."""


@dataclass(frozen=True)
class GateSkip:
    reason: SkipReason


GateResult = GatePass | GateSkip

GatePredicate = Callable[[CandidateFile, ProbeResult, DaemonConfig], bool]


def _has_marker(
    candidate: CandidateFile, _probe: ProbeResult, _c: DaemonConfig
) -> bool:
    return has_skip_marker(candidate.path)


def _no_video(_candidate: CandidateFile, probe: ProbeResult, _c: DaemonConfig) -> bool:
    return not probe.video_streams


def _too_small(candidate: CandidateFile, _probe: ProbeResult, c: DaemonConfig) -> bool:
    return candidate.size_bytes <= c.min_bytes


def _already_av1(
    _candidate: CandidateFile, probe: ProbeResult, _c: DaemonConfig
) -> bool:
    # Only the first video stream decides; later streams are not inspected.
    return probe.video_streams[0].codec_name.casefold() == "av1"


GATES: tuple[tuple[GatePredicate, SkipReason], ...] = (
    (_has_marker, SkipReason.HAS_SKIP_MARKER),
    (_no_video, SkipReason.NO_VIDEO),
    (_too_small, SkipReason.TOO_SMALL),
    (_already_av1, SkipReason.ALREADY_AV1),
)


def evaluate_gates(
    candidate: CandidateFile,
    probe: ProbeResult,
    config: DaemonConfig,
) -> GateResult:
    """Run the gate table against a file.

    Args:
        candidate: The scanned file.
        probe: Its probe result.
        config: Daemon configuration (min_bytes is read).

    Returns:
        GateSkip with the first matching reason, or GatePass.
    """
    for predicate, reason in GATES:
        if predicate(candidate, probe, config):
            logger.debug("Gate matched: %s", reason.value)
            return GateSkip(reason)
    return GatePass()
