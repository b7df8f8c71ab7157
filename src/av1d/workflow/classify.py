"""Guess whether a source is a streaming (web) rip or a disc rip.

Web rips often carry broken or negative timestamps, so the command builder
adds timestamp-regenerating input flags and the pad filter for them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from av1d.domain.enums import SourceType
from av1d.domain.models import ProbeResult

logger = logging.getLogger(__name__)

WEB_KEYWORDS = (
    "WEB",
    "WEBRIP",
    "WEBDL",
    "WEB-DL",
    "NF",
    "AMZN",
    "DSNP",
    "HULU",
    "ATVP",
)
DISC_KEYWORDS = ("BLURAY", "BLU-RAY", "REMUX", "BDMV", "UHD")

KEYWORD_SCORE = 10
HINT_SCORE = 5

LARGE_FILE_BYTES = 20 * 1024 * 1024 * 1024


@dataclass(frozen=True)
class SourceClassification:
    source_type: SourceType
    web_score: int
    disc_score: int
    reasons: tuple[str, ...] = field(default_factory=tuple)


def _first_keyword(text: str, keywords: tuple[str, ...]) -> str | None:
    for keyword in keywords:
        if keyword in text:
            return keyword
    return None


def classify_source(path: Path, probe: ProbeResult) -> SourceClassification:
    """Score a file as web-like or disc-like.

    Path keywords are a strong signal (+10, counted once per side); bitrate
    for the resolution, VP9, and very large files are weaker hints (+5).
    Keyword matching is a plain substring test on the upper-cased path.

    Args:
        path: Full path of the source file.
        probe: Its probe result.

    Returns:
        Classification with both scores; equal scores give UNKNOWN.
    """
    web_score = 0
    disc_score = 0
    reasons: list[str] = []
    path_upper = str(path).upper()

    if keyword := _first_keyword(path_upper, WEB_KEYWORDS):
        web_score += KEYWORD_SCORE
        reasons.append(f"Path contains web keyword: {keyword}")
    if keyword := _first_keyword(path_upper, DISC_KEYWORDS):
        disc_score += KEYWORD_SCORE
        reasons.append(f"Path contains disc keyword: {keyword}")

    video = probe.main_video_stream()
    if video is not None:
        height = video.height
        bitrate = video.bitrate if video.bitrate is not None else probe.format.bitrate

        if bitrate is not None:
            if height >= 2160 and bitrate < 10_000_000:
                web_score += HINT_SCORE
                reasons.append(f"Low bitrate for 2160p: {bitrate} bps")
            elif 1080 <= height < 2160 and bitrate < 5_000_000:
                web_score += HINT_SCORE
                reasons.append(f"Low bitrate for 1080p: {bitrate} bps")

            if height >= 2160 and bitrate > 40_000_000:
                disc_score += HINT_SCORE
                reasons.append(f"High bitrate for 2160p: {bitrate} bps")
            elif 1080 <= height < 2160 and bitrate > 15_000_000:
                disc_score += HINT_SCORE
                reasons.append(f"High bitrate for 1080p: {bitrate} bps")

        if video.codec_name.lower() == "vp9":
            web_score += HINT_SCORE
            reasons.append("Codec is VP9")

    if probe.format.size > LARGE_FILE_BYTES:
        disc_score += HINT_SCORE
        reasons.append(
            f"Large file size: {probe.format.size / (1024 ** 3):.2f} GiB"
        )

    if web_score > disc_score:
        source_type = SourceType.WEB_LIKE
    elif disc_score > web_score:
        source_type = SourceType.DISC_LIKE
    else:
        source_type = SourceType.UNKNOWN

    logger.debug(
        "Classified as %s (web=%d, disc=%d)",
        source_type.value,
        web_score,
        disc_score,
        extra={"reasons": reasons},
    )
    return SourceClassification(source_type, web_score, disc_score, tuple(reasons))
