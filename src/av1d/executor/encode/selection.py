"""Encoder and quality selection."""

from __future__ import annotations

import logging
from collections.abc import Collection

from av1d.core.errors import NoEncoderAvailableError
from av1d.domain.enums import EncoderKind, EncoderPreference, QualityTier
from av1d.domain.models import EncoderChoice

logger = logging.getLogger(__name__)

# Fallback order when the preferred encoder is not available
ENCODER_HIERARCHY: tuple[EncoderKind, ...] = (
    EncoderKind.SVT_AV1,
    EncoderKind.LIBAOM_AV1,
    EncoderKind.LIBRAV1E,
)

# (minimum height, base CRF), highest first
_CRF_BY_HEIGHT = ((2160, 18), (1440, 19), (1080, 20))
_DEFAULT_CRF = 21

# (minimum height, base SVT-AV1 preset), highest first
_PRESET_BY_HEIGHT = ((2160, 1), (1080, 2))
_DEFAULT_PRESET = 3

_VERY_HIGH_STEP = 2


def select_encoder(
    available: Collection[EncoderKind],
    preference: EncoderPreference | EncoderKind | None = None,
) -> EncoderChoice:
    """Pick an encoder from those ffmpeg offers.

    Args:
        available: Encoders detected in the installed ffmpeg.
        preference: Operator preference; used when available.

    Returns:
        The preferred encoder if available, otherwise the first available
        encoder in ENCODER_HIERARCHY.

    Raises:
        NoEncoderAvailableError: If no AV1 encoder is available.
    """
    if isinstance(preference, EncoderPreference):
        preference = preference.to_kind()

    if preference is not None and preference in available:
        return EncoderChoice(preference)

    for kind in ENCODER_HIERARCHY:
        if kind in available:
            if preference is not None:
                logger.warning(
                    "Preferred encoder %s not available, falling back to %s",
                    preference.codec_name,
                    kind.codec_name,
                )
            return EncoderChoice(kind)

    raise NoEncoderAvailableError(
        "No AV1 encoder found in ffmpeg (need one of: "
        + ", ".join(kind.codec_name for kind in ENCODER_HIERARCHY)
        + ")"
    )


def _by_height(height: int, table: tuple[tuple[int, int], ...], default: int) -> int:
    for min_height, value in table:
        if height >= min_height:
            return value
    return default


def _apply_tier(base: int, quality_tier: QualityTier) -> int:
    if quality_tier is QualityTier.VERY_HIGH:
        return max(0, base - _VERY_HIGH_STEP)
    return base


def select_crf(height: int, quality_tier: QualityTier) -> int:
    """CRF for a source height; lower is higher quality."""
    return _apply_tier(_by_height(height, _CRF_BY_HEIGHT, _DEFAULT_CRF), quality_tier)


def select_preset(height: int, quality_tier: QualityTier) -> int:
    """SVT-AV1 preset for a source height; lower is slower and better."""
    return _apply_tier(
        _by_height(height, _PRESET_BY_HEIGHT, _DEFAULT_PRESET), quality_tier
    )
