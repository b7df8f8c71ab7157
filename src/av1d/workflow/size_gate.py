"""Reject encodes that do not save enough space."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SizeGatePass:
    savings_bytes: int
    compression_ratio: float


@dataclass(frozen=True)
class SizeGateFail:
    new_bytes: int
    threshold_bytes: int

    def describe(self, original_bytes: int) -> str:
        return (
            f"Encoded file is not small enough: {self.new_bytes} bytes, "
            f"must be below {self.threshold_bytes} bytes "
            f"(original {original_bytes} bytes)"
        )


SizeGateResult = SizeGatePass | SizeGateFail


def check_size_gate(
    original_bytes: int,
    new_bytes: int,
    max_ratio: float,
) -> SizeGateResult:
    """Compare the encoded size with the allowed fraction of the original.

    The threshold is ``int(original_bytes * max_ratio)`` (truncated), and
    the new file must be strictly below it; landing exactly on the
    threshold fails.

    Args:
        original_bytes: Size of the source file.
        new_bytes: Size of the encoded file.
        max_ratio: Largest acceptable new/original ratio, in (0, 1].

    Returns:
        SizeGatePass with savings and ratio, or SizeGateFail.
    """
    threshold = int(original_bytes * max_ratio)
    if new_bytes >= threshold:
        return SizeGateFail(new_bytes=new_bytes, threshold_bytes=threshold)
    return SizeGatePass(
        savings_bytes=original_bytes - new_bytes,
        compression_ratio=new_bytes / original_bytes,
    )
