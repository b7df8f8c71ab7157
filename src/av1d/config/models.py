"""Runtime configuration dataclasses.

These are the validated, immutable objects the rest of av1d consumes.
User-authored input is checked by the pydantic models in config.schema
before it gets here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from av1d.core.errors import ConfigError
from av1d.domain.enums import EncoderPreference, QualityTier

GIB = 1024 * 1024 * 1024


@dataclass(frozen=True)
class DaemonConfig:
    """Settings for scanning, gating and encoding."""

    library_roots: tuple[Path, ...] = (Path("/media"),)

    # Files at or below this size are never transcoded
    min_bytes: int = 2 * GIB

    # Output must be strictly smaller than original * ratio
    max_size_ratio: float = 0.90

    scan_interval_secs: int = 60

    # Seconds a file's size must stay unchanged before it is processed
    stability_seconds: float = 10.0

    temp_output_dir: Path = Path("/var/lib/av1d/temp")
    max_concurrent_jobs: int = 1
    prefer_encoder: EncoderPreference = EncoderPreference.SVT
    quality_tier: QualityTier = QualityTier.VERY_HIGH
    keep_original: bool = False
    write_why_sidecars: bool = True

    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None

    def __post_init__(self) -> None:
        if not self.library_roots:
            raise ConfigError("library_roots must not be empty", "library_roots")
        if not 0.0 < self.max_size_ratio <= 1.0:
            raise ConfigError(
                f"max_size_ratio must be in (0, 1], got {self.max_size_ratio}",
                "max_size_ratio",
            )
        if self.max_concurrent_jobs < 1:
            raise ConfigError(
                "max_concurrent_jobs must be at least 1", "max_concurrent_jobs"
            )
        if self.stability_seconds < 0:
            raise ConfigError(
                "stability_seconds must not be negative", "stability_seconds"
            )


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for log output."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760
    backup_count: int = 5

    def __post_init__(self) -> None:
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ConfigError(
                f"level must be one of {sorted(valid_levels)}, got {self.level}",
                "level",
            )
        if self.format.lower() not in {"text", "json"}:
            raise ConfigError(
                f"format must be 'text' or 'json', got {self.format}", "format"
            )


@dataclass(frozen=True)
class Av1dConfig:
    """Top-level configuration."""

    daemon: DaemonConfig = field(default_factory=DaemonConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
