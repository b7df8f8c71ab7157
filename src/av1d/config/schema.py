"""Pydantic models validating the user-authored config file."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from av1d.domain.enums import EncoderPreference, QualityTier


class DaemonSection(BaseModel):
    """The [daemon] table. Omitted keys keep their defaults."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    library_roots: list[Path] | None = None
    min_bytes: int | None = Field(default=None, ge=0)
    max_size_ratio: float | None = Field(default=None, gt=0.0, le=1.0)
    scan_interval_secs: int | None = Field(default=None, ge=1)
    stability_seconds: float | None = Field(default=None, ge=0.0)
    temp_output_dir: Path | None = None
    max_concurrent_jobs: int | None = Field(default=None, ge=1)
    prefer_encoder: EncoderPreference | None = None
    quality_tier: QualityTier | None = None
    keep_original: bool | None = None
    write_why_sidecars: bool | None = None
    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None

    @field_validator("library_roots")
    @classmethod
    def validate_library_roots(cls, v: list[Path] | None) -> list[Path] | None:
        if v is not None and not v:
            raise ValueError("library_roots must list at least one directory")
        return v


class LoggingSection(BaseModel):
    """The [logging] table."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str | None = None
    file: Path | None = None
    format: str | None = None
    include_stderr: bool | None = None
    max_bytes: int | None = Field(default=None, ge=1)
    backup_count: int | None = Field(default=None, ge=0)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str | None) -> str | None:
        if v is not None and v.lower() not in {"debug", "info", "warning", "error"}:
            raise ValueError(f"Unknown log level '{v}'")
        return v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str | None) -> str | None:
        if v is not None and v.lower() not in {"text", "json"}:
            raise ValueError(f"Unknown log format '{v}'. Use 'text' or 'json'.")
        return v


class ConfigFileModel(BaseModel):
    """Whole config file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    daemon: DaemonSection = Field(default_factory=DaemonSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)
