"""Configuration loader with precedence handling.

Configuration is merged in this order (highest wins):
1. CLI arguments (passed to load_config as overrides)
2. Environment variables (AV1D_*)
3. Config file (~/.config/av1d/config.toml)
4. Default values

Environment variables:
- AV1D_CONFIG_PATH: Path to config file
- AV1D_LIBRARY_ROOTS: Library directories, separated by ':'
- AV1D_MIN_BYTES: Minimum file size to transcode
- AV1D_MAX_SIZE_RATIO: Maximum output/original size ratio
- AV1D_PREFER_ENCODER: svt, aom or rav1e
- AV1D_MAX_CONCURRENT_JOBS: Concurrent encodes
- AV1D_TEMP_DIR: Directory for encoder output
- AV1D_FFMPEG_PATH / AV1D_FFPROBE_PATH: Tool locations
- AV1D_LOG_LEVEL / AV1D_LOG_FILE: Logging overrides
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from av1d.config.env import EnvReader
from av1d.config.models import Av1dConfig, DaemonConfig, LoggingConfig
from av1d.config.schema import ConfigFileModel
from av1d.core.errors import ConfigError
from av1d.domain.enums import EncoderPreference

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / ".config" / "av1d" / "config.toml"


def get_default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return the config file location, honoring AV1D_CONFIG_PATH."""
    path = EnvReader(env).get_path("AV1D_CONFIG_PATH")
    return path if path is not None else DEFAULT_CONFIG_FILE


def load_config_file(path: Path) -> ConfigFileModel:
    """Read and validate a TOML config file.

    A missing file yields an empty model (all defaults).

    Raises:
        ConfigError: If the file is unreadable, not valid TOML, or fails
            validation.
    """
    if not path.exists():
        logger.debug("Config file %s not found, using defaults", path)
        return ConfigFileModel()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    try:
        return ConfigFileModel.model_validate(data)
    except ValidationError as e:
        raise ConfigError(_format_validation_error(path, e)) from e


def _format_validation_error(path: Path, error: ValidationError) -> str:
    lines = [f"Invalid configuration in {path}:"]
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        lines.append(f"  {location}: {err['msg']}")
    return "\n".join(lines)


def _env_daemon_overrides(reader: EnvReader) -> dict[str, Any]:
    overrides: dict[str, Any] = {
        "library_roots": reader.get_path_list("AV1D_LIBRARY_ROOTS"),
        "min_bytes": reader.get_int("AV1D_MIN_BYTES"),
        "max_size_ratio": reader.get_float("AV1D_MAX_SIZE_RATIO"),
        "max_concurrent_jobs": reader.get_int("AV1D_MAX_CONCURRENT_JOBS"),
        "temp_output_dir": reader.get_path("AV1D_TEMP_DIR"),
        "ffmpeg_path": reader.get_path("AV1D_FFMPEG_PATH"),
        "ffprobe_path": reader.get_path("AV1D_FFPROBE_PATH"),
    }
    encoder = reader.get_str("AV1D_PREFER_ENCODER")
    if encoder is not None:
        try:
            overrides["prefer_encoder"] = EncoderPreference(encoder.lower())
        except ValueError:
            logger.warning("Invalid value for AV1D_PREFER_ENCODER: %s", encoder)
    return overrides


def _apply(base: Any, values: Mapping[str, Any]) -> Any:
    """Return base with every non-None value replaced."""
    changes = {key: value for key, value in values.items() if value is not None}
    if "library_roots" in changes:
        changes["library_roots"] = tuple(changes["library_roots"])
    return replace(base, **changes) if changes else base


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    daemon_overrides: Mapping[str, Any] | None = None,
    logging_overrides: Mapping[str, Any] | None = None,
) -> Av1dConfig:
    """Build the effective configuration.

    Args:
        config_path: Config file to read. Defaults to the standard location.
        env: Environment mapping, for tests. Defaults to os.environ.
        daemon_overrides: CLI-provided DaemonConfig field values.
        logging_overrides: CLI-provided LoggingConfig field values.

    Returns:
        The merged, validated configuration.

    Raises:
        ConfigError: If any layer produces an invalid value.
    """
    reader = EnvReader(env)
    path = config_path or get_default_config_path(env)
    file_model = load_config_file(path)

    daemon = _apply(DaemonConfig(), file_model.daemon.model_dump())
    daemon = _apply(daemon, _env_daemon_overrides(reader))
    daemon = _apply(daemon, daemon_overrides or {})

    log_config = _apply(LoggingConfig(), file_model.logging.model_dump())
    log_config = _apply(
        log_config,
        {
            "level": reader.get_str("AV1D_LOG_LEVEL"),
            "file": reader.get_path("AV1D_LOG_FILE"),
        },
    )
    log_config = _apply(log_config, logging_overrides or {})

    return Av1dConfig(daemon=daemon, logging=log_config)
