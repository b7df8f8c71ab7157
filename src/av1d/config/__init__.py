"""Configuration loading for av1d.

Precedence, highest first: CLI arguments, AV1D_* environment variables,
the TOML config file, built-in defaults.
"""

from av1d.config.loader import get_default_config_path, load_config
from av1d.config.models import Av1dConfig, DaemonConfig, LoggingConfig

__all__ = [
    "Av1dConfig",
    "DaemonConfig",
    "LoggingConfig",
    "get_default_config_path",
    "load_config",
]
