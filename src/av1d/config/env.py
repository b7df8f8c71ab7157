"""Environment variable reader with injectable environment for tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class EnvReader:
    """Read typed values from environment variables.

    Invalid values are logged and replaced with the default, so a typo in
    the environment never prevents startup.

    Example:
        reader = EnvReader(env={"AV1D_MIN_BYTES": "1000"})
        reader.get_int("AV1D_MIN_BYTES")  # 1000
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        value = self._env.get(var)
        if value is None or value == "":
            return default
        return value

    def get_int(self, var: str, default: int | None = None) -> int | None:
        value = self.get_str(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_float(self, var: str, default: float | None = None) -> float | None:
        value = self.get_str(var)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid float value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Read a boolean; "true", "1", "yes" and "on" are true."""
        value = self.get_str(var)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        value = self.get_str(var)
        if value is None:
            return default
        return Path(value).expanduser()

    def get_path_list(
        self, var: str, default: list[Path] | None = None
    ) -> list[Path] | None:
        """Read an os.pathsep separated list of paths, ignoring empty entries."""
        value = self.get_str(var)
        if value is None:
            return default
        paths = [Path(p).expanduser() for p in value.split(os.pathsep) if p]
        return paths or default
