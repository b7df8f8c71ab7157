"""Tests for EnvReader."""

import os
from pathlib import Path

from av1d.config.env import EnvReader


class TestEnvReader:
    """Tests for typed environment access."""

    def test_empty_string_is_unset(self):
        """An empty value falls back to the default."""
        assert EnvReader({"X": ""}).get_str("X", "d") == "d"

    def test_get_int(self):
        """Integers parse; garbage falls back."""
        reader = EnvReader({"A": "5", "B": "five"})

        assert reader.get_int("A") == 5
        assert reader.get_int("B", 1) == 1

    def test_get_float(self):
        """Floats parse; garbage falls back."""
        reader = EnvReader({"A": "0.75", "B": "most"})

        assert reader.get_float("A") == 0.75
        assert reader.get_float("B") is None

    def test_get_bool(self):
        """Truthy strings are recognized case-insensitively."""
        reader = EnvReader({"A": "Yes", "B": "0"})

        assert reader.get_bool("A") is True
        assert reader.get_bool("B") is False
        assert reader.get_bool("C", True) is True

    def test_get_path_expands_user(self):
        """~ is expanded in paths."""
        path = EnvReader({"P": "~/media"}).get_path("P")

        assert path == Path("~/media").expanduser()

    def test_get_path_list(self):
        """Lists split on os.pathsep and drop empty entries."""
        value = os.pathsep.join(["/a", "", "/b"])

        assert EnvReader({"L": value}).get_path_list("L") == [Path("/a"), Path("/b")]

    def test_get_path_list_only_separators(self):
        """A list of only separators is treated as unset."""
        assert EnvReader({"L": os.pathsep}).get_path_list("L") is None
