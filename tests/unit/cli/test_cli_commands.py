"""Tests for the av1d CLI commands."""

import json
from dataclasses import replace
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner
from factories import make_probe, make_video_stream

from av1d.cli import main
from av1d.cli.exit_codes import ExitCode
from av1d.config.models import Av1dConfig, DaemonConfig
from av1d.core.errors import MediaIntrospectionError
from av1d.domain.enums import EncoderKind
from av1d.sidecars import skip_marker_path, why_file_path
from av1d.tools.models import FFmpegInfo, ToolStatus


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep CLI invocations from reconfiguring the root logger."""
    with patch("av1d.cli.configure_logging"):
        yield


@pytest.fixture
def config(daemon_config: DaemonConfig) -> Av1dConfig:
    return Av1dConfig(daemon=daemon_config)


def _invoke(config: Av1dConfig, *args: str):
    return CliRunner().invoke(main, list(args), obj={"config": config})


def _ffmpeg(*encoders: EncoderKind, status=ToolStatus.AVAILABLE) -> FFmpegInfo:
    return FFmpegInfo(
        path=Path("/usr/bin/ffmpeg"),
        version="8.0",
        version_tuple=(8, 0),
        status=status,
        av1_encoders=set(encoders),
    )


class TestMainGroup:
    """Tests for top-level options."""

    def test_bad_config_file_exits_with_config_error(self, temp_dir):
        """An invalid config file exits with CONFIG_ERROR."""
        bad = temp_dir / "bad.toml"
        bad.write_text("[daemon]\nnot_a_key = 1\n")

        result = CliRunner().invoke(main, ["--config", str(bad), "scan"])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "not_a_key" in result.output

    def test_version(self):
        """--version prints the package version."""
        result = CliRunner().invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestScanCommand:
    """Tests for 'av1d scan'."""

    def test_lists_candidates(self, config, library_dir):
        """Videos are listed with a count."""
        result = _invoke(config, "scan")

        assert result.exit_code == 0
        assert "movie.mkv" in result.output
        assert "3 candidate(s)" in result.output

    def test_json_output(self, config, library_dir):
        """--json prints a list of candidates."""
        result = _invoke(config, "scan", "--json")

        data = json.loads(result.output)
        assert {Path(item["path"]).name for item in data} == {
            "movie.mkv",
            "show.MP4",
            "episode.m2ts",
        }


class TestSkipCommand:
    """Tests for 'av1d skip'."""

    def test_creates_marker_and_reason(self, config, library_dir):
        """The marker and why-file are written."""
        video = library_dir / "movie.mkv"

        result = _invoke(config, "skip", str(video), "--reason", "keep grain")

        assert result.exit_code == 0
        assert skip_marker_path(video).exists()
        assert why_file_path(video).read_text() == "keep grain"

    def test_missing_file(self, config, temp_dir):
        """A missing target exits with TARGET_NOT_FOUND."""
        result = _invoke(config, "skip", str(temp_dir / "nope.mkv"))

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND


class TestEncodersCommand:
    """Tests for 'av1d encoders'."""

    def test_reports_selection(self, config):
        """The preferred encoder is selected when present."""
        info = _ffmpeg(EncoderKind.SVT_AV1, EncoderKind.LIBAOM_AV1)
        with patch("av1d.cli.encoders.detect_ffmpeg", return_value=info):
            result = _invoke(config, "encoders", "--json")

        data = json.loads(result.output)
        assert result.exit_code == 0
        assert data["selected"] == "libsvtav1"
        assert data["available"] == ["libsvtav1", "libaom-av1"]

    def test_no_encoders(self, config):
        """No AV1 encoder exits with TOOL_NOT_AVAILABLE."""
        with patch("av1d.cli.encoders.detect_ffmpeg", return_value=_ffmpeg()):
            result = _invoke(config, "encoders")

        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE
        assert "Selected: none" in result.output


class TestPlanCommand:
    """Tests for 'av1d plan'."""

    def test_prints_command(self, config, library_dir):
        """An eligible file gets an ffmpeg command."""
        small_files_ok = Av1dConfig(daemon=replace(config.daemon, min_bytes=10))
        video = library_dir / "movie.mkv"
        with patch(
            "av1d.cli.plan.FFprobeIntrospector.probe_sync", return_value=make_probe()
        ):
            result = _invoke(small_files_ok, "plan", str(video), "--encoder", "aom")

        assert result.exit_code == 0
        assert "libaom-av1" in result.output
        assert "ffmpeg -hide_banner -y" in result.output

    def test_reports_skip(self, config, library_dir):
        """A skipped file shows the reason and no command."""
        av1 = make_probe(video=[make_video_stream("av1")])
        with patch("av1d.cli.plan.FFprobeIntrospector.probe_sync", return_value=av1):
            result = _invoke(config, "plan", str(library_dir / "movie.mkv"))

        assert result.exit_code == 0
        assert "Skip:" in result.output
        assert "Command:" not in result.output

    def test_probe_failure(self, config, library_dir):
        """A probe failure exits with FFPROBE_FAILED."""
        with patch(
            "av1d.cli.plan.FFprobeIntrospector.probe_sync",
            side_effect=MediaIntrospectionError("corrupt"),
        ):
            result = _invoke(config, "plan", str(library_dir / "movie.mkv"))

        assert result.exit_code == ExitCode.FFPROBE_FAILED


class TestRunCommand:
    """Tests for 'av1d run'."""

    def test_missing_ffmpeg(self, config):
        """No usable ffmpeg exits with TOOL_NOT_AVAILABLE."""
        missing = FFmpegInfo(status_message="ffmpeg not found in PATH")
        with patch("av1d.tools.detection.detect_ffmpeg", return_value=missing):
            result = _invoke(config, "run", "--once")

        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE
        assert "not found" in result.output

    def test_runs_daemon_once(self, config):
        """--once runs the daemon with the selected encoder."""
        with patch(
            "av1d.cli.run.require_ffmpeg", return_value=_ffmpeg(EncoderKind.LIBRAV1E)
        ), patch("av1d.cli.run.run_daemon", new_callable=AsyncMock) as run_daemon:
            result = _invoke(config, "run", "--once")

        assert result.exit_code == 0
        args, kwargs = run_daemon.call_args
        assert args[1].kind is EncoderKind.LIBRAV1E
        assert kwargs["once"] is True

    def test_interrupt_exit_code(self, config):
        """Ctrl-C exits with the SIGINT status rather than click's usage code."""
        with patch(
            "av1d.cli.run.require_ffmpeg", return_value=_ffmpeg(EncoderKind.SVT_AV1)
        ), patch("av1d.cli.run.run_daemon", new_callable=MagicMock), patch(
            "av1d.cli.run.asyncio.run", side_effect=KeyboardInterrupt
        ):
            result = _invoke(config, "run")

        assert result.exit_code == ExitCode.INTERRUPTED == 130


class TestExitCodes:
    """Tests for the ExitCode values."""

    def test_codes_are_distinct(self):
        """Every failure has its own status."""
        values = [code.value for code in ExitCode]

        assert len(values) == len(set(values))

    def test_no_collision_with_click_usage_error(self):
        """Exit 2 stays reserved for click's bad-usage errors."""
        assert 2 not in {code.value for code in ExitCode}
        assert ExitCode.OK == 0
