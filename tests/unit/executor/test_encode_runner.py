"""Tests for the asyncio ffmpeg runner."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from av1d.core.errors import EncodeError
from av1d.executor.encode.runner import run_encode, with_progress_flags

COMMAND = ["ffmpeg", "-hide_banner", "-y", "-i", "in.mkv", "out.mkv"]

PROGRESS_OUTPUT = (
    b"out_time_us=1800000000\n"
    b"total_size=1048576\n"
    b"speed=2.5x\n"
    b"progress=continue\n"
    b"out_time_us=3600000000\n"
    b"progress=end\n"
)


def _reader(data: bytes) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader


def _fake_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0):
    process = MagicMock()
    process.pid = 4242
    process.returncode = None
    process.stdout = _reader(stdout)
    process.stderr = _reader(stderr)

    async def wait():
        process.returncode = returncode
        return returncode

    process.wait = wait
    return process


class TestWithProgressFlags:
    """Tests for progress flag insertion."""

    def test_inserts_after_program(self):
        """Progress flags go right after the program name."""
        args = with_progress_flags(COMMAND)

        assert args[:4] == ["ffmpeg", "-progress", "pipe:1", "-nostats"]
        assert args[4:] == COMMAND[1:]

    def test_replaces_program_with_configured_path(self):
        """An explicit ffmpeg path replaces the program name."""
        args = with_progress_flags(COMMAND, "/opt/ffmpeg/bin/ffmpeg")

        assert args[0] == "/opt/ffmpeg/bin/ffmpeg"


class TestRunEncode:
    """Tests for run_encode."""

    @pytest.mark.asyncio
    async def test_success_reports_progress(self):
        """Progress blocks reach the callback and the outcome."""
        process = _fake_process(stdout=PROGRESS_OUTPUT)
        seen: list[float | None] = []

        with patch(
            "asyncio.create_subprocess_exec", AsyncMock(return_value=process)
        ) as create:
            outcome = await run_encode(
                COMMAND,
                duration=3600.0,
                on_progress=lambda p: seen.append(p.get_percent(3600.0)),
            )

        assert create.call_args.args[1:4] == ("-progress", "pipe:1", "-nostats")
        assert outcome.returncode == 0
        assert str(outcome.output_path) == "out.mkv"
        assert outcome.progress.finished is True
        assert outcome.progress.speed == 2.5
        assert seen == [50.0, 100.0]

    @pytest.mark.asyncio
    async def test_nonzero_exit_raises_with_stderr(self):
        """A failing ffmpeg raises EncodeError carrying the stderr tail."""
        stderr = b"Invalid data found\nConversion failed!\n"
        process = _fake_process(stderr=stderr, returncode=1)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(EncodeError) as exc_info:
                await run_encode(COMMAND)

        assert exc_info.value.returncode == 1
        assert "Conversion failed!" in exc_info.value.stderr

    @pytest.mark.asyncio
    async def test_start_failure_raises(self):
        """A missing ffmpeg binary becomes an EncodeError."""
        with patch(
            "asyncio.create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("ffmpeg")),
        ):
            with pytest.raises(EncodeError, match="Failed to start"):
                await run_encode(COMMAND)

    @pytest.mark.asyncio
    async def test_callback_error_does_not_abort(self):
        """A raising progress callback is logged and ignored."""
        process = _fake_process(stdout=PROGRESS_OUTPUT)

        def bad_callback(progress):
            raise ValueError("boom")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            outcome = await run_encode(COMMAND, on_progress=bad_callback)

        assert outcome.returncode == 0

    @pytest.mark.asyncio
    async def test_rejects_command_without_output(self):
        """A command too short to hold an output path is refused."""
        with pytest.raises(EncodeError):
            await run_encode(["ffmpeg"])

    @pytest.mark.asyncio
    async def test_cancel_kills_process(self):
        """Cancelling the encode kills ffmpeg."""
        process = MagicMock()
        process.pid = 1
        process.returncode = None
        process.stdout = asyncio.StreamReader()
        process.stderr = asyncio.StreamReader()
        process.wait = AsyncMock(return_value=-9)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            task = asyncio.create_task(run_encode(COMMAND))
            await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        process.kill.assert_called_once()
