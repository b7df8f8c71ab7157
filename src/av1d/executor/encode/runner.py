"""Run an ffmpeg encode as an asyncio subprocess with progress reporting."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from av1d.core.errors import EncodeError
from av1d.tools.progress import EncodeProgress, parse_progress_line

logger = logging.getLogger(__name__)

PROGRESS_FLAGS = ("-progress", "pipe:1", "-nostats")

# Lines of stderr kept for error reports
STDERR_TAIL_LINES = 40

ProgressCallback = Callable[[EncodeProgress], None]


@dataclass(frozen=True)
class EncodeOutcome:
    output_path: Path
    returncode: int
    progress: EncodeProgress
    stderr_tail: tuple[str, ...]


def with_progress_flags(
    command: list[str], ffmpeg_path: Path | str | None = None
) -> list[str]:
    """Insert the progress-pipe flags right after the program name.

    Optionally swaps the program for an explicit ffmpeg path.
    """
    program = str(ffmpeg_path) if ffmpeg_path is not None else command[0]
    return [program, *PROGRESS_FLAGS, *command[1:]]


async def _read_progress(
    stream: asyncio.StreamReader,
    progress: EncodeProgress,
    duration: float | None,
    on_progress: ProgressCallback | None,
) -> None:
    async for raw in stream:
        line = raw.decode("utf-8", errors="replace")
        if not parse_progress_line(line, progress):
            continue
        percent = progress.get_percent(duration)
        logger.debug(
            "Encode progress: %s",
            f"{percent:.1f}%" if percent is not None else "unknown",
            extra={
                "out_time_seconds": progress.out_time_seconds,
                "total_size": progress.total_size,
                "speed": progress.speed,
            },
        )
        if on_progress is not None:
            try:
                on_progress(progress)
            except Exception as e:
                logger.warning("Progress callback error: %s", e)


async def _read_stderr(stream: asyncio.StreamReader, tail: deque[str]) -> None:
    async for raw in stream:
        tail.append(raw.decode("utf-8", errors="replace").rstrip())


async def run_encode(
    command: list[str],
    *,
    ffmpeg_path: Path | str | None = None,
    duration: float | None = None,
    on_progress: ProgressCallback | None = None,
) -> EncodeOutcome:
    """Run an encoder command built by build_command.

    The output path is the last argument of the command. If the task is
    cancelled, the ffmpeg process is killed before the cancellation
    propagates; removing the partial output is the caller's job.

    Args:
        command: Full ffmpeg argument list.
        ffmpeg_path: Executable to use instead of command[0].
        duration: Source duration in seconds, for percentage reporting.
        on_progress: Called after every progress block.

    Returns:
        EncodeOutcome for a successful encode.

    Raises:
        EncodeError: If ffmpeg cannot be started or exits non-zero.
    """
    if len(command) < 2:
        raise EncodeError("Encode command has no output path")
    output_path = Path(command[-1])
    args = with_progress_flags(command, ffmpeg_path)

    logger.info("Starting encode: %s", " ".join(args))
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise EncodeError(f"Failed to start ffmpeg: {e}") from e

    progress = EncodeProgress()
    stderr_tail: deque[str] = deque(maxlen=STDERR_TAIL_LINES)
    assert process.stdout is not None
    assert process.stderr is not None

    try:
        await asyncio.gather(
            _read_progress(process.stdout, progress, duration, on_progress),
            _read_stderr(process.stderr, stderr_tail),
        )
        returncode = await process.wait()
    except asyncio.CancelledError:
        if process.returncode is None:
            logger.warning("Encode cancelled, killing ffmpeg (pid %d)", process.pid)
            process.kill()
            await process.wait()
        raise

    if returncode != 0:
        tail = "\n".join(stderr_tail)
        raise EncodeError(
            f"ffmpeg exited with code {returncode}:\n{tail}",
            returncode=returncode,
            stderr=tail,
        )

    logger.info("Encode finished: %s", output_path)
    return EncodeOutcome(
        output_path=output_path,
        returncode=returncode,
        progress=progress,
        stderr_tail=tuple(stderr_tail),
    )
