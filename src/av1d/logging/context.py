"""Per-file logging context.

Each file's pipeline runs in its own asyncio task, and tasks copy the
current contextvars on creation, so setting the context at the start of a
pipeline tags every record that pipeline emits without touching other
concurrently running files.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_job_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_id", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


@contextmanager
def file_context(
    file_path: Path | str,
    job_id: str | None = None,
) -> Generator[None, None, None]:
    """Tag log records emitted inside the block with the file being processed.

    Args:
        file_path: Path of the source file.
        job_id: Job identifier, once one has been assigned.

    Example:
        with file_context("/media/movie.mkv"):
            logger.info("Probing")  # record carries file_path
    """
    path_token = _file_path.set(str(file_path))
    job_token = _job_id.set(job_id)
    try:
        yield
    finally:
        _job_id.reset(job_token)
        _file_path.reset(path_token)


def set_job_id(job_id: str | None) -> None:
    """Attach a job id to the current context once it is known."""
    _job_id.set(job_id)


def get_file_context() -> tuple[str | None, str | None]:
    """Return (job_id, file_path) for the current context."""
    return _job_id.get(), _file_path.get()


class FileContextFilter(logging.Filter):
    """Inject job_id, file_path and a compact file_tag into log records.

    The tag is the file name in brackets, e.g. "[movie.mkv] ", or empty
    outside of a file context.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        job_id, file_path = get_file_context()
        record.job_id = job_id
        record.file_path = file_path
        record.file_tag = f"[{Path(file_path).name}] " if file_path else ""
        return True
