"""Structured logging for av1d.

Provides text or JSON output with optional file rotation, plus per-file
context that follows each pipeline task across awaits.
"""

from av1d.logging.config import configure_logging
from av1d.logging.context import (
    FileContextFilter,
    file_context,
    get_file_context,
)
from av1d.logging.handlers import JSONFormatter

__all__ = [
    "FileContextFilter",
    "JSONFormatter",
    "configure_logging",
    "file_context",
    "get_file_context",
]
