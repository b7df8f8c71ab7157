"""JSON log formatter."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes present on every LogRecord, plus those added during formatting
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

# Set by FileContextFilter; emitted at the top level
_FILE_FIELDS = ("job_id", "file_path")
_FILTER_ONLY = frozenset({"file_tag"})


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys: ``timestamp`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``; ``job_id`` and ``file_path`` while a file is being
    processed; ``context`` holding any ``extra={...}`` fields; and
    ``exception`` when the record carries exc_info.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _FILE_FIELDS:
            value = getattr(record, name, None)
            if value:
                entry[name] = value

        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
            and key not in _FILE_FIELDS
            and key not in _FILTER_ONLY
            and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
