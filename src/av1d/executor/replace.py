"""Replace an original media file with its validated AV1 encode.

The original is first moved aside to ``<name>.orig.<unix-ts>``. The new
file is copied next to the original under a temporary name and renamed
into place, so the original path never holds a partially written file.
If anything fails after the backup exists, the backup is moved back.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import time
from pathlib import Path

from av1d.core.errors import ReplaceError

logger = logging.getLogger(__name__)

BACKUP_INFIX = ".orig."
PARTIAL_SUFFIX = ".av1d-partial"

# rename() errors that are worked around by copying instead:
# EXDEV for cross-filesystem moves, EROFS for spurious ZFS read-only errors
_COPY_FALLBACK_ERRNOS = frozenset({errno.EXDEV, errno.EROFS})


def backup_path_for(original: Path, timestamp: int | None = None) -> Path:
    if timestamp is None:
        timestamp = int(time.time())
    return original.with_name(f"{original.name}{BACKUP_INFIX}{timestamp}")


def _move_aside(original: Path, backup: Path) -> bool:
    """Move the original to its backup path.

    Returns:
        True if the original was renamed away, False if it was copied and
        therefore still exists at its original path.
    """
    try:
        original.rename(backup)
        return True
    except OSError as e:
        if e.errno not in _COPY_FALLBACK_ERRNOS:
            raise
        logger.warning(
            "Rename of %s failed (%s), copying to backup instead",
            original,
            os.strerror(e.errno),
        )
        shutil.copy2(original, backup)
        return False


def _restore(original: Path, backup: Path) -> bool:
    try:
        os.replace(backup, original)
    except OSError:
        logger.exception("Failed to restore %s from %s", original, backup)
        return False
    logger.info("Restored original %s from backup", original)
    return True


def atomic_replace(original: Path, new: Path, keep_original: bool = False) -> None:
    """Put ``new`` at ``original``'s path.

    Args:
        original: The file being replaced.
        new: The validated replacement; removed after a successful replace.
        keep_original: Keep the ``.orig.<ts>`` backup instead of deleting it.

    Raises:
        ReplaceError: If either file is missing or the replacement could not
            be completed. ``restored`` on the error tells whether the
            original is back in place.
    """
    if not new.exists():
        raise ReplaceError(f"New file does not exist: {new}", original)
    if not original.exists():
        raise ReplaceError(f"Original file does not exist: {original}", original)

    backup = backup_path_for(original)
    try:
        _move_aside(original, backup)
    except OSError as e:
        raise ReplaceError(
            f"Failed to back up {original} to {backup}: {e}", original
        ) from e

    partial = original.with_name(original.name + PARTIAL_SUFFIX)
    try:
        shutil.copyfile(new, partial)
        os.replace(partial, original)
    except OSError as e:
        partial.unlink(missing_ok=True)
        restored = _restore(original, backup)
        raise ReplaceError(
            f"Failed to move {new} into place at {original}: {e}",
            original,
            restored=restored,
        ) from e

    try:
        new.unlink()
    except OSError as e:
        logger.warning("Failed to delete temp file %s: %s", new, e)

    if keep_original:
        logger.info("Kept original as %s", backup)
    else:
        try:
            backup.unlink()
        except OSError as e:
            logger.warning("Failed to delete backup %s: %s", backup, e)

    logger.info("Replaced %s", original)
