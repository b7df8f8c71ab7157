"""Process exit statuses for the av1d commands.

Scripts wrapping ``av1d run --once`` or ``av1d plan`` can branch on these
instead of parsing stderr. Per-file outcomes of a cycle (skips, failed
encodes) never change the exit status; only problems that stop the
command itself do.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0

    # Unreadable or invalid config.toml / AV1D_* environment
    CONFIG_ERROR = 3
    # A path given on the command line does not exist
    TARGET_NOT_FOUND = 4

    # No usable ffmpeg, or no AV1 encoder in its build
    TOOL_NOT_AVAILABLE = 5
    # ffprobe could not read the file passed to `av1d plan`
    FFPROBE_FAILED = 6

    # Writing a skip marker failed
    OPERATION_FAILED = 7

    # Ctrl-C while the daemon was running, as a shell reports SIGINT
    INTERRUPTED = 130
