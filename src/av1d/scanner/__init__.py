"""Library scanning and file stability detection."""

from av1d.scanner.orchestrator import VIDEO_EXTENSIONS, is_video_file, scan_libraries
from av1d.scanner.stability import check_stability

__all__ = ["VIDEO_EXTENSIONS", "check_stability", "is_video_file", "scan_libraries"]
