"""av1d - unattended AV1 transcoding for video libraries."""

__version__ = "0.1.0"
