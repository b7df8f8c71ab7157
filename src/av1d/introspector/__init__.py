"""Media introspection via ffprobe."""

from av1d.introspector.ffprobe import FFprobeIntrospector
from av1d.introspector.interface import MediaIntrospectionError, Prober
from av1d.introspector.parsers import parse_ffprobe_output

__all__ = [
    "FFprobeIntrospector",
    "MediaIntrospectionError",
    "Prober",
    "parse_ffprobe_output",
]
