"""Media metadata extraction."""

from .engine import MetadataExtractor, build_record
from .errors import ExtractionError, PathNotFound, ProbeInvocationFailure
from .models import UNKNOWN, MediaRecord
from .probe import FFprobeRunner, ProbeRunner

__all__ = [
    "MetadataExtractor",
    "build_record",
    "ExtractionError",
    "PathNotFound",
    "ProbeInvocationFailure",
    "MediaRecord",
    "UNKNOWN",
    "FFprobeRunner",
    "ProbeRunner",
]
