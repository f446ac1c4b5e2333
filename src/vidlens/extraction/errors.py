"""Extraction errors."""


class ExtractionError(Exception):
    """Base exception for failures while analyzing a media file."""


class PathNotFound(ExtractionError):
    """Raised when the requested path does not exist."""


class ProbeInvocationFailure(ExtractionError):
    """Raised when the external probe could not be launched at all."""
