"""Turn a path and its probe report into a :class:`MediaRecord`."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import PathNotFound
from .models import UNKNOWN, MediaRecord
from .probe import FFprobeRunner, ProbeRunner
from .rules import extract_bitrate, extract_codec, extract_frame_rate, extract_resolution

LOGGER = logging.getLogger(__name__)


def build_record(path: str, raw_output: str) -> MediaRecord:
    """Derive a record from ``path`` and an already captured report.

    Name and container come from the path alone; the remaining fields come
    from the rule tables applied to ``raw_output``.

    Args:
        path: Path as typed by the user.
        raw_output: Complete probe output.

    Returns:
        MediaRecord: Record with every derived field populated.
    """
    path_obj = Path(path)
    container = path_obj.suffix[1:] if path_obj.suffix else UNKNOWN
    return MediaRecord(
        name=path_obj.stem,
        container=container,
        codec=extract_codec(raw_output),
        resolution=extract_resolution(raw_output),
        frame_rate=extract_frame_rate(raw_output),
        bitrate=extract_bitrate(raw_output),
        path=path,
        raw_output=raw_output,
    )


class MetadataExtractor:
    """Analyze media files through an external probe."""

    def __init__(self, runner: ProbeRunner | None = None) -> None:
        self.runner = runner or FFprobeRunner()

    def analyze(self, path: str) -> MediaRecord:
        """Probe ``path`` once and return its record.

        Args:
            path: Path to an existing file as typed by the user.

        Returns:
            MediaRecord: Extracted record; unparseable fields are ``Unknown``.

        Raises:
            PathNotFound: If ``path`` does not exist.
            ProbeInvocationFailure: If the probe cannot be launched.
        """
        try:
            exists = Path(path).exists()
        except (OSError, ValueError):
            exists = False
        if not exists:
            raise PathNotFound(f"File does not exist: {path}")

        raw_output = self.runner.run(path)
        record = build_record(path, raw_output)
        LOGGER.debug(
            "Analyzed %s: codec=%s resolution=%s fps=%s bitrate=%s",
            path,
            record.codec,
            record.resolution,
            record.frame_rate,
            record.bitrate,
        )
        return record


__all__ = ["MetadataExtractor", "build_record"]
