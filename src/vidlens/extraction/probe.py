"""ffprobe invocation."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path
from typing import Protocol, Sequence

from .errors import ProbeInvocationFailure

LOGGER = logging.getLogger(__name__)

PROBE_ARGS = ("-show_streams", "-show_format", "-hide_banner", "-of", "json")


class ProbeRunner(Protocol):
    """Anything that can turn a path into the probe's textual report."""

    def run(self, path: str) -> str:
        """Return the probe's standard output for ``path``."""
        ...


class FFprobeRunner:
    """Run ffprobe synchronously and capture its standard output.

    The exit status is not inspected beyond logging: whatever ffprobe printed
    is returned, including an empty string.
    """

    def __init__(self, binary: str | Path = "ffprobe", extra_args: Sequence[str] = ()) -> None:
        self.binary = str(binary)
        self.extra_args = tuple(extra_args)

    def command(self, path: str) -> list[str]:
        """Return the argument vector used to probe ``path``."""
        return [self.binary, "-i", path, *PROBE_ARGS, *self.extra_args]

    def run(self, path: str) -> str:
        """Probe ``path`` and return stdout decoded as UTF-8 with replacements.

        Raises:
            ProbeInvocationFailure: If the binary cannot be started.
        """
        command = self.command(path)
        LOGGER.debug("Running probe: %s", command)
        try:
            result = subprocess.run(  # nosec B603 - arguments are passed as a list
                command,
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            raise ProbeInvocationFailure(f"Could not run {self.binary}: {exc}") from exc

        if result.returncode != 0:
            LOGGER.warning(
                "%s exited with status %s for %s", self.binary, result.returncode, path
            )
        return result.stdout.decode("utf-8", errors="replace")


__all__ = ["PROBE_ARGS", "ProbeRunner", "FFprobeRunner"]
