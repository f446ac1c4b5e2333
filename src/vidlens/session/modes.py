"""Interaction modes. Each mode carries only the state it needs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class Browsing:
    """Table navigation; the initial mode."""

    status: ClassVar[str] = "Ready - Press 'h' for help"


@dataclass(frozen=True)
class AddingFile:
    """Prompting for the path of a file to analyze.

    Line editing belongs to the input widget; the session only sees the
    submitted path.
    """

    status: ClassVar[str] = "Enter file path..."


@dataclass(frozen=True)
class ViewingRawOutput:
    """Scrolling through the selected record's probe output."""

    scroll: int = 0
    status: ClassVar[str] = "Viewing raw output - Press Esc to return"


@dataclass(frozen=True)
class ViewingHelp:
    """Key binding reference."""

    status: ClassVar[str] = "Help - Press Esc to return"


Mode = Union[Browsing, AddingFile, ViewingRawOutput, ViewingHelp]

__all__ = ["Browsing", "AddingFile", "ViewingRawOutput", "ViewingHelp", "Mode"]
