"""Interaction state for an inspector session."""

from .machine import NO_SELECTION, TAB_TITLES, InspectorSession, Snapshot
from .modes import AddingFile, Browsing, Mode, ViewingHelp, ViewingRawOutput
from .notifications import DEFAULT_LIFETIME, Notification

__all__ = [
    "InspectorSession",
    "Snapshot",
    "TAB_TITLES",
    "NO_SELECTION",
    "Mode",
    "Browsing",
    "AddingFile",
    "ViewingRawOutput",
    "ViewingHelp",
    "Notification",
    "DEFAULT_LIFETIME",
]
