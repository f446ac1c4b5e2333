"""Terminal user interface for vidlens."""

from .app import InspectorScreen, VidlensApp, key_name

__all__ = ["VidlensApp", "InspectorScreen", "key_name"]
