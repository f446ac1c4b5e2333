"""Configuration models describing vidlens settings."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class VidlensBaseModel(BaseModel):
    """Shared configuration for vidlens Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class ProbeSettings(VidlensBaseModel):
    """Options for the external metadata probe.

    Attributes:
        binary: Executable name or path of the ffprobe binary.
        extra_args: Additional arguments appended after the fixed probe arguments.
    """

    binary: str = "ffprobe"
    extra_args: List[str] = Field(default_factory=list)


class UISettings(VidlensBaseModel):
    """Terminal interface preferences.

    Attributes:
        notification_seconds: How long a notification stays in the status bar.
        title: Heading shown at the top of the inspector.
    """

    notification_seconds: float = 3.0
    title: str = "Video Analyzer"

    @field_validator("notification_seconds")
    @classmethod
    def _positive_lifetime(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("notification_seconds must be positive")
        return value


class FilterPresets(VidlensBaseModel):
    """Preset filter values offered in the Filters tab.

    Attributes:
        containers: Container (file extension) fragments.
        codecs: Codec label fragments.
        resolutions: Resolution fragments.
        frame_rates: Frame rate fragments.
        bitrates: Bitrate (Mbps) fragments.
    """

    containers: List[str] = Field(
        default_factory=lambda: ["mp4", "mov", "avi", "mkv", "jpg", "png"]
    )
    codecs: List[str] = Field(
        default_factory=lambda: ["H.264", "H.265", "VP9", "AV1", "Hap", "DXV3"]
    )
    resolutions: List[str] = Field(
        default_factory=lambda: ["1920x1080", "1280x720", "3840x2160", "2560x1440"]
    )
    frame_rates: List[str] = Field(default_factory=lambda: ["24", "25", "30", "50", "60"])
    bitrates: List[str] = Field(default_factory=lambda: ["1", "5", "10", "15", "20"])


class LoggingSettings(VidlensBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
        file: Destination log file; the terminal is reserved for the interface.
        max_size_mb: Maximum log size before rotation.
        backup_count: Number of historical log files to retain.
    """

    level: str = "WARNING"
    file: str = "~/.vidlens/vidlens.log"
    max_size_mb: int = 10
    backup_count: int = 3

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}")
        return level


class VidlensConfig(VidlensBaseModel):
    """Top-level configuration struct for vidlens.

    Attributes:
        probe: External probe settings.
        ui: Interface settings.
        filters: Preset filter options.
        logging: Logging configuration.
    """

    probe: ProbeSettings = Field(default_factory=ProbeSettings)
    ui: UISettings = Field(default_factory=UISettings)
    filters: FilterPresets = Field(default_factory=FilterPresets)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


__all__ = [
    "LOG_LEVELS",
    "VidlensBaseModel",
    "ProbeSettings",
    "UISettings",
    "FilterPresets",
    "LoggingSettings",
    "VidlensConfig",
]
