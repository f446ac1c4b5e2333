"""Media record model produced by the extraction engine."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

UNKNOWN = "Unknown"


class MediaRecord(BaseModel):
    """One analyzed media file.

    Attributes:
        name: File stem of the analyzed path.
        container: File extension without the leading dot.
        codec: Codec label from the codec rule table.
        resolution: ``WxH`` label from the resolution rule table.
        frame_rate: Frame rate label from the frame-rate rule table.
        bitrate: Overall bitrate in Mbps with one fractional digit.
        path: Path exactly as supplied by the user.
        raw_output: Unmodified probe output.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    container: str = UNKNOWN
    codec: str = UNKNOWN
    resolution: str = UNKNOWN
    frame_rate: str = UNKNOWN
    bitrate: str = UNKNOWN
    path: str
    raw_output: str = ""

    @property
    def display_name(self) -> str:
        """Return the file name shown in tables."""
        if self.container == UNKNOWN:
            return self.name
        return f"{self.name}.{self.container}"


__all__ = ["MediaRecord", "UNKNOWN"]
