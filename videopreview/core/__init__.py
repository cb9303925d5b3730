"""Core option model, grid layout and frame-source scaffolding for the previewer."""

__all__ = [
    "VideoMetadata",
    "Frame",
    "seconds_to_timestamp",
]

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class VideoMetadata:
    """Basic metadata for a source video."""

    width: int
    height: int
    fps: float
    frame_count: int
    duration_seconds: float
    codec: Optional[str] = None

    @property
    def aspect_ratio(self) -> float:
        if self.height <= 0:
            return 1.0
        return self.width / self.height


@dataclass
class Frame:
    """A single sampled frame shown in the preview grid."""

    index: int
    frame_number: int
    timestamp: float
    image: Any = field(default=None, repr=False, compare=False)

    @property
    def frame_id(self) -> int:
        return self.frame_number

    @property
    def timestamp_string(self) -> str:
        return seconds_to_timestamp(self.timestamp)


def seconds_to_timestamp(seconds: float) -> str:
    """Format seconds as ``hh:mm:ss.cc``."""

    total_secs, hundredths = divmod(round(seconds * 100), 100)
    hours, remainder = divmod(total_secs, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{hundredths:02d}"
