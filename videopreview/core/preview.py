"""The frame source: a loaded video, its merged options and the sampled frames."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from . import Frame, VideoMetadata, seconds_to_timestamp
from . import frame_extractor, video_loader
from .config_files import ConfigFileSet
from .options import OptionValue, RECOGNISED_OPTIONS, format_value

logger = logging.getLogger(__name__)

# Options whose change means a different set of frames.
FRAME_COUNT_OPTIONS = ("maximum_frames", "maximum_percentage", "minimum_sampling", "frames_to_show")


class FrameSource(Protocol):
    def get_option_value(self, option_id: str) -> Optional[OptionValue]: ...

    def set_option_value(self, option_id: str, value: OptionValue) -> None: ...

    def get_frame_count(self) -> int: ...

    def get_frames(self) -> list[Frame]: ...

    def request_grid(self, rows: int, cols: int) -> None: ...

    def get_frame_aspect_ratio(self) -> float: ...


class ConfigPersistence(Protocol):
    def list_config_file_paths(self) -> list[str]: ...

    def save_all_options(self, path: Path | str) -> Path: ...


class VideoPreview:
    """Everything needed to preview a single video file.

    Holds the video metadata, the configuration merged from every applicable
    config file, the grid most recently requested by the layout and the frames
    currently in the preview. Frames are rebuilt only when an option that
    affects their number changes or a new grid is requested.
    """

    def __init__(
        self,
        video_path: Path,
        reader: Optional[frame_extractor.FrameReader] = None,
        config: Optional[ConfigFileSet] = None,
        metadata: Optional[VideoMetadata] = None,
    ) -> None:
        self.video_path = Path(video_path)
        self.reader = reader or frame_extractor.MoviepyFrameReader()
        self.config = config if config is not None else ConfigFileSet([])
        self.metadata = metadata
        self.rows = 0
        self.cols = 0
        self._frames: list[Frame] = []
        self._grid_is_stale = False
        self._built_with: Optional[dict[str, OptionValue]] = None

    def load_video(self) -> VideoMetadata:
        """Read metadata; raises InvalidVideoError for unusable files."""

        self.metadata = video_loader.load_metadata(self.video_path)
        return self.metadata

    def load_config(self, home: Optional[Path] = None) -> ConfigFileSet:
        self.config = ConfigFileSet.for_video(self.video_path, home)
        return self.config

    # Frame source interface

    def get_option_value(self, option_id: str) -> Optional[OptionValue]:
        """Current value, falling back to (and recording) the option's default."""

        value = self.config.get(option_id)
        if value is not None:
            return value
        descriptor = RECOGNISED_OPTIONS.get(option_id)
        if descriptor is None:
            return None
        self.config.set(option_id, descriptor.default)
        return descriptor.default

    def set_option_value(self, option_id: str, value: OptionValue) -> None:
        self.config.set(option_id, value)
        self.update_preview()

    def get_frame_count(self) -> int:
        return len(self._frames)

    def get_frames(self) -> list[Frame]:
        return self._frames

    def request_grid(self, rows: int, cols: int) -> None:
        logger.info("Preview grid requested: %s rows x %s cols", rows, cols)
        self.rows = rows
        self.cols = cols
        self._grid_is_stale = True
        self.update_preview()

    def get_frame_aspect_ratio(self) -> float:
        if self.metadata is None:
            return 1.0
        return self.metadata.aspect_ratio

    # Persistence interface

    def list_config_file_paths(self) -> list[str]:
        return self.config.list_config_file_paths()

    def save_all_options(self, path: Path | str) -> Path:
        return self.config.save_all_options(path)

    def update_preview(self) -> None:
        """Rebuild frames if the options that drive them or the grid changed."""

        if self.metadata is None:
            return
        current = {option_id: self.get_option_value(option_id) for option_id in FRAME_COUNT_OPTIONS}
        if current == self._built_with and not self._grid_is_stale:
            return
        self._make_frames(current)
        self._built_with = current
        self._grid_is_stale = False

    def _make_frames(self, values: dict[str, OptionValue]) -> None:
        total = self.metadata.frame_count
        count = frame_extractor.number_of_frames(
            total,
            values["maximum_percentage"],
            values["minimum_sampling"],
            values["maximum_frames"],
            values["frames_to_show"],
            self.rows,
            self.cols,
        )
        if self._built_with is not None and count == len(self._frames):
            return
        numbers = frame_extractor.sample_frame_numbers(total, count)
        self._frames = frame_extractor.extract_frames(self.reader, self.video_path, self.metadata, numbers)
        logger.info("Preview now holds %s of %s frames", len(self._frames), total)

    def describe(self) -> dict[str, str]:
        """Video information for display, keyed by label."""

        if self.metadata is None:
            return {"Path": str(self.video_path)}
        meta = self.metadata
        return {
            "Path": str(self.video_path),
            "Encoding": meta.codec or "-",
            "Frame rate": f"{meta.fps:g} fps",
            "Length": seconds_to_timestamp(meta.duration_seconds),
            "Frames": str(meta.frame_count),
            "Dimensions": f"{meta.width}×{meta.height}",
        }

    def option_summary(self) -> list[tuple[str, str]]:
        """``(description, value)`` for every recognised option."""

        return [
            (descriptor.description, format_value(self.get_option_value(option_id)))
            for option_id, descriptor in RECOGNISED_OPTIONS.items()
        ]
