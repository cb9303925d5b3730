"""Deciding which frames to sample and decoding them with moviepy."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional, Protocol, Sequence

import numpy as np
from PIL import Image

from . import Frame, VideoMetadata
from .errors import ProcessingError
from .options import Auto, OptionValue
from .video_loader import _ensure_ffmpeg_available, _resolve_video_file_clip

logger = logging.getLogger(__name__)
THUMBNAIL_WIDTH = 500  # widest a frame is ever drawn


def maximum_frames_to_show(
    total_frames: int,
    maximum_percentage: int,
    minimum_sampling: int,
    maximum_frames: OptionValue,
) -> int:
    """Upper bound on preview frames from the percentage, sampling and explicit limits."""

    from_percentage = int(maximum_percentage / 100.0 * total_frames)
    from_sampling = total_frames // max(1, minimum_sampling)
    limit = min(from_percentage, from_sampling)
    if not isinstance(maximum_frames, Auto):
        limit = min(limit, int(maximum_frames))
    return limit


def number_of_frames(
    total_frames: int,
    maximum_percentage: int,
    minimum_sampling: int,
    maximum_frames: OptionValue,
    frames_to_show: OptionValue,
    rows: int,
    cols: int,
) -> int:
    """How many frames the preview should hold.

    With ``frames_to_show`` on auto this is as many as fit the requested grid;
    otherwise it is that fraction of the maximum. Never less than one frame for
    a non-empty video.
    """

    if total_frames <= 0:
        return 0
    limit = maximum_frames_to_show(total_frames, maximum_percentage, minimum_sampling, maximum_frames)
    if isinstance(frames_to_show, Auto):
        count = min(limit, rows * cols)
    else:
        count = int(limit * float(frames_to_show))
    return max(count, 1)


def sample_frame_numbers(total_frames: int, count: int) -> list[int]:
    """Evenly spaced frame numbers starting at the first frame."""

    if total_frames <= 0 or count <= 0:
        return []
    step = total_frames / count
    numbers = np.rint(np.arange(count, dtype=float) * step).astype(int)
    numbers = numbers[numbers < total_frames]
    return list(dict.fromkeys(int(n) for n in numbers))  # preserve order, remove dupes


class FrameReader(Protocol):
    def read(
        self, video_path: Path, metadata: VideoMetadata, frame_numbers: Sequence[int]
    ) -> Iterator[tuple[int, Optional[Image.Image]]]:
        ...


class MoviepyFrameReader:
    """Decode frames with moviepy, shrinking them to preview size."""

    def __init__(self, max_width: int = THUMBNAIL_WIDTH) -> None:
        self.max_width = max_width

    def read(
        self, video_path: Path, metadata: VideoMetadata, frame_numbers: Sequence[int]
    ) -> Iterator[tuple[int, Optional[Image.Image]]]:
        clip_class = _resolve_video_file_clip()
        _ensure_ffmpeg_available()

        logger.info("Extracting %s frames from %s", len(frame_numbers), video_path)
        clip = None
        try:
            clip = clip_class(str(video_path), audio=False)
            for number in frame_numbers:
                timestamp = number / metadata.fps if metadata.fps else 0.0
                try:
                    image = Image.fromarray(clip.get_frame(timestamp))
                except Exception as exc:  # pragma: no cover
                    logger.warning("Failed to decode frame %s at %.3fs: %s", number, timestamp, exc)
                    yield number, None
                    continue
                if image.width > self.max_width:
                    image.thumbnail((self.max_width, self.max_width * image.height // image.width))
                yield number, image.convert("RGB")
        except ProcessingError:
            raise
        except Exception as exc:  # pragma: no cover - moviepy internals
            raise ProcessingError(f"Failed to open video: {exc}") from exc
        finally:
            if clip is not None:
                clip.close()


def extract_frames(
    reader: FrameReader,
    video_path: Path,
    metadata: VideoMetadata,
    frame_numbers: Sequence[int],
) -> list[Frame]:
    """Build :class:`Frame` objects for ``frame_numbers``."""

    frames: list[Frame] = []
    for number, image in reader.read(video_path, metadata, frame_numbers):
        timestamp = number / metadata.fps if metadata.fps else 0.0
        frames.append(Frame(index=len(frames), frame_number=number, timestamp=timestamp, image=image))
    return frames
