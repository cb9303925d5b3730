"""Video loading and metadata discovery via moviepy."""

from __future__ import annotations

import logging
from pathlib import Path

from . import VideoMetadata
from .errors import InvalidVideoError, ProcessingError
from ..utils import validators

logger = logging.getLogger(__name__)


def load_metadata(video_path: Path) -> VideoMetadata:
    """Return basic metadata for the selected video."""

    validated_path = validators.validate_video_path(video_path)
    _ensure_ffmpeg_available()
    clip_class = _resolve_video_file_clip()

    try:
        with clip_class(str(validated_path), audio=False) as clip:
            width, height = clip.size
            fps = float(getattr(clip, "fps", 24.0) or 24.0)
            duration_seconds = float(getattr(clip, "duration", 0.0) or 0.0)
            reader = getattr(clip, "reader", None)
            frame_count = int(getattr(reader, "n_frames", 0) or round(fps * duration_seconds))
            infos = getattr(reader, "infos", None) or {}
            codec = infos.get("video_codec_name") if isinstance(infos, dict) else None
    except Exception as exc:  # pragma: no cover - backend dependent
        raise InvalidVideoError(validated_path, reason=f"Could not read metadata: {exc}") from exc

    logger.debug(
        "Loaded metadata for %s -> %sx%s @ %sfps, %s frames",
        validated_path,
        width,
        height,
        fps,
        frame_count,
    )
    return VideoMetadata(
        width=int(width),
        height=int(height),
        fps=fps,
        frame_count=frame_count,
        duration_seconds=duration_seconds,
        codec=codec,
    )


def _ensure_ffmpeg_available() -> None:
    """Raise a friendly error if ffmpeg is missing."""

    try:
        from moviepy.config import FFMPEG_BINARY  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover
        raise ProcessingError("moviepy is not installed. Run pip install -e .") from exc

    if not FFMPEG_BINARY:
        raise ProcessingError("ffmpeg not found. Install ffmpeg and ensure it is on PATH.")


def _resolve_video_file_clip():
    """Import VideoFileClip from supported moviepy locations."""

    try:
        from moviepy.editor import VideoFileClip  # type: ignore
        return VideoFileClip
    except ModuleNotFoundError:
        try:
            from moviepy.video.io.VideoFileClip import VideoFileClip  # type: ignore
            return VideoFileClip
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise ProcessingError("moviepy is not installed. Run pip install -e .") from exc
