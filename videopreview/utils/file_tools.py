"""Filesystem helpers."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> Path:
    """Create a directory if it does not exist."""

    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)
    return path


def default_export_path(video_path: Path, name: str = ".videopreviewconfig") -> Path:
    """Return a default configuration export path next to the video file."""

    return Path(video_path).with_name(name)
