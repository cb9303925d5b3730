"""Persisted UI preferences (spacing, selected-frame border, visible panels)."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..utils import file_tools, validators

logger = logging.getLogger(__name__)

PREFERENCES_ENV = "VIDEOPREVIEW_PREFERENCES"


def preferences_path() -> Path:
    override = os.environ.get(PREFERENCES_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "videopreview-gui.json"


class Preferences(BaseModel):
    space_between_rows: float = Field(default=10.0, ge=0)
    space_between_cols: float = Field(default=10.0, ge=0)
    frame_border_thickness: float = Field(default=5.0, ge=0)
    frame_border_color: tuple[int, int, int, int] = (0, 122, 255, 255)

    side_panel_video: bool = True
    side_panel_frame: bool = True
    side_panel_config: bool = True

    video_info_path: bool = True
    video_info_encoding: bool = True
    video_info_framerate: bool = True
    video_info_length: bool = True
    video_info_frames: bool = True
    video_info_dimensions: bool = True
    frame_info_timestamp: bool = True
    frame_info_number: bool = True

    @field_validator("frame_border_color", mode="before")
    @classmethod
    def _parse_color(cls, value: Any):
        if isinstance(value, str):
            parsed = validators.parse_color_tuple(value)
            return parsed if parsed is not None else (0, 122, 255, 255)
        if isinstance(value, (list, tuple)) and len(value) == 3:
            return (*value, 255)
        return value

    @property
    def side_panel_visible(self) -> bool:
        return self.side_panel_video or self.side_panel_frame or self.side_panel_config


def load_preferences(path: Optional[Path] = None) -> Preferences:
    """Load preferences, falling back to defaults when the file is missing or bad."""

    path = path or preferences_path()
    if not path.exists():
        return Preferences()
    try:
        with path.open("r", encoding="utf-8") as handle:
            return Preferences.model_validate(json.load(handle))
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Failed to read preferences from %s, using defaults: %s", path, exc)
        return Preferences()


def save_preferences(preferences: Preferences, path: Optional[Path] = None) -> Path:
    path = path or preferences_path()
    file_tools.ensure_directory(path.parent)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(preferences.model_dump(mode="json"), handle, indent=2)
    logger.debug("Saved preferences to %s", path)
    return path
