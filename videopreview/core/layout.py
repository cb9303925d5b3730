"""Adaptive grid layout for the preview pane."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

MIN_FRAME_WIDTH = 100.0
MAX_FRAME_WIDTH = 500.0
PREVIEW_PADDING = 15.0  # around the whole preview, not each frame
SCROLLBAR_WIDTH = 15.0


@dataclass(frozen=True)
class GridLayout:
    """Displayed grid plus the grid the frame source should regenerate for, if any."""

    rows: int
    cols: int
    frame_width: float
    frame_height: float
    max_rows: int = 0
    max_cols: int = 0
    pending_regeneration: Optional[tuple[int, int]] = None
    scrollbar_visible: bool = False


def frame_width_for_size(
    frame_size: float, min_width: float = MIN_FRAME_WIDTH, max_width: float = MAX_FRAME_WIDTH
) -> float:
    """Interpolate between the minimum and maximum frame width."""

    return min_width + frame_size * (max_width - min_width)


def _fit(available: float, cell: float, spacing: float) -> int:
    # No spacing after the last row/column, hence the extra spacing in the numerator.
    if cell + spacing <= 0:
        return 0
    return max(0, math.floor((available + spacing) / (cell + spacing)))


def displayed_grid(frame_count: int, max_cols: int) -> tuple[int, int]:
    """Return ``(rows, cols)`` actually used to show ``frame_count`` frames."""

    if frame_count <= 0:
        return 0, 0
    cols = max(1, min(max_cols, frame_count))
    rows = math.ceil(frame_count / cols)
    return rows, cols


def compute_grid(
    container_width: float,
    container_height: float,
    frame_size: float,
    aspect_ratio: float,
    spacing_rows: float,
    spacing_cols: float,
    outer_padding: float,
    scrollbar_reserve: float,
    frame_count: int,
    auto_count: bool,
    previously_requested: Optional[tuple[int, int]],
    min_frame_width: float = MIN_FRAME_WIDTH,
    max_frame_width: float = MAX_FRAME_WIDTH,
) -> GridLayout:
    """Fit frames into the container and work out the grid to display.

    In automatic-count mode the result carries ``pending_regeneration`` when
    the grid that fits differs from ``previously_requested``. The caller must
    issue that request once and pass it back as ``previously_requested`` next
    time, otherwise each regeneration would trigger another one.
    """

    if aspect_ratio <= 0:
        logger.warning("Ignoring non-positive aspect ratio %s", aspect_ratio)
        aspect_ratio = 1.0

    frame_width = frame_width_for_size(frame_size, min_frame_width, max_frame_width)
    frame_height = frame_width / aspect_ratio

    usable_width = container_width - outer_padding * 2 - (0 if auto_count else scrollbar_reserve)
    usable_height = container_height - outer_padding * 2

    max_cols = _fit(usable_width, frame_width, spacing_cols)
    max_rows = _fit(usable_height, frame_height, spacing_rows)

    pending = None
    if auto_count and (max_rows, max_cols) != previously_requested:
        pending = (max_rows, max_cols)

    rows, cols = displayed_grid(frame_count, max_cols)
    return GridLayout(
        rows=rows,
        cols=cols,
        frame_width=frame_width,
        frame_height=frame_height,
        max_rows=max_rows,
        max_cols=max_cols,
        pending_regeneration=pending,
        # A fixed count can overflow the pane; automatic mode always fits it.
        scrollbar_visible=not auto_count,
    )


@dataclass(frozen=True)
class LayoutEngine:
    """Layout constants bundled with :func:`compute_grid`."""

    outer_padding: float = PREVIEW_PADDING
    scrollbar_reserve: float = SCROLLBAR_WIDTH
    min_frame_width: float = MIN_FRAME_WIDTH
    max_frame_width: float = MAX_FRAME_WIDTH

    def compute(
        self,
        container_width: float,
        container_height: float,
        frame_size: float,
        aspect_ratio: float,
        spacing_rows: float,
        spacing_cols: float,
        frame_count: int,
        auto_count: bool,
        previously_requested: Optional[tuple[int, int]] = None,
    ) -> GridLayout:
        return compute_grid(
            container_width,
            container_height,
            frame_size,
            aspect_ratio,
            spacing_rows,
            spacing_cols,
            self.outer_padding,
            self.scrollbar_reserve,
            frame_count,
            auto_count,
            previously_requested,
            self.min_frame_width,
            self.max_frame_width,
        )
