"""State scoped to one loaded video: options, selection and the requested grid."""

from __future__ import annotations

import logging
from typing import Optional

from . import Frame
from .layout import GridLayout, LayoutEngine
from .option_store import OptionStore
from .options import Auto
from .preview import FrameSource
from .selection import SelectionState
from ..utils.validators import ValidationOutcome

logger = logging.getLogger(__name__)

EMPTY_LAYOUT = GridLayout(rows=0, cols=0, frame_width=0.0, frame_height=0.0)


class PreviewSession:
    """Created when a video is loaded and thrown away when another one is.

    Every interaction goes one way: an edit reaches the frame source through
    the option store, the layout is recomputed from scratch, a new grid is
    requested at most once per distinct size, and a replaced frame collection
    always clears the selection.
    """

    def __init__(self, frame_source: Optional[FrameSource], engine: Optional[LayoutEngine] = None) -> None:
        self.source = frame_source
        self.engine = engine or LayoutEngine()
        self.options = OptionStore(frame_source)
        self.selection = SelectionState()
        self.last_requested_grid: Optional[tuple[int, int]] = None
        self._frames: list[Frame] = frame_source.get_frames() if frame_source is not None else []

    @property
    def frames(self) -> list[Frame]:
        return self._frames

    @property
    def selected_frame(self) -> Optional[Frame]:
        selected = self.selection.selected
        if selected is None:
            return None
        for frame in self._frames:
            if frame.frame_id == selected:
                return frame
        return None

    def select(self, frame_id: int) -> None:
        self.selection.select(frame_id)

    def sync_frames(self) -> bool:
        """Pick up a new frame collection from the source; returns True if it changed."""

        if self.source is None:
            return False
        frames = self.source.get_frames()
        if frames is self._frames:
            return False
        self._frames = frames
        self.selection.on_frame_collection_replaced()
        return True

    def set_value(self, option_id: str, raw: object) -> ValidationOutcome:
        outcome = self.options.set_value(option_id, raw)
        self.sync_frames()
        return outcome

    def set_text(self, option_id: str, text: str) -> ValidationOutcome:
        outcome = self.options.set_text(option_id, text)
        self.sync_frames()
        return outcome

    def set_automatic(self, option_id: str, enabled: bool) -> ValidationOutcome:
        outcome = self.options.set_automatic(option_id, enabled)
        self.sync_frames()
        return outcome

    def layout(
        self,
        container_width: float,
        container_height: float,
        spacing_rows: float = 0.0,
        spacing_cols: float = 0.0,
    ) -> GridLayout:
        """Lay out the current frames, regenerating them first if the grid size changed."""

        if self.source is None:
            return EMPTY_LAYOUT

        frame_size = self.options.get_value("frame_size")
        auto_count = isinstance(self.options.get_value("frames_to_show"), Auto)

        def compute() -> GridLayout:
            return self.engine.compute(
                container_width,
                container_height,
                float(frame_size),
                self.source.get_frame_aspect_ratio(),
                spacing_rows,
                spacing_cols,
                len(self._frames),
                auto_count,
                self.last_requested_grid,
            )

        grid = compute()
        if grid.pending_regeneration is None:
            return grid

        rows, cols = grid.pending_regeneration
        self.last_requested_grid = grid.pending_regeneration
        self.source.request_grid(rows, cols)
        self.sync_frames()
        return compute()
