"""Tracks the single selected frame in the preview."""

from __future__ import annotations

import logging
from typing import Hashable, Optional

logger = logging.getLogger(__name__)


class SelectionState:
    """At most one selected frame; forgotten whenever the frames are replaced."""

    def __init__(self) -> None:
        self._selected: Optional[Hashable] = None

    @property
    def selected(self) -> Optional[Hashable]:
        return self._selected

    def is_selected(self, frame_id: Hashable) -> bool:
        return self._selected is not None and self._selected == frame_id

    def select(self, frame_id: Hashable) -> Optional[Hashable]:
        """Select ``frame_id``, or clear the selection if it was already selected."""

        if self.is_selected(frame_id):
            self._selected = None
        else:
            self._selected = frame_id
        return self._selected

    def clear(self) -> None:
        self._selected = None

    def on_frame_collection_replaced(self) -> None:
        # Must run for every new frame collection, even if the old id is still present.
        if self._selected is not None:
            logger.debug("Clearing selection of frame %s", self._selected)
        self._selected = None
