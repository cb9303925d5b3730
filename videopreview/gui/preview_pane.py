"""Scrollable grid of frame thumbnails."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QGridLayout, QLabel, QScrollArea, QSizePolicy, QVBoxLayout, QWidget
from PIL.ImageQt import ImageQt

from ..core import Frame
from ..core.layout import PREVIEW_PADDING, GridLayout
from ..core.preferences import Preferences

logger = logging.getLogger(__name__)


def pixmap_from_image(image) -> Optional[QPixmap]:
    """Convert a PIL image to QPixmap."""

    if image is None:
        return None
    return QPixmap.fromImage(ImageQt(image))


class FrameTile(QWidget):
    """One frame with optional timestamp / frame-number overlays."""

    clicked = Signal(int)

    def __init__(self, frame: Frame, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.frame = frame
        self.image_label = QLabel(self)
        self.image_label.setAlignment(Qt.AlignCenter)
        self.overlay = QLabel(self.image_label)
        self.overlay.setStyleSheet("background-color: rgba(0, 0, 0, 160); color: white; padding: 2px;")
        self.overlay.hide()
        self._pixmap = pixmap_from_image(frame.image)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.image_label)

    def render(
        self,
        width: float,
        height: float,
        selected: bool,
        preferences: Preferences,
        show_timestamp: bool,
        show_number: bool,
    ) -> None:
        w, h = int(width), int(height)
        self.setFixedSize(w, h)
        if self._pixmap is not None:
            scaled = self._pixmap.scaled(w, h, Qt.KeepAspectRatio, Qt.SmoothTransformation)
            self.image_label.setPixmap(scaled)
        else:
            self.image_label.setText(f"Frame {self.frame.frame_number}")

        border = int(preferences.frame_border_thickness) if selected else 0
        r, g, b, a = preferences.frame_border_color
        self.image_label.setStyleSheet(
            f"border: {border}px solid rgba({r},{g},{b},{a});" if border else "border: none;"
        )

        lines = []
        if show_timestamp:
            lines.append(self.frame.timestamp_string)
        if show_number:
            lines.append(str(self.frame.frame_number))
        if lines:
            self.overlay.setText("\n".join(lines))
            self.overlay.adjustSize()
            self.overlay.move(w - self.overlay.width() - border - 2, border + 2)
            self.overlay.show()
        else:
            self.overlay.hide()

    def mousePressEvent(self, event) -> None:  # pragma: no cover - UI callback
        self.clicked.emit(self.frame.frame_id)
        super().mousePressEvent(event)


class PreviewPane(QScrollArea):
    """Shows frames in the grid computed by the layout engine."""

    resized = Signal()
    frame_clicked = Signal(int)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWidgetResizable(True)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self._container = QWidget(self)
        self._grid = QGridLayout(self._container)
        pad = int(PREVIEW_PADDING)
        self._grid.setContentsMargins(pad, pad, pad, pad)
        self._grid.setAlignment(Qt.AlignTop | Qt.AlignHCenter)
        self.setWidget(self._container)
        self._tiles: list[FrameTile] = []

    def resizeEvent(self, event) -> None:  # pragma: no cover - Qt lifecycle
        super().resizeEvent(event)
        self.resized.emit()

    def set_scrollbar_visible(self, visible: bool) -> None:
        policy = Qt.ScrollBarAsNeeded if visible else Qt.ScrollBarAlwaysOff
        self.setVerticalScrollBarPolicy(policy)

    def show_frames(
        self,
        frames: list[Frame],
        grid: GridLayout,
        selected_id: Optional[int],
        preferences: Preferences,
        show_timestamp: bool,
        show_number: bool,
    ) -> None:
        """Rebuild the tiles for ``frames`` laid out as ``grid``."""

        if [tile.frame for tile in self._tiles] != frames:
            self._clear()
            for frame in frames:
                tile = FrameTile(frame, self._container)
                tile.clicked.connect(self.frame_clicked.emit)
                self._tiles.append(tile)

        self._grid.setHorizontalSpacing(int(preferences.space_between_cols))
        self._grid.setVerticalSpacing(int(preferences.space_between_rows))
        for index, tile in enumerate(self._tiles):
            self._grid.removeWidget(tile)
            if grid.cols <= 0:
                tile.hide()
                continue
            row, col = divmod(index, grid.cols)
            self._grid.addWidget(tile, row, col)
            tile.render(
                grid.frame_width,
                grid.frame_height,
                tile.frame.frame_id == selected_id,
                preferences,
                show_timestamp,
                show_number,
            )
            tile.show()

    def _clear(self) -> None:
        for tile in self._tiles:
            self._grid.removeWidget(tile)
            tile.deleteLater()
        self._tiles = []
