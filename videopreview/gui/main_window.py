"""Main application window wiring the preview session to the UI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QTimer, Slot
from PySide6.QtGui import QAction, QIcon
from PySide6.QtWidgets import (
    QHBoxLayout,
    QInputDialog,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QStatusBar,
    QStyle,
    QWidget,
)

from ..core.errors import ConfigFileError, InvalidVideoError, ProcessingError
from ..core.preferences import Preferences, load_preferences, save_preferences
from ..core.preview import VideoPreview
from ..core.session import PreviewSession
from ..gui.file_picker import open_video_file_dialog, save_config_file_dialog
from ..gui.preview_pane import PreviewPane
from ..gui.settings_panel import SidePanel
from ..utils import file_tools
from ..utils.validators import validate_video_path

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Primary application window."""

    def __init__(self, preferences: Optional[Preferences] = None) -> None:
        super().__init__()
        self.setWindowTitle("Video Previewer")
        self.setMinimumSize(900, 600)
        self.setWindowIcon(QIcon(self.style().standardIcon(QStyle.SP_FileDialogContentsView)))
        self._apply_styles()

        self.preferences = preferences or load_preferences()
        self.preview: Optional[VideoPreview] = None
        self.session = PreviewSession(None)

        self.status_bar = QStatusBar(self)
        self.setStatusBar(self.status_bar)
        self.pane = PreviewPane(self)
        self.side_scroll = QScrollArea(self)
        self.side_scroll.setWidgetResizable(True)
        self.side_scroll.setMinimumWidth(320)
        self.side_panel: Optional[SidePanel] = None

        # Resizes arrive in bursts; lay out once they settle.
        self._layout_timer = QTimer(self)
        self._layout_timer.setSingleShot(True)
        self._layout_timer.setInterval(50)
        self._layout_timer.timeout.connect(self._refresh)

        self._build_menu()
        self._build_layout()
        self._install_side_panel()
        self._wire_signals()

    def _build_menu(self) -> None:
        file_menu = self.menuBar().addMenu("File")
        open_action = QAction("Open Video...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self._on_open_video)
        self.save_action = QAction("Save Configuration...", self)
        self.save_action.setShortcut("Ctrl+S")
        self.save_action.triggered.connect(self._on_save_config)
        self.export_action = QAction("Export Configuration...", self)
        self.export_action.triggered.connect(self._on_export_config)
        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(open_action)
        file_menu.addAction(self.save_action)
        file_menu.addAction(self.export_action)
        file_menu.addSeparator()
        file_menu.addAction(exit_action)

        view_menu = self.menuBar().addMenu("View")
        for title, field in (
            ("Video Information", "side_panel_video"),
            ("Frame Information", "side_panel_frame"),
            ("Configuration", "side_panel_config"),
        ):
            action = QAction(title, self)
            action.setCheckable(True)
            action.setChecked(getattr(self.preferences, field))
            action.toggled.connect(lambda checked, f=field: self._toggle_panel(f, checked))
            view_menu.addAction(action)

        help_menu = self.menuBar().addMenu("Help")
        about_action = QAction("About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)
        self._update_actions()

    def _build_layout(self) -> None:
        central = QWidget(self)
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.pane, 1)
        layout.addWidget(self.side_scroll)
        self.setCentralWidget(central)

    def _wire_signals(self) -> None:
        self.pane.resized.connect(self._layout_timer.start)
        self.pane.frame_clicked.connect(self._on_frame_clicked)

    def _install_side_panel(self) -> None:
        panel = SidePanel(self.session, self.preferences, self)
        panel.changed.connect(self._refresh)
        self.side_scroll.setWidget(panel)
        self.side_panel = panel
        self.side_scroll.setVisible(self.preferences.side_panel_visible)

    def _update_actions(self) -> None:
        loaded = self.preview is not None
        self.save_action.setEnabled(loaded)
        self.export_action.setEnabled(loaded)

    # Loading

    @Slot()
    def _on_open_video(self) -> None:
        chosen = open_video_file_dialog(self)
        if chosen is None:
            return
        self.load_video(chosen)

    def load_video(self, chosen: Path) -> bool:
        try:
            validate_video_path(chosen)
            preview = VideoPreview(chosen)
            preview.load_video()
            preview.load_config()
            preview.update_preview()
        except InvalidVideoError as exc:
            QMessageBox.warning(self, "Invalid video", str(exc))
            self.status_bar.showMessage("Invalid video selected")
            return False
        except ProcessingError as exc:
            logger.exception("Failed to read frames from %s", chosen)
            QMessageBox.critical(self, "Preview error", str(exc))
            return False

        self.preview = preview
        self.session = PreviewSession(preview)
        self._install_side_panel()
        self._update_actions()
        self.setWindowTitle(f"Video Previewer - {chosen.name}")
        self.status_bar.showMessage(f"Video loaded: {chosen.name}")
        self._refresh()
        return True

    # Configuration files

    @Slot()
    def _on_save_config(self) -> None:
        if self.preview is None:
            return
        paths = self.preview.list_config_file_paths()
        local = str(file_tools.default_export_path(self.preview.video_path))
        if local not in paths:
            paths.insert(0, local)
        chosen, ok = QInputDialog.getItem(self, "Save Configuration", "Configuration file:", paths, 0, False)
        if ok and chosen:
            self._save_options(Path(chosen))

    @Slot()
    def _on_export_config(self) -> None:
        if self.preview is None:
            return
        target = save_config_file_dialog(self, file_tools.default_export_path(self.preview.video_path))
        if target is not None:
            self._save_options(target)

    def _save_options(self, target: Path) -> None:
        try:
            written = self.preview.save_all_options(target)
        except ConfigFileError as exc:
            QMessageBox.warning(self, "Configuration error", str(exc))
            return
        self.status_bar.showMessage(f"Configuration saved to {written}")

    # Preview

    @Slot(int)
    def _on_frame_clicked(self, frame_id: int) -> None:
        self.session.select(frame_id)
        self._refresh()

    def _toggle_panel(self, field: str, checked: bool) -> None:
        setattr(self.preferences, field, checked)
        save_preferences(self.preferences)
        self.side_scroll.setVisible(self.preferences.side_panel_visible)
        self._refresh()

    @Slot()
    def _refresh(self) -> None:
        # The engine reserves room for the scroll bar itself, so pass the outer size.
        try:
            grid = self.session.layout(
                self.pane.width(),
                self.pane.height(),
                self.preferences.space_between_rows,
                self.preferences.space_between_cols,
            )
        except ProcessingError as exc:
            logger.exception("Failed to regenerate preview frames")
            self.status_bar.showMessage(str(exc))
            return

        options = self.session.options
        self.pane.set_scrollbar_visible(grid.scrollbar_visible)
        self.pane.show_frames(
            self.session.frames,
            grid,
            self.session.selection.selected,
            self.preferences,
            bool(options.get_value("overlay_timestamp")),
            bool(options.get_value("overlay_number")),
        )
        if self.side_panel is not None:
            self.side_panel.refresh()

    def _apply_styles(self) -> None:
        """Apply a simple dark palette."""

        self.setStyleSheet(
            """
            QMainWindow {
                background-color: #0b1324;
                color: #e5e7eb;
                font-family: 'Segoe UI', 'Arial';
            }
            QGroupBox {
                border: 1px solid #1f2937;
                border-radius: 6px;
                margin-top: 8px;
                padding: 10px;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 8px;
                padding: 0 4px;
                color: #cbd5e1;
            }
            QLabel, QCheckBox { color: #e5e7eb; }
            QLineEdit, QSpinBox, QComboBox {
                background-color: #0b1220;
                border: 1px solid #1f2937;
                color: #e5e7eb;
                padding: 4px 6px;
                border-radius: 4px;
            }
            QMenuBar {
                background-color: #0f172a;
                color: #e5e7eb;
            }
            QMenuBar::item:selected {
                background: #1f2937;
            }
            QSlider::groove:horizontal {
                height: 6px;
                background: #1f2937;
                border-radius: 3px;
            }
            QSlider::handle:horizontal {
                background: #2563eb;
                width: 14px;
                margin: -4px 0;
                border-radius: 7px;
            }
            """
        )

    def _show_about(self) -> None:
        QMessageBox.information(
            self,
            "About",
            "Video Previewer\nShows a grid of frames sampled from a video, configured per directory.",
        )

    def closeEvent(self, event) -> None:  # pragma: no cover - Qt lifecycle
        self._layout_timer.stop()
        super().closeEvent(event)
