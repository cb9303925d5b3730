"""Native file picker helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QFileDialog, QWidget

from ..utils.validators import ALLOWED_VIDEO_EXTENSIONS


def open_video_file_dialog(parent: QWidget) -> Optional[Path]:
    """Open a native file dialog and return the selected video path."""

    patterns = " ".join(f"*{ext}" for ext in sorted(ALLOWED_VIDEO_EXTENSIONS))
    dialog = QFileDialog(parent, caption="Open Video")
    dialog.setFileMode(QFileDialog.ExistingFile)
    dialog.setNameFilters([
        f"Video Files ({patterns})",
        "All Files (*.*)",
    ])
    if dialog.exec():
        selected = dialog.selectedFiles()
        if selected:
            return Path(selected[0])
    return None


def save_config_file_dialog(parent: QWidget, suggested: Optional[Path] = None) -> Optional[Path]:
    """Ask where to export the configuration; returns ``None`` if cancelled."""

    filename, _ = QFileDialog.getSaveFileName(
        parent,
        "Export Configuration",
        str(suggested) if suggested else "",
        "Configuration Files (*.videopreviewconfig *.conf);;All Files (*)",
    )
    return Path(filename) if filename else None
