"""Entry point for the Video Previewer GUI application."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from .gui.main_window import MainWindow


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def run() -> int:
    """Start the Qt event loop, opening a video given on the command line."""

    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Video Previewer")

    window = MainWindow()
    window.show()
    if len(sys.argv) > 1:
        window.load_video(Path(sys.argv[1]))

    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
