"""Domain-specific exceptions for the video previewer."""

from pathlib import Path


class InvalidVideoError(ValueError):
    """Raised when the selected video file is missing or unreadable."""

    def __init__(self, path: Path, reason: str | None = None):
        message = f"Invalid video file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class ConfigFileError(OSError):
    """Raised when a configuration file cannot be read or written."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Error when accessing {str(path)!r}: {reason}")
        self.path = path


class InvalidOptionError(KeyError):
    """Raised when an option id is not one the program recognises."""

    def __init__(self, option_id: str):
        super().__init__(f"Invalid option: {option_id}")
        self.option_id = option_id


class ProcessingError(RuntimeError):
    """Raised when frames cannot be decoded from the video."""
