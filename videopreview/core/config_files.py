"""Discovery, parsing and writing of ``id = value`` configuration files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from .errors import ConfigFileError
from .options import OptionValue, RECOGNISED_OPTIONS, format_value, parse_config_value
from ..utils import file_tools
from ..utils.validators import Accepted, validate

logger = logging.getLogger(__name__)

LOCAL_CONFIG_NAME = ".videopreviewconfig"
USER_CONFIG_ENV = "VIDEOPREVIEW_USER_CONFIG"
GLOBAL_CONFIG_ENV = "VIDEOPREVIEW_GLOBAL_CONFIG"
DEFAULT_GLOBAL_CONFIG = Path("/etc/videopreviewconfig")


def user_config_path() -> Path:
    override = os.environ.get(USER_CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "videopreview"


def global_config_path() -> Path:
    override = os.environ.get(GLOBAL_CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_GLOBAL_CONFIG


def parse_line(line: str) -> Optional[tuple[str, str]]:
    """Split a config line into ``(id, value text)``; ``None`` for blanks and comments."""

    content = line.split("#", 1)[0].strip()
    if not content:
        return None
    option_id, _, value = content.partition("=")
    return option_id.strip(), value.strip()


def format_option_line(option_id: str, value: OptionValue) -> str:
    return f"{option_id} = {format_value(value)}"


def check_option(option_id: str, value: OptionValue) -> Optional[OptionValue]:
    """Return the normalised value if it is valid as written, else ``None``."""

    descriptor = RECOGNISED_OPTIONS.get(option_id)
    if descriptor is None:
        return None
    outcome = validate(descriptor.kind, value)
    # Out-of-range values in a file are reported rather than silently clamped.
    if isinstance(outcome, Accepted):
        return outcome.value
    return None


class ConfigFile:
    """A single configuration file: its valid options and the ones it could not use."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.options: dict[str, OptionValue] = {}
        self.invalid_options: dict[str, OptionValue] = {}
        self.parse()

    def parse(self) -> None:
        self.options.clear()
        self.invalid_options.clear()
        if not self.path.exists():
            logger.debug("No configuration file at %s", self.path)
            return
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not read configuration file %s: %s", self.path, exc)
            return

        logger.info("Parsing %s", self.path)
        for line in text.splitlines():
            parsed = parse_line(line)
            if parsed is None:
                continue
            option_id, value_text = parsed
            # Earlier lines win over later duplicates.
            if option_id in self.options or option_id in self.invalid_options:
                continue
            value = parse_config_value(value_text)
            checked = check_option(option_id, value)
            if checked is None:
                if option_id in RECOGNISED_OPTIONS:
                    logger.warning("Option with invalid value: %s cannot have the value %r", option_id, value_text)
                else:
                    logger.warning("Invalid option %r in %s", option_id, self.path)
                self.invalid_options[option_id] = value
                continue
            self.options[option_id] = checked

    def write_option(self, option_id: str, value: OptionValue) -> None:
        """Replace ``option_id`` in the file, keeping every other line as it is."""

        self.write_options({option_id: value})

    def write_options(self, values: dict[str, OptionValue]) -> None:
        try:
            existing = self.path.read_text(encoding="utf-8").splitlines() if self.path.exists() else []
        except OSError as exc:
            raise ConfigFileError(self.path, f"could not open file ({exc})") from exc

        written: set[str] = set()
        lines: list[str] = []
        for line in existing:
            parsed = parse_line(line)
            if parsed is None or parsed[0] not in values:
                lines.append(line)
                continue
            option_id = parsed[0]
            if option_id in written:
                continue  # drop later duplicates
            lines.append(format_option_line(option_id, values[option_id]))
            written.add(option_id)
        for option_id, value in values.items():
            if option_id not in written:
                lines.append(format_option_line(option_id, value))

        file_tools.ensure_directory(self.path.parent)
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            temp_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as exc:
            raise ConfigFileError(self.path, f"could not write file ({exc})") from exc
        logger.info("Wrote %s option(s) to %s", len(values), self.path)
        self.parse()


def local_config_dirs(video_path: Path, home: Path) -> list[Path]:
    """Directories searched for local config files: the video's directory up to
    ``home`` (excluded), or up to and including the filesystem root."""

    dirs: list[Path] = []
    directory = Path(video_path).resolve().parent
    while directory != home:
        dirs.append(directory)
        if directory == directory.parent:
            break
        directory = directory.parent
    return dirs


def discover_config_paths(video_path: Path, home: Optional[Path] = None) -> list[Path]:
    """Config files for ``video_path``, highest priority first.

    Local ``.videopreviewconfig`` files from the video's directory upwards (stopping
    at the home directory, otherwise at the filesystem root), then the user file,
    then the global file.
    """

    home = (Path(home) if home is not None else Path.home()).resolve()
    paths = [
        directory / LOCAL_CONFIG_NAME
        for directory in local_config_dirs(video_path, home)
        if (directory / LOCAL_CONFIG_NAME).exists()
    ]
    paths.append(user_config_path())
    paths.append(global_config_path())
    return paths


class ConfigFileSet:
    """All configuration files that apply to one video, merged by priority."""

    def __init__(self, files: Iterable[ConfigFile]) -> None:
        self.files = list(files)
        self.options: dict[str, OptionValue] = {}
        self.invalid_options: dict[str, OptionValue] = {}
        self.merge()

    @classmethod
    def for_video(cls, video_path: Path, home: Optional[Path] = None) -> "ConfigFileSet":
        return cls(ConfigFile(path) for path in discover_config_paths(video_path, home))

    def merge(self) -> None:
        self.options.clear()
        self.invalid_options.clear()
        for config_file in self.files:
            for option_id, value in config_file.options.items():
                self.options.setdefault(option_id, value)
            for option_id, value in config_file.invalid_options.items():
                self.invalid_options.setdefault(option_id, value)

    def get(self, option_id: str) -> Optional[OptionValue]:
        return self.options.get(option_id)

    def set(self, option_id: str, value: OptionValue) -> None:
        self.options[option_id] = value

    def list_config_file_paths(self) -> list[str]:
        return [str(config_file.path) for config_file in self.files]

    def find_file(self, path: Path) -> Optional[ConfigFile]:
        target = Path(path).expanduser()
        for config_file in self.files:
            if config_file.path == target:
                return config_file
        return None

    def save_all_options(self, path: Path | str) -> Path:
        """Save into a known config file in place, or export to a new file."""

        target = Path(path).expanduser()
        known = self.find_file(target)
        if known is not None:
            known.write_options(dict(self.options))
            return known.path
        return self.export(target)

    def export(self, path: Path) -> Path:
        """Write every option to ``path``; unrecognised/invalid ones come first."""

        lines = [format_option_line(option_id, value) for option_id, value in self.invalid_options.items()]
        lines.append("")
        lines.extend(format_option_line(option_id, value) for option_id, value in self.options.items())
        try:
            file_tools.ensure_directory(path.parent)
            path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as exc:
            raise ConfigFileError(path, f"cannot open file for exporting ({exc})") from exc
        logger.info("Exported configuration options to %s", path)
        return path
