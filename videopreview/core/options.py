"""Recognised configuration options and the value shapes they accept."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InvalidOptionError

AUTO_TOKEN = "auto"


class Auto(Enum):
    """Marker meaning "let the frame source decide"."""

    AUTO = AUTO_TOKEN

    def __repr__(self) -> str:
        return "AUTO"

    def __str__(self) -> str:
        return AUTO_TOKEN


AUTO = Auto.AUTO

OptionValue = Union[bool, int, float, str, Auto]


# Option kinds. The set is closed: every consumer matches on all of them.


@dataclass(frozen=True)
class Boolean:
    pass


@dataclass(frozen=True)
class PositiveInteger:
    pass


@dataclass(frozen=True)
class PositiveIntegerOrAuto:
    pass


@dataclass(frozen=True)
class PositiveIntegerOrString:
    choices: tuple[str, ...]


@dataclass(frozen=True)
class Percentage:
    pass


@dataclass(frozen=True)
class Decimal:
    pass


@dataclass(frozen=True)
class DecimalOrAuto:
    pass


@dataclass(frozen=True)
class EnumeratedString:
    choices: tuple[str, ...]


OptionKind = Union[
    Boolean,
    PositiveInteger,
    PositiveIntegerOrAuto,
    PositiveIntegerOrString,
    Percentage,
    Decimal,
    DecimalOrAuto,
    EnumeratedString,
]


def permits_auto(kind: OptionKind) -> bool:
    return isinstance(kind, (PositiveIntegerOrAuto, DecimalOrAuto))


@dataclass(frozen=True)
class OptionDescriptor:
    """Static information about an option the program understands."""

    id: str
    description: str
    kind: OptionKind
    default: OptionValue

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``frame_size`` -> ``Frame size``."""

        text = self.id.replace("_", " ")
        return text[:1].upper() + text[1:]


RECOGNISED_OPTIONS: dict[str, OptionDescriptor] = {
    descriptor.id: descriptor
    for descriptor in (
        OptionDescriptor(
            "maximum_frames",
            "Maximum number of frames to show",
            PositiveIntegerOrAuto(),
            AUTO,
        ),
        OptionDescriptor(
            "maximum_percentage",
            "Maximum percentage of the video's frames to show",
            Percentage(),
            20,
        ),
        OptionDescriptor(
            "minimum_sampling",
            "Minimum number of video frames between preview frames",
            PositiveInteger(),
            25,
        ),
        OptionDescriptor(
            "frames_to_show",
            "Fraction of the maximum number of frames to show",
            DecimalOrAuto(),
            AUTO,
        ),
        OptionDescriptor(
            "frame_size",
            "Size of each frame in the preview",
            Decimal(),
            0.5,
        ),
        OptionDescriptor(
            "action_on_hover",
            "Behaviour when mouse hovers over a frame",
            EnumeratedString(("none", "play")),
            "none",
        ),
        OptionDescriptor(
            "overlay_timestamp",
            "Overlay the timestamp on each frame",
            Boolean(),
            True,
        ),
        OptionDescriptor(
            "overlay_number",
            "Overlay the frame number on each frame",
            Boolean(),
            False,
        ),
        OptionDescriptor(
            "hover_play_length",
            "Frames played on hover, or \"full\" to play up to the next preview frame",
            PositiveIntegerOrString(("full",)),
            "full",
        ),
    )
}


def get_descriptor(option_id: str) -> OptionDescriptor:
    """Return the descriptor for ``option_id`` or raise InvalidOptionError."""

    try:
        return RECOGNISED_OPTIONS[option_id]
    except KeyError:
        raise InvalidOptionError(option_id) from None


def is_recognised(option_id: str) -> bool:
    return option_id in RECOGNISED_OPTIONS


def format_value(value: OptionValue) -> str:
    """Canonical text for a value: ``auto``, ``true``/``false``, ints, 2dp floats, raw strings."""

    if isinstance(value, Auto):
        return AUTO_TOKEN
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def format_config_string(option_id: str, value: OptionValue) -> str:
    """Return ``"<id>=<value>"`` for clipboard export."""

    return f"{option_id}={format_value(value)}"


def parse_config_value(text: str) -> OptionValue:
    """Turn config-file text into the most specific value shape it represents."""

    text = text.strip()
    if text == AUTO_TOKEN:
        return AUTO
    if text in ("true", "false"):
        return text == "true"
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text
