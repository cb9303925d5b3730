"""Validation helpers for user inputs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union, assert_never

from ..core.errors import InvalidVideoError
from ..core.options import (
    AUTO,
    AUTO_TOKEN,
    Auto,
    Boolean,
    Decimal,
    DecimalOrAuto,
    EnumeratedString,
    OptionKind,
    OptionValue,
    Percentage,
    PositiveInteger,
    PositiveIntegerOrAuto,
    PositiveIntegerOrString,
)

ALLOWED_VIDEO_EXTENSIONS = {".mp4", ".mov", ".avi", ".mkv", ".webm", ".m4v"}


@dataclass(frozen=True)
class Accepted:
    value: OptionValue


@dataclass(frozen=True)
class Clamped:
    """The input had the right shape but was out of range and has been adjusted."""

    value: OptionValue
    original: OptionValue


@dataclass(frozen=True)
class Rejected:
    reason: str


ValidationOutcome = Union[Accepted, Clamped, Rejected]


def validate_video_path(path: Path) -> Path:
    """Ensure the video path exists and appears to be a supported format."""

    if not path:
        raise InvalidVideoError(Path("<unset>"), reason="No path provided")
    if not path.exists():
        raise InvalidVideoError(path, reason="File not found")
    if path.suffix.lower() not in ALLOWED_VIDEO_EXTENSIONS:
        raise InvalidVideoError(path, reason="Unsupported format")
    return path


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _clamp_int(value: int, low: int, high: Optional[int] = None) -> ValidationOutcome:
    clamped = max(low, value)
    if high is not None:
        clamped = min(high, clamped)
    if clamped != value:
        return Clamped(clamped, value)
    return Accepted(value)


def _clamp_unit(value: Union[int, float]) -> ValidationOutcome:
    as_float = float(value)
    clamped = min(1.0, max(0.0, as_float))
    if clamped != as_float:
        return Clamped(clamped, value)
    return Accepted(as_float)


def _check_choice(value: str, choices: tuple[str, ...]) -> ValidationOutcome:
    if value in choices:
        return Accepted(value)
    return Rejected(f"{value!r} is not one of {', '.join(choices)}")


def _wrong_shape(kind: OptionKind, value: object) -> Rejected:
    return Rejected(f"{value!r} is not a valid {type(kind).__name__} value")


def validate(kind: OptionKind, raw: object) -> ValidationOutcome:
    """Check ``raw`` against ``kind``, clamping numbers into range."""

    if isinstance(raw, Auto):
        if isinstance(kind, (PositiveIntegerOrAuto, DecimalOrAuto)):
            return Accepted(AUTO)
        return Rejected(f"{type(kind).__name__} has no automatic value")

    match kind:
        case Boolean():
            if isinstance(raw, bool):
                return Accepted(raw)
            return _wrong_shape(kind, raw)
        case PositiveInteger() | PositiveIntegerOrAuto():
            if _is_int(raw):
                return _clamp_int(raw, 1)
            return _wrong_shape(kind, raw)
        case PositiveIntegerOrString(choices=choices):
            if _is_int(raw):
                return _clamp_int(raw, 1)
            if isinstance(raw, str):
                return _check_choice(raw, choices)
            return _wrong_shape(kind, raw)
        case Percentage():
            if _is_int(raw):
                return _clamp_int(raw, 1, 100)
            return _wrong_shape(kind, raw)
        case Decimal() | DecimalOrAuto():
            if _is_number(raw):
                return _clamp_unit(raw)
            return _wrong_shape(kind, raw)
        case EnumeratedString(choices=choices):
            if isinstance(raw, str):
                return _check_choice(raw, choices)
            return _wrong_shape(kind, raw)
        case _:
            assert_never(kind)


def coerce_text(kind: OptionKind, text: str) -> Union[OptionValue, Rejected]:
    """Parse typed text into the value shape ``kind`` expects.

    The result still has to go through :func:`validate`; this only decides
    whether ``"12"`` means an int, ``"0.4"`` a float and so on.
    """

    text = text.strip()
    if text.lower() == AUTO_TOKEN:
        return AUTO

    match kind:
        case Boolean():
            lowered = text.lower()
            if lowered in ("true", "yes", "on", "1"):
                return True
            if lowered in ("false", "no", "off", "0"):
                return False
            return Rejected(f"{text!r} is not a boolean")
        case PositiveInteger() | PositiveIntegerOrAuto() | Percentage():
            try:
                return int(text)
            except ValueError:
                return Rejected(f"{text!r} is not an integer")
        case PositiveIntegerOrString():
            try:
                return int(text)
            except ValueError:
                return text
        case Decimal() | DecimalOrAuto():
            try:
                return float(text)
            except ValueError:
                return Rejected(f"{text!r} is not a number")
        case EnumeratedString():
            return text
        case _:
            assert_never(kind)


def parse_color_tuple(value: str | None) -> Optional[tuple[int, int, int, int]]:
    """Parse an RGBA color string like '255,0,0,255'."""

    if value is None or value.strip() == "":
        return None
    parts = [p.strip() for p in value.split(",")]
    if len(parts) not in (3, 4):
        raise ValueError("Color must be R,G,B[,A]")
    try:
        numbers = [int(p) for p in parts]
    except ValueError as exc:
        raise ValueError("Color must be numeric R,G,B[,A]") from exc
    if len(numbers) == 3:
        numbers.append(255)
    if any(n < 0 or n > 255 for n in numbers):
        raise ValueError("Color values must be between 0 and 255")
    return tuple(numbers)  # type: ignore
