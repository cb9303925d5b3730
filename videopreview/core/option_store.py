"""Per-video option state: validation, forwarding and the automatic toggle."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

from .options import (
    AUTO,
    Auto,
    DecimalOrAuto,
    OptionValue,
    PositiveIntegerOrAuto,
    RECOGNISED_OPTIONS,
    format_config_string,
    permits_auto,
)
from ..utils.validators import Accepted, Clamped, Rejected, ValidationOutcome, coerce_text, validate

if TYPE_CHECKING:
    from .preview import FrameSource

logger = logging.getLogger(__name__)

NO_SUBJECT = Rejected("no video loaded")


def default_concrete_value(kind: Union[PositiveIntegerOrAuto, DecimalOrAuto]) -> OptionValue:
    """Value restored when "automatic" is switched off and nothing was remembered."""

    if isinstance(kind, PositiveIntegerOrAuto):
        return 100
    return 0.5


class OptionStore:
    """Validates option edits and forwards them to the frame source.

    The frame source holds the authoritative values. The store adds the
    remembered value behind each "automatic" toggle and a generation counter
    that increases on every applied change. A store built without a frame
    source answers every call with an empty or rejected result.
    """

    def __init__(self, frame_source: Optional["FrameSource"]) -> None:
        self._source = frame_source
        self._remembered: dict[str, OptionValue] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_subject(self) -> bool:
        return self._source is not None

    def get_value(self, option_id: str) -> Optional[OptionValue]:
        if self._source is None or option_id not in RECOGNISED_OPTIONS:
            return None
        return self._source.get_option_value(option_id)

    def is_automatic(self, option_id: str) -> bool:
        return isinstance(self.get_value(option_id), Auto)

    def remembered_value(self, option_id: str) -> Optional[OptionValue]:
        return self._remembered.get(option_id)

    def set_value(self, option_id: str, raw: object) -> ValidationOutcome:
        """Validate ``raw`` and forward the result; rejected input changes nothing."""

        if self._source is None:
            return NO_SUBJECT
        descriptor = RECOGNISED_OPTIONS.get(option_id)
        if descriptor is None:
            return Rejected(f"unrecognised option {option_id!r}")

        outcome = validate(descriptor.kind, raw)
        if isinstance(outcome, Rejected):
            logger.debug("Rejected %s for %s: %s", raw, option_id, outcome.reason)
            return outcome
        if isinstance(outcome, Clamped):
            logger.debug("Clamped %s for %s to %s", outcome.original, option_id, outcome.value)

        self._apply(option_id, outcome.value)
        return outcome

    def set_text(self, option_id: str, text: str) -> ValidationOutcome:
        """Like :meth:`set_value` but for text typed by the user."""

        descriptor = RECOGNISED_OPTIONS.get(option_id)
        if descriptor is None:
            return Rejected(f"unrecognised option {option_id!r}")
        raw = coerce_text(descriptor.kind, text)
        if isinstance(raw, Rejected):
            return raw
        return self.set_value(option_id, raw)

    def set_automatic(self, option_id: str, enabled: bool) -> ValidationOutcome:
        """Switch an option to or from ``auto``, remembering the concrete value."""

        if self._source is None:
            return NO_SUBJECT
        descriptor = RECOGNISED_OPTIONS.get(option_id)
        if descriptor is None:
            return Rejected(f"unrecognised option {option_id!r}")
        if not permits_auto(descriptor.kind):
            return Rejected(f"{option_id} has no automatic value")

        current = self._source.get_option_value(option_id)
        if enabled:
            if current is not None and not isinstance(current, Auto):
                self._remembered[option_id] = current
            self._apply(option_id, AUTO)
            return Accepted(AUTO)

        if current is not None and not isinstance(current, Auto):
            return Accepted(current)
        restored = self._remembered.get(option_id)
        if restored is None:
            restored = default_concrete_value(descriptor.kind)
        self._apply(option_id, restored)
        return Accepted(restored)

    def to_config_string(self, option_id: str) -> str:
        value = self.get_value(option_id)
        if value is None:
            return ""
        return format_config_string(option_id, value)

    def _apply(self, option_id: str, value: OptionValue) -> None:
        self._source.set_option_value(option_id, value)
        self._generation += 1
        logger.debug("Set %s=%s (generation %s)", option_id, value, self._generation)
