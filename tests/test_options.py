import pytest

from videopreview.core.errors import InvalidOptionError
from videopreview.core.options import (
    AUTO,
    RECOGNISED_OPTIONS,
    format_config_string,
    format_value,
    get_descriptor,
    is_recognised,
    parse_config_value,
    permits_auto,
)
from videopreview.utils.validators import Accepted, validate


@pytest.mark.parametrize(
    "value, expected",
    [(AUTO, "auto"), (True, "true"), (False, "false"), (42, "42"), (0.5, "0.50"), (1.0, "1.00"), ("full", "full")],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_config_string():
    assert format_config_string("frame_size", 0.3) == "frame_size=0.30"
    assert format_config_string("maximum_frames", AUTO) == "maximum_frames=auto"


@pytest.mark.parametrize(
    "text, expected",
    [("auto", AUTO), ("true", True), ("false", False), ("12", 12), ("0.25", 0.25), ("play", "play")],
)
def test_parse_config_value(text, expected):
    assert parse_config_value(text) == expected


def test_defaults_are_valid_for_their_kind():
    for descriptor in RECOGNISED_OPTIONS.values():
        assert isinstance(validate(descriptor.kind, descriptor.default), Accepted), descriptor.id


def test_descriptor_lookup():
    assert get_descriptor("frame_size").label == "Frame size"
    assert is_recognised("overlay_number")
    assert not is_recognised("colour")
    with pytest.raises(InvalidOptionError):
        get_descriptor("colour")


def test_auto_kinds():
    assert permits_auto(RECOGNISED_OPTIONS["maximum_frames"].kind)
    assert permits_auto(RECOGNISED_OPTIONS["frames_to_show"].kind)
    assert not permits_auto(RECOGNISED_OPTIONS["frame_size"].kind)
