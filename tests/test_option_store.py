import pytest

from conftest import FakeFrameSource
from videopreview.core.option_store import NO_SUBJECT, OptionStore
from videopreview.core.options import AUTO
from videopreview.utils.validators import Accepted, Clamped, Rejected


def test_get_value_reads_from_frame_source(frame_source):
    store = OptionStore(frame_source)
    assert store.get_value("minimum_sampling") == 25
    assert store.get_value("unknown_option") is None


def test_set_value_clamps_and_forwards(frame_source):
    store = OptionStore(frame_source)
    outcome = store.set_value("minimum_sampling", -4)
    assert outcome == Clamped(1, -4)
    assert frame_source.values["minimum_sampling"] == 1
    assert store.generation == 1


def test_rejected_edit_changes_nothing(frame_source):
    store = OptionStore(frame_source)
    outcome = store.set_value("action_on_hover", "explode")
    assert isinstance(outcome, Rejected)
    assert store.get_value("action_on_hover") == "none"
    assert frame_source.set_calls == []
    assert store.generation == 0


def test_set_text_parses_before_validating(frame_source):
    store = OptionStore(frame_source)
    assert store.set_text("frame_size", "0.75") == Accepted(0.75)
    assert store.set_text("maximum_percentage", "250") == Clamped(100, 250)
    assert isinstance(store.set_text("maximum_percentage", "many"), Rejected)
    assert store.get_value("maximum_percentage") == 100


def test_remembered_value_round_trip(frame_source):
    store = OptionStore(frame_source)
    store.set_value("maximum_frames", 40)
    store.set_automatic("maximum_frames", True)
    assert store.get_value("maximum_frames") is AUTO
    assert store.remembered_value("maximum_frames") == 40
    store.set_automatic("maximum_frames", False)
    assert store.get_value("maximum_frames") == 40


@pytest.mark.parametrize("option_id, expected", [("maximum_frames", 100), ("frames_to_show", 0.5)])
def test_disabling_auto_without_remembered_value_uses_default(frame_source, option_id, expected):
    store = OptionStore(frame_source)
    assert store.is_automatic(option_id)
    assert store.set_automatic(option_id, False) == Accepted(expected)
    assert store.get_value(option_id) == expected


def test_set_automatic_on_kind_without_auto(frame_source):
    store = OptionStore(frame_source)
    assert isinstance(store.set_automatic("frame_size", True), Rejected)
    assert store.get_value("frame_size") == 0.5


def test_generation_increases_on_every_applied_change(frame_source):
    store = OptionStore(frame_source)
    store.set_value("overlay_number", True)
    store.set_automatic("frames_to_show", False)
    store.set_value("overlay_number", "yes please")
    assert store.generation == 2


def test_without_subject_everything_is_a_no_op():
    store = OptionStore(None)
    assert not store.has_subject
    assert store.get_value("frame_size") is None
    assert store.set_value("frame_size", 0.3) is NO_SUBJECT
    assert store.set_automatic("maximum_frames", True) is NO_SUBJECT
    assert store.to_config_string("frame_size") == ""
    assert store.generation == 0


def test_to_config_string():
    store = OptionStore(FakeFrameSource())
    store.set_value("frame_size", 0.3)
    assert store.to_config_string("frame_size") == "frame_size=0.30"
    assert store.to_config_string("frames_to_show") == "frames_to_show=auto"


def test_disabling_auto_on_concrete_value_keeps_it(frame_source):
    store = OptionStore(frame_source)
    store.set_value("maximum_frames", 40)
    generation = store.generation

    assert store.set_automatic("maximum_frames", False) == Accepted(40)
    assert store.get_value("maximum_frames") == 40
    assert store.generation == generation
