from conftest import FakeFrameSource
from videopreview.core.layout import LayoutEngine
from videopreview.core.session import EMPTY_LAYOUT, PreviewSession
from videopreview.utils.validators import Rejected


def make_session(source=None):
    # 300px wide frames (frame_size 0.5), 150px high with the fake 2:1 aspect ratio.
    return PreviewSession(source or FakeFrameSource(), LayoutEngine(outer_padding=15.0, scrollbar_reserve=15.0))


def test_layout_requests_grid_once_for_stable_window():
    source = FakeFrameSource()
    session = make_session(source)

    first = session.layout(630, 630)
    second = session.layout(630, 630)

    assert source.grid_requests == [(4, 2)]
    assert session.last_requested_grid == (4, 2)
    assert (first.rows, first.cols) == (4, 2)
    assert second == first
    assert len(session.frames) == 8


def test_resize_requests_new_grid():
    source = FakeFrameSource()
    session = make_session(source)
    session.layout(630, 630)
    session.layout(930, 630)
    assert source.grid_requests == [(4, 2), (4, 3)]


def test_fixed_count_never_requests_grid():
    source = FakeFrameSource()
    session = make_session(source)
    session.set_automatic("frames_to_show", False)
    result = session.layout(645, 630)  # scroll bar reserved when the count is fixed
    assert source.grid_requests == []
    assert (result.rows, result.cols) == (3, 2)
    assert result.pending_regeneration is None


def test_regeneration_clears_selection():
    source = FakeFrameSource()
    session = make_session(source)
    session.select(session.frames[0].frame_id)
    assert session.selected_frame is session.frames[0]

    session.layout(630, 630)
    assert session.selection.selected is None
    assert session.selected_frame is None


def test_edit_without_new_frames_keeps_selection():
    session = make_session()
    session.select(10)
    session.set_value("overlay_number", True)
    assert session.selection.selected == 10


def test_rejected_text_edit_reports_and_keeps_value():
    session = make_session()
    outcome = session.set_text("action_on_hover", "wiggle")
    assert isinstance(outcome, Rejected)
    assert session.options.get_value("action_on_hover") == "none"


def test_selecting_twice_deselects():
    session = make_session()
    session.select(0)
    session.select(0)
    assert session.selected_frame is None


def test_session_without_video():
    session = PreviewSession(None)
    assert session.layout(800, 600) is EMPTY_LAYOUT
    assert session.frames == []
    assert not session.sync_frames()
    assert isinstance(session.set_value("frame_size", 0.2), Rejected)
