from videopreview.core.config_files import ConfigFileSet
from videopreview.core.options import AUTO
from videopreview.core.preview import VideoPreview


def make_preview(frame_reader, metadata, tmp_path):
    preview = VideoPreview(tmp_path / "clip.mp4", reader=frame_reader, config=ConfigFileSet([]), metadata=metadata)
    preview.update_preview()
    return preview


def test_missing_options_fall_back_to_defaults(frame_reader, metadata, tmp_path):
    preview = make_preview(frame_reader, metadata, tmp_path)
    assert preview.get_option_value("frame_size") == 0.5
    assert preview.config.get("frame_size") == 0.5
    assert preview.get_option_value("nonsense") is None


def test_initial_build_before_any_grid(frame_reader, metadata, tmp_path):
    preview = make_preview(frame_reader, metadata, tmp_path)
    assert preview.get_frame_count() == 1


def test_request_grid_rebuilds_frames(frame_reader, metadata, tmp_path):
    preview = make_preview(frame_reader, metadata, tmp_path)
    before = preview.get_frames()
    preview.request_grid(3, 4)
    assert preview.get_frame_count() == 12
    assert preview.get_frames() is not before
    assert (preview.rows, preview.cols) == (3, 4)


def test_same_count_keeps_frame_collection(frame_reader, metadata, tmp_path):
    preview = make_preview(frame_reader, metadata, tmp_path)
    preview.request_grid(3, 4)
    frames = preview.get_frames()
    preview.request_grid(4, 3)
    assert preview.get_frames() is frames
    assert len(frame_reader.calls) == 2


def test_frame_count_option_change_rebuilds(frame_reader, metadata, tmp_path):
    preview = make_preview(frame_reader, metadata, tmp_path)
    preview.set_option_value("frames_to_show", 0.5)
    assert preview.get_frame_count() == 20
    preview.set_option_value("maximum_frames", 5)
    assert preview.get_frame_count() == 2


def test_unrelated_option_does_not_rebuild(frame_reader, metadata, tmp_path):
    preview = make_preview(frame_reader, metadata, tmp_path)
    frames = preview.get_frames()
    preview.set_option_value("overlay_number", True)
    assert preview.get_frames() is frames
    assert preview.get_option_value("overlay_number") is True


def test_aspect_ratio_and_description(frame_reader, metadata, tmp_path):
    preview = make_preview(frame_reader, metadata, tmp_path)
    assert preview.get_frame_aspect_ratio() == 1920 / 1080
    info = preview.describe()
    assert info["Frames"] == "1000"
    assert info["Length"] == "00:00:40.00"
    assert info["Encoding"] == "h264"


def test_option_summary_lists_every_option(frame_reader, metadata, tmp_path):
    preview = make_preview(frame_reader, metadata, tmp_path)
    summary = dict(preview.option_summary())
    assert summary["Maximum number of frames to show"] == "auto"
    assert summary["Size of each frame in the preview"] == "0.50"


def test_without_metadata_nothing_is_built(frame_reader, tmp_path):
    preview = VideoPreview(tmp_path / "clip.mp4", reader=frame_reader)
    preview.request_grid(2, 2)
    assert preview.get_frames() == []
    assert preview.get_frame_aspect_ratio() == 1.0
    assert preview.get_option_value("maximum_frames") is AUTO


def test_save_all_options_exports(frame_reader, metadata, tmp_path):
    preview = make_preview(frame_reader, metadata, tmp_path)
    target = tmp_path / "exported"
    preview.save_all_options(target)
    text = target.read_text(encoding="utf-8")
    assert "maximum_percentage = 20" in text
    assert "maximum_frames = auto" in text
