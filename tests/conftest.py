from pathlib import Path

import pytest

from videopreview.core import Frame, VideoMetadata
from videopreview.core.options import RECOGNISED_OPTIONS


def make_frames(count, start=0):
    return [Frame(index=i, frame_number=start + i * 10, timestamp=(start + i * 10) / 25.0) for i in range(count)]


class FakeFrameSource:
    """In-memory frame source; ``request_grid`` replaces the frames with rows*cols new ones."""

    def __init__(self, frame_count=6, aspect_ratio=2.0):
        self.values = {option_id: d.default for option_id, d in RECOGNISED_OPTIONS.items()}
        self.frames = make_frames(frame_count)
        self.aspect_ratio = aspect_ratio
        self.grid_requests = []
        self.set_calls = []

    def get_option_value(self, option_id):
        return self.values.get(option_id)

    def set_option_value(self, option_id, value):
        self.set_calls.append((option_id, value))
        self.values[option_id] = value

    def get_frame_count(self):
        return len(self.frames)

    def get_frames(self):
        return self.frames

    def request_grid(self, rows, cols):
        self.grid_requests.append((rows, cols))
        self.frames = make_frames(max(1, rows * cols))

    def get_frame_aspect_ratio(self):
        return self.aspect_ratio


class FakeFrameReader:
    """Yields no images; records which frame numbers were asked for."""

    def __init__(self):
        self.calls = []

    def read(self, video_path, metadata, frame_numbers):
        self.calls.append(list(frame_numbers))
        for number in frame_numbers:
            yield number, None


@pytest.fixture
def frame_source():
    return FakeFrameSource()


@pytest.fixture
def frame_reader():
    return FakeFrameReader()


@pytest.fixture
def metadata():
    return VideoMetadata(width=1920, height=1080, fps=25.0, frame_count=1000, duration_seconds=40.0, codec="h264")


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the user and global config files into ``tmp_path``; returns the fake home."""

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("VIDEOPREVIEW_USER_CONFIG", str(home / ".config" / "videopreview"))
    monkeypatch.setenv("VIDEOPREVIEW_GLOBAL_CONFIG", str(tmp_path / "etc" / "videopreviewconfig"))
    monkeypatch.setenv("VIDEOPREVIEW_PREFERENCES", str(home / ".config" / "videopreview-gui.json"))
    return home


@pytest.fixture
def video_file(isolated_config) -> Path:
    videos = isolated_config / "videos"
    videos.mkdir()
    path = videos / "clip.mp4"
    path.write_bytes(b"\x00")
    return path
