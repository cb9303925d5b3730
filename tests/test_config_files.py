from pathlib import Path

import pytest

from videopreview.core.config_files import (
    ConfigFile,
    ConfigFileSet,
    discover_config_paths,
    local_config_dirs,
    parse_line,
)
from videopreview.core.errors import ConfigFileError
from videopreview.core.options import AUTO


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_line_ignores_comments_and_blanks():
    assert parse_line("frame_size = 0.3  # bigger") == ("frame_size", "0.3")
    assert parse_line("   # only a comment") is None
    assert parse_line("") is None


def test_config_file_sorts_valid_and_invalid_options(tmp_path):
    path = write(
        tmp_path / "conf",
        "maximum_frames = auto\n"
        "frame_size = 0.3\n"
        "action_on_hover = explode\n"
        "colour = red\n"
        "maximum_percentage = 250\n",
    )
    config = ConfigFile(path)
    assert config.options == {"maximum_frames": AUTO, "frame_size": 0.3}
    assert config.invalid_options == {"action_on_hover": "explode", "colour": "red", "maximum_percentage": 250}


def test_first_duplicate_wins(tmp_path):
    config = ConfigFile(write(tmp_path / "conf", "minimum_sampling = 10\nminimum_sampling = 50\n"))
    assert config.options["minimum_sampling"] == 10


def test_missing_file_has_no_options(tmp_path):
    config = ConfigFile(tmp_path / "nothing-here")
    assert config.options == {}
    assert config.invalid_options == {}


def test_write_options_rewrites_in_place(tmp_path):
    path = write(
        tmp_path / "conf",
        "# preview settings\nframe_size = 0.3\nmaximum_frames = 10  # cap\nframe_size = 0.9\n",
    )
    config = ConfigFile(path)
    config.write_options({"frame_size": 0.6, "overlay_number": True})

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "# preview settings",
        "frame_size = 0.60",
        "maximum_frames = 10  # cap",
        "overlay_number = true",
    ]
    assert config.options["frame_size"] == 0.6
    assert not (tmp_path / "conf.tmp").exists()


def test_write_option_creates_missing_file(tmp_path):
    path = tmp_path / "sub" / "conf"
    ConfigFile(path).write_option("frames_to_show", AUTO)
    assert path.read_text(encoding="utf-8") == "frames_to_show = auto\n"


def test_discovery_walks_up_to_home(isolated_config):
    home = isolated_config
    outer = write(home / "films" / ".videopreviewconfig", "")
    inner = write(home / "films" / "2024" / ".videopreviewconfig", "")
    write(home / ".videopreviewconfig", "")  # at home itself: not a local file
    video = home / "films" / "2024" / "clip.mp4"

    paths = discover_config_paths(video, home=home)
    assert paths[:2] == [inner.resolve(), outer.resolve()]
    assert paths[2] == home / ".config" / "videopreview"
    assert len(paths) == 4


def test_merge_prefers_higher_priority(isolated_config):
    home = isolated_config
    write(home / "films" / ".videopreviewconfig", "frame_size = 0.8\n")
    write(home / ".config" / "videopreview", "frame_size = 0.2\nminimum_sampling = 5\nbogus = 1\n")
    config = ConfigFileSet.for_video(home / "films" / "clip.mp4", home=home)

    assert config.get("frame_size") == 0.8
    assert config.get("minimum_sampling") == 5
    assert config.invalid_options == {"bogus": 1}
    assert len(config.list_config_file_paths()) == 3


def test_save_all_options_to_known_file_rewrites_it(isolated_config):
    home = isolated_config
    local = write(home / "films" / ".videopreviewconfig", "# mine\nframe_size = 0.8\n")
    config = ConfigFileSet.for_video(home / "films" / "clip.mp4", home=home)
    config.set("overlay_number", True)

    written = config.save_all_options(local.resolve())
    assert written == local.resolve()
    text = local.read_text(encoding="utf-8")
    assert text.startswith("# mine\nframe_size = 0.80\n")
    assert "overlay_number = true" in text


def test_export_writes_invalid_options_first(tmp_path):
    source = ConfigFile(write(tmp_path / "conf", "frame_size = 0.4\nbogus = 7\n"))
    config = ConfigFileSet([source])
    target = tmp_path / "out" / "exported"

    assert config.save_all_options(target) == target
    assert target.read_text(encoding="utf-8").splitlines() == ["bogus = 7", "", "frame_size = 0.40"]


def test_export_failure_raises_config_file_error(tmp_path):
    blocker = write(tmp_path / "blocker", "")
    config = ConfigFileSet([])
    with pytest.raises(ConfigFileError):
        config.export(blocker / "conf")


def test_local_search_reaches_filesystem_root_outside_home(tmp_path):
    video = tmp_path / "media" / "clip.mp4"
    dirs = local_config_dirs(video, home=tmp_path / "home")
    assert dirs[0] == video.resolve().parent
    assert dirs[-1] == Path(dirs[-1].anchor)


def test_local_search_stops_before_home(isolated_config):
    home = isolated_config.resolve()
    dirs = local_config_dirs(home / "films" / "2024" / "clip.mp4", home=home)
    assert dirs == [home / "films" / "2024", home / "films"]
