import json

import pytest
from pydantic import ValidationError

from videopreview.core.preferences import Preferences, load_preferences, preferences_path, save_preferences


def test_defaults():
    prefs = Preferences()
    assert prefs.space_between_rows == 10
    assert prefs.frame_border_color == (0, 122, 255, 255)
    assert prefs.side_panel_visible


def test_color_accepts_strings_and_rgb_lists():
    assert Preferences(frame_border_color="255,0,0").frame_border_color == (255, 0, 0, 255)
    assert Preferences(frame_border_color=[1, 2, 3]).frame_border_color == (1, 2, 3, 255)


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Preferences(space_between_cols=-1)
    with pytest.raises(ValidationError):
        Preferences(frame_border_color="300,0,0")


def test_side_panel_hidden_when_every_section_is():
    prefs = Preferences(side_panel_video=False, side_panel_frame=False, side_panel_config=False)
    assert not prefs.side_panel_visible


def test_save_and_load(isolated_config):
    prefs = Preferences(space_between_rows=4, frame_info_number=False)
    path = save_preferences(prefs)
    assert path == preferences_path()
    assert json.loads(path.read_text(encoding="utf-8"))["space_between_rows"] == 4
    assert load_preferences() == prefs


def test_missing_or_corrupt_file_gives_defaults(tmp_path):
    assert load_preferences(tmp_path / "absent.json") == Preferences()
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_preferences(broken) == Preferences()
