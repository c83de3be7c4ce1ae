"""Tests for persistent settings."""

import json

from pianotiles.settings import GameSettings, load_settings, save_settings


def test_defaults_when_missing(tmp_path):
    settings = load_settings(tmp_path / "settings.json")
    assert settings == GameSettings()
    assert settings.difficulty_index() == 1


def test_round_trip(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    save_settings(GameSettings(difficulty="Hard", bpm=100.0), path)
    loaded = load_settings(path)
    assert loaded.difficulty == "Hard"
    assert loaded.bpm == 100.0
    assert loaded.difficulty_index() == 2


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"game": {"difficulty": "easy", "colour": "red"}}))
    loaded = load_settings(path)
    assert loaded.difficulty_index() == 0


def test_other_sections_are_preserved(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"window": {"fullscreen": True}}))
    save_settings(GameSettings(), path)
    data = json.loads(path.read_text())
    assert data["window"] == {"fullscreen": True}
    assert data["game"]["difficulty"] == "Medium"


def test_unreadable_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(path) == GameSettings()


def test_unknown_difficulty_uses_default_index():
    assert GameSettings(difficulty="Impossible").difficulty_index() == 1
