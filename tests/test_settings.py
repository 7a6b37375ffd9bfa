"""
Tests for JSON settings persistence and config construction.

Usage:
    pytest tests/test_settings.py
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from inkdigit import settings
from inkdigit.recognizer import GestureConfig, RecognizerConfig


def test_missing_file_gives_defaults(tmp_path):
    loaded = settings.load_settings(tmp_path / "missing.json")
    assert loaded == settings.DEFAULT_SETTINGS
    assert loaded is not settings.DEFAULT_SETTINGS


def test_defaults_are_not_shared(tmp_path):
    loaded = settings.load_settings(tmp_path / "missing.json")
    loaded["recognizer"]["confidence_gap"] = 0.2
    assert settings.DEFAULT_SETTINGS["recognizer"] == {}


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "config.json"
    data = settings.load_settings(path)
    data["debug_enabled"] = True
    data["gesture"] = {"debounce_ms": 450}

    settings.save_settings(data, path)
    loaded = settings.load_settings(path)

    assert loaded["debug_enabled"] is True
    assert loaded["gesture"] == {"debounce_ms": 450}
    assert loaded["surface_size"] == settings.DEFAULT_SETTINGS["surface_size"]


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_invalid_file_gives_defaults(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")
    assert settings.load_settings(path) == settings.DEFAULT_SETTINGS


def test_recognizer_config_from_settings():
    config = settings.recognizer_config({"recognizer": {"max_distance": 0.4, "unknown": 1}})
    assert config == RecognizerConfig(max_distance=0.4)


def test_invalid_recognizer_settings_fall_back():
    config = settings.recognizer_config({"recognizer": {"resample_points": 1}})
    assert config == RecognizerConfig()


def test_gesture_config_from_settings():
    assert settings.gesture_config({}) == GestureConfig()
    config = settings.gesture_config({"gesture": {"movement_threshold_px": 4}})
    assert config.movement_threshold_px == 4
    assert config.debounce_ms == GestureConfig().debounce_ms


def test_saved_file_is_readable_json(tmp_path):
    path = tmp_path / "config.json"
    settings.save_settings({"debug_enabled": False}, path)
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == {"debug_enabled": False}


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
