# tests/test_config.py
from __future__ import annotations

from iustime.utils.config import load_settings, save_settings


def test_defaults_when_missing(tmp_path):
    s = load_settings(tmp_path / "settings.json")
    assert s["review"]["model"] == "gemini-2.5-flash"
    assert s["main_window"]["width"] > 0


def test_partial_file_merges_per_section(tmp_path):
    path = tmp_path / "settings.json"
    save_settings({"review": {"model": "gemini-x"}, "main_window": {"width": 900}}, path)
    s = load_settings(path)
    assert s["review"]["model"] == "gemini-x"
    assert s["main_window"]["width"] == 900
    assert "height" in s["main_window"]


def test_unreadable_file_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2", encoding="utf-8")
    assert load_settings(path)["review"]["model"] == "gemini-2.5-flash"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path)["review"]["model"] == "gemini-2.5-flash"
