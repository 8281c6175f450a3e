# tests/test_logging_setup.py
from __future__ import annotations

import logging
import sys

from iustime.utils import logging_setup


def _ours():
    return [h for h in logging.getLogger().handlers if getattr(h, "_iustime", False)]


def test_setup_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setenv("IUSTIME_LOG_LEVEL", "debug")
    try:
        first = logging_setup.setup_logging("iustime-test", log_dir=tmp_path)
        logging_setup.setup_logging("iustime-test", log_dir=tmp_path)
        assert len(_ours()) == 2
        assert logging_setup.current_log_file() == first
        logging_setup.get_logger("Probe").debug("hello probe")
        for h in _ours():
            h.flush()
        assert "iustime.Probe" in first.read_text(encoding="utf-8")
    finally:
        for h in _ours():
            logging.getLogger().removeHandler(h)
            h.close()


def test_level_from_env(monkeypatch):
    monkeypatch.setenv("IUSTIME_LOG_LEVEL", "warning")
    assert logging_setup.level_from_env() == logging.WARNING
    monkeypatch.setenv("IUSTIME_LOG_LEVEL", "chatty")
    assert logging_setup.level_from_env() == logging.INFO
