# Rev 0.2.0

# iustime – logging setup (Rev 0.2.0)
from __future__ import annotations
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .paths import APP_NAME, LOGS_DIR

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES = 5_000_000
BACKUP_COUNT = 7

_log_file: Optional[Path] = None


def get_logger(name: str) -> logging.Logger:
    """Namespaced logger: get_logger("EntityStore") -> 'iustime.EntityStore'."""
    return logging.getLogger(f"{APP_NAME}.{name}")


def level_from_env(default: str = "INFO") -> int:
    # IUSTIME_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR; unknown names fall back to INFO
    name = os.environ.get("IUSTIME_LOG_LEVEL", default).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def current_log_file() -> Optional[Path]:
    return _log_file


def install_qt_handler() -> bool:
    """Route Qt's qDebug/qWarning output into the 'qt' logger."""
    try:
        from PySide6.QtCore import QtMsgType, qInstallMessageHandler
    except ImportError:
        return False

    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _qt_handler(msg_type, _context, message):
        logging.getLogger("qt").log(levels.get(msg_type, logging.INFO), message)

    qInstallMessageHandler(_qt_handler)
    return True


def setup_logging(app_name: str = APP_NAME, log_dir: Optional[Path] = None) -> Path:
    """
    Root logger -> rotating file (5 MB x 7) + stdout, plus an excepthook that
    logs uncaught exceptions. Calling it again replaces the handlers it added.
    """
    global _log_file
    level = level_from_env()
    log_dir = Path(log_dir or LOGS_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    logfile = log_dir / f"{app_name}.log"

    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, "_iustime", False)]:
        root.removeHandler(h)
        h.close()
    root.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    fh = RotatingFileHandler(logfile, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8")
    ch = logging.StreamHandler(sys.stdout)
    for h in (fh, ch):
        h.setFormatter(formatter)
        h.setLevel(level)
        h._iustime = True
        root.addHandler(h)

    def _excepthook(exctype, value, tb):
        logging.getLogger("unhandled").error("Uncaught exception", exc_info=(exctype, value, tb))
        sys.__excepthook__(exctype, value, tb)

    sys.excepthook = _excepthook
    install_qt_handler()

    _log_file = logfile
    get_logger("logging").info("Logging initialized at %s; file: %s", logging.getLevelName(level), logfile)
    return logfile
