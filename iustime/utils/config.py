# iustime/utils/config.py
# Rev 0.2.0
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .paths import config_dir

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 1280,
        "height": 760,
        "is_maximized": False,
    },
    "ui": {
        "diagnostics_dock_visible": False,
    },
    "review": {
        "model": "gemini-2.5-flash",
    },
}


def settings_file() -> Path:
    return config_dir() / "settings.json"


def _merge(defaults: Dict[str, Any], loaded: Dict[str, Any]) -> Dict[str, Any]:
    # section-wise merge so a partial settings.json keeps the other defaults
    out = copy.deepcopy(defaults)
    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key].update(value)
        else:
            out[key] = value
    return out


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    if path.exists():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(loaded, dict):
                raise ValueError("settings root must be an object")
            return _merge(_DEFAULTS, loaded)
        except (OSError, ValueError) as e:
            logging.getLogger("iustime.config").warning("Ignoring unreadable settings %s: %s", path, e)
            return copy.deepcopy(_DEFAULTS)
    return copy.deepcopy(_DEFAULTS)


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
