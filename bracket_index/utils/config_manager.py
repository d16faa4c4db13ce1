# config_manager.py - JSON config manager

import json
import logging
import os

from bracket_index.utils.logger_utils import DEFAULT_LOG_PATH

logger = logging.getLogger(__name__)

DEFAULTS = {
    "encoding": "utf-8",       # source file encoding
    "sentinel": "0",           # query that ends the session
    "log_path": DEFAULT_LOG_PATH,
    "log_to_file": False,
    "use_color": True,
    "show_stats": False,
}


def _coerce(cur, val):
    """Convert `val` to the type of the current value `cur`."""
    if isinstance(cur, bool) and isinstance(val, str):
        # bool("false") is True
        return val.strip().lower() in ("1", "true", "yes", "on")
    if val is None or isinstance(val, (dict, list)):
        raise TypeError(f"expected {type(cur).__name__}, got {type(val).__name__}")
    return type(cur)(val)


class Config:
    def __init__(self, path="bracket_index.json"):
        self.path = path
        self.data = dict(DEFAULTS)
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("config %s unreadable, using defaults: %s", self.path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("config %s is not a JSON object, using defaults", self.path)
            return
        for k, v in loaded.items():
            if k not in self.data:
                logger.warning("config %s: unknown option %r ignored", self.path, k)
                continue
            try:
                self.data[k] = _coerce(self.data[k], v)
            except (TypeError, ValueError) as e:
                logger.warning("config %s: bad value for %r, default kept: %s", self.path, k, e)

    def save(self):
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key):
        return self.data[key]

    def show(self):
        for k, v in self.data.items():
            print(f"{k:15} = {v}")

    def set(self, key, val):
        if key not in self.data:
            raise KeyError(f"No such option: {key}")
        self.data[key] = _coerce(self.data[key], val)
        self.save()
