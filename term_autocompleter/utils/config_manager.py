# config_manager.py - JSON config manager

import json
import os

DEFAULTS = {
    "max_suggestions": 5,
    "casing_policy": "first",  # "first" keeps the first casing, "latest" follows re-registrations
    "log_level": "INFO",
    "log_file": "",
    "host": "127.0.0.1",
    "port": 8080,
}


class Config:
    """
    Engine settings, optionally overlaid from a JSON file.
    Holds settings only; terms are never stored here.
    """

    def __init__(self, path=None, **overrides):
        self.path = path
        self.data = dict(DEFAULTS)
        self._load()
        for key, val in overrides.items():
            self.set(key, val)

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        with open(self.path, "r", encoding="utf8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"config file {self.path} must hold a JSON object")
        for key, val in raw.items():
            self.set(key, val)

    def save(self):
        if not self.path:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key):
        return self.data[key]

    def __getitem__(self, key):
        return self.data[key]

    def set(self, key, val):
        if key not in self.data:
            raise KeyError(f"No such option: {key}")
        self.data[key] = type(DEFAULTS[key])(val)

    def show(self):
        return "\n".join(f"{k:15} = {v}" for k, v in self.data.items())
