"""Configuration management."""

import copy
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

API_KEY_ENV = "VIDPROBE_API_KEY"

DEFAULTS = {
    "api_key": "",
    "backend": "internal",
    "download_path": str(Path.home() / "Downloads" / "vidprobe"),
    "request_timeout": 30,
    "parallel_requests": True,
}


class Config:
    """Manages application configuration.

    Settings are read from a JSON file merged over ``DEFAULTS``. The Data API
    key can also come from the VIDPROBE_API_KEY environment variable, which
    takes precedence over the file.
    """

    def __init__(self, config_file: Path = None, environ=None):
        if config_file is None:
            # Use user's home directory for config
            config_file = Path.home() / "vidprobe_settings.json"
        self.file = Path(config_file)
        self.environ = os.environ if environ is None else environ
        self.data = copy.deepcopy(DEFAULTS)
        self.load()

    def load(self):
        """Load configuration from file."""
        if not self.file.exists():
            return
        try:
            with open(self.file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.file}: {e}")
            return
        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring settings file {self.file}: expected a JSON object")
            return
        self.data.update(loaded)

    def save(self):
        """Save configuration to file."""
        self.file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.file, 'w', encoding='utf-8') as f:
            json.dump(self.data, f, indent=2)

    @property
    def api_key(self) -> str:
        """The YouTube Data API key."""
        return self.environ.get(API_KEY_ENV) or self.data.get("api_key") or ""

    @property
    def backend(self) -> str:
        return self.data.get("backend") or DEFAULTS["backend"]

    @property
    def request_timeout(self) -> float:
        try:
            return float(self.data["request_timeout"])
        except (KeyError, TypeError, ValueError):
            return DEFAULTS["request_timeout"]

    @property
    def parallel_requests(self) -> bool:
        return bool(self.data.get("parallel_requests", True))

    @property
    def download_path(self) -> Path:
        """Get the download path."""
        return Path(self.data.get("download_path") or DEFAULTS["download_path"])

    def set_download_path(self, path: str | Path):
        """Set the download path."""
        self.data["download_path"] = str(path)
        self.save()
