"""
Configuration management for the sketch CLI.

Config structure (~/.p5sketch/config.json):
  {
    "default_url": "http://localhost:3000",
    "last_sketch_id": "..."
  }

The editor's local storage sits next to it in ~/.p5sketch/storage.json, and
`p5sketch preview` writes ~/.p5sketch/preview/preview.html.

API URL resolution order:
  1. SKETCH_API_URL environment variable
  2. --api-url command line flag
  3. default_url from config file
  4. Fallback: http://localhost:3000
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000"


class Config:
    """Config manager for the sketch CLI."""

    def __init__(self, api_url_override: str | None = None, config_dir: Path | None = None):
        """
        Initialize config.

        Args:
            api_url_override: Optional --api-url flag value
            config_dir: Override for ~/.p5sketch (tests)
        """
        self.config_dir = config_dir or Path(os.environ.get("SKETCH_CONFIG_DIR", Path.home() / ".p5sketch"))
        self.config_file = self.config_dir / "config.json"
        self._data: dict = {}
        self._api_url_override = api_url_override
        self._load()

    def _load(self):
        """Load config from disk."""
        if not self.config_file.exists():
            return
        try:
            with open(self.config_file) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable config %s: %s", self.config_file, e)
            return
        if isinstance(data, dict):
            self._data = data

    def _save(self):
        """Save config to disk."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self._data, f, indent=2)

    @property
    def api_url(self) -> str:
        """Current API URL (see module docstring for resolution order)."""
        env_url = os.environ.get("SKETCH_API_URL")
        if env_url:
            return env_url.rstrip("/")

        if self._api_url_override:
            return self._api_url_override.rstrip("/")

        return self._data.get("default_url", DEFAULT_API_URL).rstrip("/")

    @property
    def default_url(self) -> str:
        return self._data.get("default_url", DEFAULT_API_URL)

    @default_url.setter
    def default_url(self, value: str):
        self._data["default_url"] = value.rstrip("/")
        self._save()

    @property
    def last_sketch_id(self) -> str | None:
        """Id of the sketch most recently saved from this machine."""
        return self._data.get("last_sketch_id")

    @last_sketch_id.setter
    def last_sketch_id(self, value: str | None):
        self._data["last_sketch_id"] = value
        self._save()

    @property
    def storage_file(self) -> Path:
        return self.config_dir / "storage.json"

    @property
    def preview_dir(self) -> Path:
        """Where `p5sketch preview` writes its page; reused across runs."""
        return self.config_dir / "preview"
