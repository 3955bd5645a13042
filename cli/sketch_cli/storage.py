"""
Local storage for the editor.

A small string key/value file, the CLI's stand-in for browser
localStorage. The active sketch lives under STORAGE_KEY.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from engine.kernel.importer import SketchImportError, sketch_from_payload
from engine.kernel.sketch import SketchDocument

logger = logging.getLogger(__name__)

STORAGE_KEY = "p5-sketch-embedder:sketch"


class LocalStorage:
    """String key/value pairs persisted as one JSON object on disk."""

    def __init__(self, path: Path):
        self.path = path
        self._data: dict[str, str] = {}
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return
        if isinstance(data, dict):
            self._data = {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value
        self._save()

    def remove_item(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._save()


def save_active_sketch(storage: LocalStorage, document: SketchDocument) -> None:
    storage.set_item(STORAGE_KEY, json.dumps(document.to_dict()))


def restore_active_sketch(storage: LocalStorage) -> SketchDocument | None:
    """The stored sketch, or None when absent or no longer valid."""
    raw = storage.get_item(STORAGE_KEY)
    if raw is None:
        return None
    try:
        return sketch_from_payload(json.loads(raw), strict=False)
    except (json.JSONDecodeError, SketchImportError) as e:
        logger.warning("Discarding stored sketch: %s", e)
        return None
