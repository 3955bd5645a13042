"""Repository for sketch storage."""

from __future__ import annotations

import logging
import secrets
import time
from datetime import UTC, datetime

from engine.kernel.sketch import DEFAULT_AUTHOR, DEFAULT_TITLE, StoredSketch

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


class SketchNotFound(Exception):
    """Sketch does not exist in the store."""

    def __init__(self, sketch_id: str):
        self.sketch_id = sketch_id
        super().__init__(f"Sketch not found: {sketch_id}")


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
    return "".join(reversed(digits))


def new_sketch_id() -> str:
    """Millisecond timestamp in base 36 followed by five random base-36 chars."""
    stamp = _to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
    return stamp + suffix


def _now_iso_ms() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Store protocol
# ---------------------------------------------------------------------------


class SketchStore:
    """
    Storage capability used by the routes: create and get_by_id.

    Subclass to back sketches with something other than process memory.
    """

    async def create(
        self,
        js: str,
        html: str | None = None,
        css: str | None = None,
        title: str | None = None,
        author: str | None = None,
    ) -> StoredSketch:
        raise NotImplementedError

    async def get_by_id(self, sketch_id: str) -> StoredSketch:
        """Return the sketch or raise SketchNotFound."""
        raise NotImplementedError


class MemorySketchStore(SketchStore):
    """
    In-memory store. Sketches live for the process lifetime.

    No size bound and no persistence.
    """

    def __init__(self) -> None:
        self.sketches: dict[str, StoredSketch] = {}

    async def create(
        self,
        js: str,
        html: str | None = None,
        css: str | None = None,
        title: str | None = None,
        author: str | None = None,
    ) -> StoredSketch:
        sketch_id = new_sketch_id()
        while sketch_id in self.sketches:
            sketch_id = new_sketch_id()

        sketch = StoredSketch(
            id=sketch_id,
            created=_now_iso_ms(),
            js=js,
            html=html or "",
            css=css or "",
            title=title or DEFAULT_TITLE,
            author=author or DEFAULT_AUTHOR,
        )
        self.sketches[sketch_id] = sketch
        logger.info("Created sketch %s", sketch_id)
        return sketch

    async def get_by_id(self, sketch_id: str) -> StoredSketch:
        sketch = self.sketches.get(sketch_id)
        if sketch is None:
            logger.debug("Sketch %s not found", sketch_id)
            raise SketchNotFound(sketch_id)
        return sketch

    def __len__(self) -> int:
        return len(self.sketches)


# Process-wide store used by the app unless a dependency override swaps it.
_store: SketchStore = MemorySketchStore()


def get_sketch_store() -> SketchStore:
    """FastAPI dependency returning the active store."""
    return _store
