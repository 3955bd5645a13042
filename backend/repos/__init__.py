"""
Repository layer for the sketch embedder.

All storage access lives here and ONLY here. Routes receive a SketchStore
through the get_sketch_store dependency.
"""

from backend.repos.sketch_repo import (
    MemorySketchStore,
    SketchNotFound,
    SketchStore,
    get_sketch_store,
)

__all__ = [
    "SketchStore",
    "MemorySketchStore",
    "SketchNotFound",
    "get_sketch_store",
]
