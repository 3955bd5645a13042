"""
Pydantic models for the sketch embedder.

All API data shapes defined here. No imports from repos or routes.
"""

from backend.models.sketch import (
    CreateSketchRequest,
    CreateSketchResponse,
    EmbedCodeResponse,
    ErrorResponse,
    SketchResponse,
)

__all__ = [
    "CreateSketchRequest",
    "CreateSketchResponse",
    "SketchResponse",
    "EmbedCodeResponse",
    "ErrorResponse",
]
