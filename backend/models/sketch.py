"""Sketch models for the storage and embed API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from engine.kernel.sketch import StoredSketch


class CreateSketchRequest(BaseModel):
    """
    What the client sends to POST /api/sketches.

    Every field is optional at the schema level; the route rejects a missing
    or empty `js` with 400 rather than a validation error.
    """

    html: str | None = None
    js: str | None = None
    css: str | None = None
    title: str | None = None
    author: str | None = None


class CreateSketchResponse(BaseModel):
    """What the create endpoint returns."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    embed_url: str = Field(alias="embedUrl")
    view_url: str = Field(alias="viewUrl")


class SketchResponse(BaseModel):
    """A stored sketch as returned by GET /api/sketches/{id}."""

    id: str
    title: str
    author: str
    html: str
    js: str
    css: str
    created: str

    @classmethod
    def from_model(cls, sketch: StoredSketch) -> SketchResponse:
        """Convert the stored sketch to the public API response."""
        return cls(**sketch.to_dict())


class EmbedCodeResponse(BaseModel):
    """What the embed-code endpoint returns."""

    model_config = ConfigDict(populate_by_name=True)

    embed_code: str = Field(alias="embedCode")


class ErrorResponse(BaseModel):
    """Error body used by every JSON route."""

    error: str
