"""Sketch API routes: create, get, embed code."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from backend.models.sketch import (
    CreateSketchRequest,
    CreateSketchResponse,
    EmbedCodeResponse,
    ErrorResponse,
    SketchResponse,
)
from backend.repos.sketch_repo import SketchNotFound, SketchStore, get_sketch_store
from engine.kernel.embed import embed_src, render_embed_snippet
from engine.kernel.sketch import EmbedOptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sketches", tags=["sketches"])


@router.post(
    "",
    status_code=201,
    response_model=CreateSketchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_sketch(
    req: CreateSketchRequest,
    store: SketchStore = Depends(get_sketch_store),
) -> CreateSketchResponse | JSONResponse:
    """
    Store a new sketch.

    `js` is required; everything else takes a default. Returns the new id
    with the embed and view paths.
    """
    if not req.js:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Sketch JS code is required")

    try:
        sketch = await store.create(
            js=req.js,
            html=req.html,
            css=req.css,
            title=req.title,
            author=req.author,
        )
    except Exception:
        logger.exception("Error creating sketch")
        return JSONResponse(status_code=500, content={"error": "Failed to create sketch"})

    return CreateSketchResponse(
        id=sketch.id,
        embed_url=f"/embed/{sketch.id}",
        view_url=f"/view/{sketch.id}",
    )


@router.get("/{sketch_id}", status_code=200, responses={404: {"model": ErrorResponse}})
async def get_sketch(
    sketch_id: str,
    store: SketchStore = Depends(get_sketch_store),
) -> SketchResponse:
    """Get a single sketch by ID."""
    try:
        sketch = await store.get_by_id(sketch_id)
    except SketchNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sketch not found") from None
    return SketchResponse.from_model(sketch)


@router.get(
    "/{sketch_id}/embed",
    status_code=200,
    response_model=EmbedCodeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_embed_code(
    request: Request,
    sketch_id: str,
    width: str = "100%",
    height: str = "400px",
    show_code: str = Query(default="false", alias="showCode"),
    responsive: str = "true",
    autoplay: str = "true",
    store: SketchStore = Depends(get_sketch_store),
) -> EmbedCodeResponse:
    """
    Build the iframe snippet for a stored sketch.

    Flags are on only for the literal string "true". An omitted `responsive`
    counts as on, matching the editor's own snippet; older servers left the
    responsive block out unless `responsive=true` was sent explicitly.
    """
    try:
        sketch = await store.get_by_id(sketch_id)
    except SketchNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sketch not found") from None

    options = EmbedOptions(
        width=width,
        height=height,
        show_code=show_code == "true",
        responsive=responsive == "true",
        autoplay=autoplay == "true",
    )
    src = embed_src(str(request.base_url), sketch.id, show_code=options.show_code)
    return EmbedCodeResponse(embed_code=render_embed_snippet(sketch.document, options, src=src))
