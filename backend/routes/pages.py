"""Public page serving: embed pages and the view redirect."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from backend import config
from backend.repos.sketch_repo import SketchNotFound, SketchStore, get_sketch_store
from engine.kernel.embed import render_embed_page

router = APIRouter(tags=["pages"])


@router.get("/embed/{sketch_id}", response_class=HTMLResponse)
async def serve_embed_page(
    sketch_id: str,
    showCode: str | None = None,  # noqa: N803
    store: SketchStore = Depends(get_sketch_store),
) -> Response:
    """
    Serve a standalone page running the sketch, for use inside an iframe.

    With ?showCode=true the escaped sketch source is listed under the canvas.
    Unknown ids get a plain-text 404.
    """
    try:
        sketch = await store.get_by_id(sketch_id)
    except SketchNotFound:
        return PlainTextResponse("Sketch not found", status_code=404)

    html = render_embed_page(sketch, show_code=showCode == "true")
    return HTMLResponse(
        content=html,
        headers={"X-Content-Type-Options": "nosniff"},
    )


@router.get("/view/{sketch_id}")
async def view_sketch(
    sketch_id: str,
    store: SketchStore = Depends(get_sketch_store),
) -> Response:
    """Redirect to the editor with the sketch id as a query parameter."""
    try:
        await store.get_by_id(sketch_id)
    except SketchNotFound:
        return PlainTextResponse("Sketch not found", status_code=404)

    return RedirectResponse(url=f"{config.settings.EDITOR_URL}/?sketch={sketch_id}", status_code=302)
