"""
Sketch Kernel: the pure engine.

Four components:
  sketch    - SketchDocument, EmbedOptions, StoredSketch and the defaults
  preview   - SketchDocument → runnable preview page
  embed     - embed snippet and standalone embed page templates
  importer  - pasted JSON → SketchDocument (all-or-nothing)
"""

from engine.kernel.embed import PLACEHOLDER_SRC, embed_src, escape_code, render_embed_page, render_embed_snippet
from engine.kernel.importer import SketchImportError, parse_sketch_json, sketch_from_payload
from engine.kernel.preview import PreviewState, render_placeholder, render_preview
from engine.kernel.sketch import (
    EmbedOptions,
    SketchDocument,
    SketchField,
    StoredSketch,
    default_sketch,
)

__all__ = [
    "SketchDocument",
    "SketchField",
    "EmbedOptions",
    "StoredSketch",
    "default_sketch",
    "PreviewState",
    "render_preview",
    "render_placeholder",
    "PLACEHOLDER_SRC",
    "escape_code",
    "embed_src",
    "render_embed_snippet",
    "render_embed_page",
    "SketchImportError",
    "parse_sketch_json",
    "sketch_from_payload",
]
