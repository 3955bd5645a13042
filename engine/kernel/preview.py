"""
Sketch Kernel: Preview Renderer

Pure functions: SketchDocument → self-contained HTML document string.
No IO. The caller decides how the page is exposed to a frame (see
sketch_cli.preview for the resource lifecycle).

The sketch's css and js are inlined verbatim. Scripts run with the frame's
own privileges; running user-authored code is the point of a preview.
"""

from __future__ import annotations

import enum

import chevron

from engine.kernel.sketch import P5_CDN_URL, SketchDocument


class PreviewState(enum.Enum):
    """Preview refresh protocol states."""

    STOPPED = "stopped"
    LOADING = "loading"
    RUNNING = "running"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8" />
    <script src="{{p5_url}}"></script>
    <style>{{{css}}}</style>
  </head>
  <body>
    <main></main>
    <script>
      {{{js}}}
    </script>
  </body>
</html>"""

LOADING_PAGE = """<html>
  <body style="display: flex; justify-content: center; align-items: center; height: 100vh; \
margin: 0; font-family: sans-serif; background-color: #f9f9f9;">
    <div style="text-align: center;">
      <div style="width: 40px; height: 40px; border: 4px solid #f3f3f3; border-top: 4px solid #3b82f6; \
border-radius: 50%; margin: 0 auto 15px; animation: spin 1s linear infinite;"></div>
      <div>Loading sketch...</div>
    </div>
    <style>
      @keyframes spin {
        0% { transform: rotate(0deg); }
        100% { transform: rotate(360deg); }
      }
    </style>
  </body>
</html>"""

STOPPED_PAGE = """<html>
  <body style="display: flex; justify-content: center; align-items: center; height: 100vh; \
margin: 0; font-family: sans-serif; background-color: #f9f9f9; color: #666;">
    <div style="text-align: center; padding: 20px; border: 1px dashed #ccc; border-radius: 8px;">
      <svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" \
stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round" \
style="margin: 0 auto 10px; display: block;">
        <rect x="3" y="3" width="18" height="18" rx="2" ry="2"></rect>
        <line x1="9" y1="9" x2="15" y2="15"></line>
        <line x1="15" y1="9" x2="9" y2="15"></line>
      </svg>
      <div>Sketch stopped</div>
      <div style="font-size: 12px; margin-top: 8px;">Click Run to start the sketch</div>
    </div>
  </body>
</html>"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_preview(document: SketchDocument) -> str:
    """
    Build the preview page for a sketch.

    Loads p5.js from the CDN, inlines `css` in a style block and `js` in a
    script block, and provides the `<main>` element p5 uses as the default
    canvas parent. The document's `html` field is not consulted.
    """
    return chevron.render(
        _PREVIEW_TEMPLATE,
        {"p5_url": P5_CDN_URL, "css": document.css, "js": document.js},
    )


def render_placeholder(state: PreviewState) -> str:
    """Page shown in the frame while a sketch is loading or stopped."""
    if state is PreviewState.LOADING:
        return LOADING_PAGE
    if state is PreviewState.STOPPED:
        return STOPPED_PAGE
    raise ValueError(f"No placeholder page for state {state.value!r}")
