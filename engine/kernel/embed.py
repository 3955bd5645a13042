"""
Sketch Kernel: Embed templates

Pure function: (SketchDocument, EmbedOptions, src) → embed snippet markup.
Pure function: (StoredSketch, show_code) → standalone embed page.

Both are mustache templates rendered with chevron. Sketch css/js go in
unescaped (they must run); the code listings use escape_code.
"""

from __future__ import annotations

from html import escape as _html_escape

import chevron

from engine.kernel.sketch import P5_CDN_URL, EmbedOptions, SketchDocument, StoredSketch

PLACEHOLDER_SRC = "YOUR_SKETCH_URL_HERE"

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_SNIPPET_TEMPLATE = """<div class="p5-sketch-container" style="width: {{width}}; height: {{height}};">
  <iframe
    src="{{src}}"
    style="width: 100%; height: 100%; border: none;"
{{^autoplay}}
    data-autoplay="false"
{{/autoplay}}
  ></iframe>
{{#show_code}}
  <details>
    <summary>View Code</summary>
    <pre><code>{{{code}}}</code></pre>
  </details>
{{/show_code}}
</div>
{{#responsive}}
<style>
  .p5-sketch-container {
    position: relative;
    overflow: hidden;
  }
  @media (max-width: 600px) {
    .p5-sketch-container {
      height: 300px;
    }
  }
</style>
{{/responsive}}
"""

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{title}} by {{author}}</title>
    <script src="{{p5_url}}"></script>
    <style>
      html, body {
        margin: 0;
        padding: 0;
        overflow: hidden;
      }
      canvas {
        display: block;
      }
      .code-container {
        margin: 10px;
        padding: 10px;
        background: #f5f5f5;
        border-radius: 4px;
        overflow: auto;
        max-height: 300px;
      }
      pre {
        margin: 0;
        white-space: pre-wrap;
      }
      {{{css}}}
    </style>
  </head>
  <body>
    <main></main>
    <script>{{{js}}}</script>
{{#show_code}}
    <div class="code-container">
      <pre><code>{{{code}}}</code></pre>
    </div>
{{/show_code}}
  </body>
</html>
"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def escape_code(source: str) -> str:
    """Escape sketch source for display inside <pre><code>."""
    return _html_escape(source, quote=False)


def render_embed_snippet(
    document: SketchDocument,
    options: EmbedOptions | None = None,
    src: str = PLACEHOLDER_SRC,
) -> str:
    """
    Build the copy-paste embed snippet for a sketch.

    `src` is the URL the iframe points at; callers that show code should
    pass the page URL with `?showCode=true` themselves.
    """
    opts = options or EmbedOptions()
    return chevron.render(
        _SNIPPET_TEMPLATE,
        {
            "width": opts.width,
            "height": opts.height,
            "src": src,
            "autoplay": opts.autoplay,
            "show_code": opts.show_code,
            "responsive": opts.responsive,
            "code": escape_code(document.js),
        },
    ).rstrip("\n")


def render_embed_page(sketch: StoredSketch, show_code: bool = False) -> str:
    """Build the standalone page served at /embed/{id}."""
    return chevron.render(
        _PAGE_TEMPLATE,
        {
            "title": sketch.title,
            "author": sketch.author,
            "p5_url": P5_CDN_URL,
            "css": sketch.css,
            "js": sketch.js,
            "show_code": show_code,
            "code": escape_code(sketch.js),
        },
    )


def embed_src(base_url: str, sketch_id: str, show_code: bool = False) -> str:
    """Absolute URL of a sketch's embed page."""
    url = f"{base_url.rstrip('/')}/embed/{sketch_id}"
    if show_code:
        url += "?showCode=true"
    return url
