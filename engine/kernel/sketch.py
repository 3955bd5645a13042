"""
Sketch Kernel: Sketch Document

The in-memory representation of one p5.js sketch: html, js, css, plus an
optional title and author. Shared by the preview renderer, the embed
templates, the JSON importer, the server store and the editor session.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

P5_VERSION = "1.11.1"
P5_CDN_URL = f"https://cdnjs.cloudflare.com/ajax/libs/p5.js/{P5_VERSION}/p5.js"

DEFAULT_TITLE = "Untitled Sketch"
DEFAULT_AUTHOR = "Anonymous"

DEFAULT_HTML = f"""<!DOCTYPE html>
<html>
  <head>
    <script src="{P5_CDN_URL}"></script>
    <meta charset="utf-8" />
  </head>
  <body>
    <main></main>
    <script src="sketch.js"></script>
  </body>
</html>"""

DEFAULT_JS = """function setup() {
  createCanvas(400, 400);
}

function draw() {
  background(220);
  fill(255, 0, 0);
  ellipse(mouseX, mouseY, 50, 50);
}"""

DEFAULT_CSS = """html, body {
  margin: 0;
  padding: 0;
}
canvas {
  display: block;
}"""


class SketchField(enum.Enum):
    """The three editable source fields, one per editor tab."""

    JS = "js"
    HTML = "html"
    CSS = "css"

    @property
    def filename(self) -> str:
        """Tab label shown by the editor."""
        return _FILENAMES[self]

    @classmethod
    def parse(cls, name: str) -> SketchField:
        """Resolve a tab name ("js", "sketch.js", "CSS", ...) to a field."""
        key = name.strip().lower()
        for member in cls:
            if key in (member.value, member.filename):
                return member
        raise ValueError(f"Unknown sketch field: {name!r}")


_FILENAMES = {
    SketchField.JS: "sketch.js",
    SketchField.HTML: "index.html",
    SketchField.CSS: "style.css",
}


# ---------------------------------------------------------------------------
# Sketch Document
# ---------------------------------------------------------------------------


@dataclass
class SketchDocument:
    """
    One sketch's sources.

    `js` must be non-empty for the document to be renderable. `html` and
    `css` fall back to the built-in templates when a document is built from
    a partial payload (see `from_dict`).
    """

    js: str
    html: str = DEFAULT_HTML
    css: str = DEFAULT_CSS
    title: str | None = None
    author: str | None = None

    @property
    def is_renderable(self) -> bool:
        return bool(self.js)

    def get(self, source: SketchField) -> str:
        if source is SketchField.JS:
            return self.js
        if source is SketchField.HTML:
            return self.html
        return self.css

    def set(self, source: SketchField, value: str) -> None:
        if source is SketchField.JS:
            self.js = value
        elif source is SketchField.HTML:
            self.html = value
        else:
            self.css = value

    def copy(self) -> SketchDocument:
        return SketchDocument(
            js=self.js,
            html=self.html,
            css=self.css,
            title=self.title,
            author=self.author,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"html": self.html, "js": self.js, "css": self.css}
        if self.title is not None:
            d["title"] = self.title
        if self.author is not None:
            d["author"] = self.author
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SketchDocument:
        return cls(
            js=d.get("js") or "",
            html=d["html"] if isinstance(d.get("html"), str) else DEFAULT_HTML,
            css=d["css"] if isinstance(d.get("css"), str) else DEFAULT_CSS,
            title=d.get("title") if isinstance(d.get("title"), str) else None,
            author=d.get("author") if isinstance(d.get("author"), str) else None,
        )


def default_sketch() -> SketchDocument:
    """The sketch the editor boots with when nothing else is available."""
    return SketchDocument(js=DEFAULT_JS, html=DEFAULT_HTML, css=DEFAULT_CSS)


@dataclass
class EmbedOptions:
    """Embed snippet options, as edited in the embed options panel."""

    width: str = "100%"
    height: str = "400px"
    show_code: bool = False
    responsive: bool = True
    autoplay: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "showCode": self.show_code,
            "responsive": self.responsive,
            "autoplay": self.autoplay,
        }


@dataclass
class StoredSketch:
    """A sketch as held by the server store."""

    id: str
    created: str
    js: str
    html: str = ""
    css: str = ""
    title: str = DEFAULT_TITLE
    author: str = DEFAULT_AUTHOR

    @property
    def document(self) -> SketchDocument:
        return SketchDocument(
            js=self.js,
            html=self.html,
            css=self.css,
            title=self.title,
            author=self.author,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "html": self.html,
            "js": self.js,
            "css": self.css,
            "created": self.created,
        }
