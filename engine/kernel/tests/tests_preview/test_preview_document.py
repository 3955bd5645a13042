"""
Preview Renderer -- Page Structure Tests

The preview page is what the editor's frame runs. It must:
  - load p5.js from the pinned CDN URL
  - inline the sketch's css and js exactly as written
  - provide the <main> element p5 attaches its canvas to
"""

import pytest

from engine.kernel.preview import render_preview
from engine.kernel.sketch import P5_CDN_URL, SketchDocument


def test_page_is_complete_document(sketch):
    page = render_preview(sketch)
    assert page.startswith("<!DOCTYPE html>")
    assert page.rstrip().endswith("</html>")
    assert '<meta charset="utf-8" />' in page
    assert "<main></main>" in page


def test_loads_pinned_p5(sketch):
    page = render_preview(sketch)
    assert f'<script src="{P5_CDN_URL}"></script>' in page
    assert "p5.js/1.11.1/" in page


def test_p5_loads_before_sketch(sketch):
    page = render_preview(sketch)
    assert page.index(P5_CDN_URL) < page.index("function setup()")


@pytest.mark.parametrize(
    "css,js",
    [
        ("", "draw();"),
        ("a > b { color: red; }", "if (a < b && c > d) {}"),
        ("/* {{not a tag}} */", "let s = '{{{also not}}}';"),
        ("body::after { content: '</style>'; }", "console.log(\"&amp; stays\");"),
    ],
)
def test_css_and_js_inlined_verbatim(css, js):
    page = render_preview(SketchDocument(js=js, css=css))
    assert f"<style>{css}</style>" in page
    assert js in page


def test_html_field_is_not_used():
    doc = SketchDocument(js="setup();", html="<p id='custom-markup'>hello</p>")
    assert "custom-markup" not in render_preview(doc)


def test_rendering_is_deterministic(sketch):
    assert render_preview(sketch) == render_preview(sketch.copy())
