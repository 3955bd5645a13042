"""
JSON Import -- Accepted Payloads

A valid export replaces the whole document, and the js text that comes out
is exactly the js string that went in.
"""

import json

import pytest

from engine.kernel.importer import parse_sketch_json, sketch_from_payload
from engine.kernel.sketch import DEFAULT_CSS, DEFAULT_HTML, SketchDocument


def test_full_export_round_trips(sketch):
    doc = parse_sketch_json(json.dumps(sketch.to_dict()))
    assert doc == sketch


@pytest.mark.parametrize(
    "js",
    [
        "function setup() {}",
        "// unicode: éè ☃\nlet s = `multi\nline`;",
        "  leading and trailing whitespace  \n",
        "let t = '<script>alert(1)</script>';",
    ],
)
def test_js_text_is_exact(js):
    doc = parse_sketch_json(json.dumps({"js": js, "css": "", "html": ""}))
    assert doc.js == js


def test_empty_css_and_html_are_kept():
    doc = parse_sketch_json('{"js": "draw();", "css": "", "html": ""}')
    assert doc.css == ""
    assert doc.html == ""


def test_extra_keys_are_ignored():
    doc = parse_sketch_json('{"js": "x();", "css": "", "html": "", "version": 3, "tags": []}')
    assert doc == SketchDocument(js="x();", css="", html="")


def test_title_and_author_are_picked_up():
    doc = parse_sketch_json('{"js": "x();", "css": "", "html": "", "title": "T", "author": "A"}')
    assert doc.title == "T"
    assert doc.author == "A"


def test_lenient_mode_fills_defaults():
    doc = parse_sketch_json('{"js": "x();"}', strict=False)
    assert doc.js == "x();"
    assert doc.html == DEFAULT_HTML
    assert doc.css == DEFAULT_CSS


def test_payload_is_not_mutated():
    payload = {"js": "x();", "css": "a{}", "html": "<main></main>"}
    before = dict(payload)
    sketch_from_payload(payload)
    assert payload == before
