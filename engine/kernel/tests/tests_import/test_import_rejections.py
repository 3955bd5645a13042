"""
JSON Import -- Rejected Payloads

Every rejection is a SketchImportError carrying the
"Invalid JSON format or missing keys: ..." message the editor displays.
"""

import pytest

from engine.kernel.importer import SketchImportError, parse_sketch_json, sketch_from_payload


def test_not_json():
    with pytest.raises(SketchImportError) as exc:
        parse_sketch_json("{not json")
    assert str(exc.value).startswith("Invalid JSON format or missing keys: ")


def test_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_sketch_json("")


@pytest.mark.parametrize("text", ["[]", '"js"', "42", "null"])
def test_non_object(text):
    with pytest.raises(SketchImportError) as exc:
        parse_sketch_json(text)
    assert exc.value.detail == "expected a JSON object"


@pytest.mark.parametrize(
    "text",
    [
        '{"css": "", "html": ""}',
        '{"js": "x();", "html": ""}',
        '{"js": "x();", "css": ""}',
        '{"js": 1, "css": "", "html": ""}',
        '{"js": "x();", "css": null, "html": ""}',
    ],
)
def test_strict_requires_all_three_strings(text):
    with pytest.raises(SketchImportError) as exc:
        parse_sketch_json(text)
    assert exc.value.detail == "JSON must contain js, css, and html string properties."


def test_lenient_still_requires_js():
    with pytest.raises(SketchImportError) as exc:
        parse_sketch_json('{"css": "a{}"}', strict=False)
    assert exc.value.detail == "JSON must contain a js string property."


@pytest.mark.parametrize("strict", [True, False])
def test_empty_js(strict):
    with pytest.raises(SketchImportError) as exc:
        sketch_from_payload({"js": "", "css": "", "html": ""}, strict=strict)
    assert exc.value.detail == "js must not be empty."
