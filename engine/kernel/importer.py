"""
Sketch Kernel: JSON import

Turns user-pasted JSON into a SketchDocument. All-or-nothing: either a
complete document comes back or SketchImportError is raised.
"""

from __future__ import annotations

import json
from typing import Any

from engine.kernel.sketch import SketchDocument

_ERROR_PREFIX = "Invalid JSON format or missing keys"


class SketchImportError(ValueError):
    """Pasted text is not JSON, or lacks the required sketch fields."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{_ERROR_PREFIX}: {detail}")


def parse_sketch_json(text: str, strict: bool = True) -> SketchDocument:
    """
    Parse an exported sketch.

    `js` must be a non-empty string. In strict mode `css` and `html` must
    also be strings (empty is fine); otherwise missing ones take the
    built-in templates.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise SketchImportError(str(e)) from e

    return sketch_from_payload(payload, strict=strict)


def sketch_from_payload(payload: Any, strict: bool = True) -> SketchDocument:
    """Validate an already-decoded payload. See parse_sketch_json."""
    if not isinstance(payload, dict):
        raise SketchImportError("expected a JSON object")

    if strict:
        missing = [k for k in ("js", "css", "html") if not isinstance(payload.get(k), str)]
        if missing:
            raise SketchImportError("JSON must contain js, css, and html string properties.")
    elif not isinstance(payload.get("js"), str):
        raise SketchImportError("JSON must contain a js string property.")

    if not payload["js"]:
        raise SketchImportError("js must not be empty.")

    return SketchDocument.from_dict(payload)
