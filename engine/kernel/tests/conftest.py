"""
Engine kernel test configuration.

Shared sketch fixtures. Kernel functions are pure, so nothing here touches
the filesystem or the network.
"""

import pytest

from engine.kernel.sketch import SketchDocument, StoredSketch


@pytest.fixture
def sketch():
    """A small sketch with markup-significant characters in every field."""
    return SketchDocument(
        js=(
            "function setup() {\n  createCanvas(200, 200);\n}\n"
            "function draw() {\n  if (mouseX < 50 && mouseY > 10) fill('red');\n}"
        ),
        html="<main></main>",
        css="body { background: #000; }\n/* a > b */",
        title="Mouse Test",
        author="Grace",
    )


@pytest.fixture
def stored_sketch(sketch):
    return StoredSketch(
        id="lq2x7c9abcde",
        created="2024-03-01T12:00:00.000Z",
        js=sketch.js,
        html=sketch.html,
        css=sketch.css,
        title=sketch.title,
        author=sketch.author,
    )
