"""
Pytest fixtures for the sketch CLI.

The HTTP client is exercised against httpx.MockTransport handlers, so no
server is needed.
"""

from __future__ import annotations

import json

import httpx
import pytest

from engine.kernel.sketch import SketchDocument
from sketch_cli.client import SketchApiClient
from sketch_cli.preview import MemoryPreviewResources, PreviewController
from sketch_cli.storage import LocalStorage

API_URL = "http://sketch.test"


@pytest.fixture
def document():
    return SketchDocument(js="function setup() { createCanvas(100, 100); }", html="", css="canvas { outline: 0; }")


@pytest.fixture
def resources():
    return MemoryPreviewResources()


@pytest.fixture
def preview(resources):
    controller = PreviewController(resources, loading_delay=0.01)
    yield controller
    controller.close()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


class FakeServer:
    """Minimal stand-in for the sketch API, served through MockTransport."""

    def __init__(self):
        self.sketches: dict[str, dict] = {}
        self.demos: dict[str, dict] = {
            "bouncing-ball": {"title": "Bouncing Ball", "js": "let x = 0;", "css": "", "html": ""},
        }
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"error": "Internal server error"})

        path = request.url.path
        if request.method == "POST" and path == "/api/sketches":
            body = json.loads(request.content)
            sketch_id = f"id{len(self.sketches) + 1}"
            self.sketches[sketch_id] = {"id": sketch_id, "created": "2024-01-01T00:00:00.000Z", **body}
            return httpx.Response(
                201, json={"id": sketch_id, "embedUrl": f"/embed/{sketch_id}", "viewUrl": f"/view/{sketch_id}"}
            )
        if path.startswith("/api/sketches/"):
            parts = path.removeprefix("/api/sketches/").split("/")
            sketch = self.sketches.get(parts[0])
            if sketch is None:
                return httpx.Response(404, json={"error": "Sketch not found"})
            if len(parts) == 2 and parts[1] == "embed":
                return httpx.Response(200, json={"embedCode": f"<iframe data-query='{request.url.query.decode()}'>"})
            return httpx.Response(200, json=sketch)
        if path == "/examples":
            return httpx.Response(200, json={"demos": sorted(self.demos)})
        if path.startswith("/examples/") and path.endswith(".json"):
            demo = self.demos.get(path.removeprefix("/examples/").removesuffix(".json"))
            if demo is None:
                return httpx.Response(404, json={"error": "Demo sketch not found"})
            return httpx.Response(200, json=demo)
        return httpx.Response(404, text="Not Found")


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def client(server):
    api = SketchApiClient(API_URL, transport=httpx.MockTransport(server.handler))
    yield api
    api.close()
