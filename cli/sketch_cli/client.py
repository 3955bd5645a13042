"""HTTP client for the sketch embedder API."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from engine.kernel.embed import embed_src
from engine.kernel.importer import SketchImportError, sketch_from_payload
from engine.kernel.sketch import EmbedOptions, SketchDocument

logger = logging.getLogger(__name__)


class SketchApiError(Exception):
    """Non-2xx response from the server, or a request that never completed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class SketchApiClient:
    """HTTP client for the sketch embedder API."""

    def __init__(self, api_url: str, transport: httpx.BaseTransport | None = None):
        self.api_url = api_url.rstrip("/")
        self.client = httpx.Client(base_url=self.api_url, timeout=30.0, transport=transport)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            res = self.client.request(method, path, headers={"Accept": "application/json"}, **kwargs)
            res.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SketchApiError(
                f"Server error: {e.response.status_code} ({_error_text(e.response)})",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise SketchApiError(f"Request failed: {e}") from e
        return res.json()

    def save_sketch(self, document: SketchDocument) -> dict:
        """
        Store a sketch on the server.

        Returns {"id": "...", "embedUrl": "/embed/...", "viewUrl": "/view/..."}
        """
        try:
            return self._request("POST", "/api/sketches", json=document.to_dict())
        except SketchApiError:
            logger.exception("Error saving sketch")
            raise

    def get_sketch_by_id(self, sketch_id: str) -> dict:
        """Fetch a stored sketch (raw JSON, including id and created)."""
        try:
            return self._request("GET", f"/api/sketches/{sketch_id}")
        except SketchApiError:
            logger.exception("Error fetching sketch %s", sketch_id)
            raise

    def fetch_document(self, sketch_id: str) -> SketchDocument:
        """Fetch a stored sketch as an editable document."""
        data = self.get_sketch_by_id(sketch_id)
        try:
            return sketch_from_payload(data, strict=False)
        except SketchImportError as e:
            raise SketchApiError(f"Server returned an unusable sketch: {e.detail}") from e

    def get_embed_code(self, sketch_id: str, options: EmbedOptions | None = None) -> str:
        """Ask the server for the embed snippet of a stored sketch."""
        opts = options or EmbedOptions()
        params = {
            "width": opts.width,
            "height": opts.height,
            "showCode": "true" if opts.show_code else "false",
            "responsive": "true" if opts.responsive else "false",
            "autoplay": "true" if opts.autoplay else "false",
        }
        return self._request("GET", f"/api/sketches/{sketch_id}/embed", params=params)["embedCode"]

    def load_demo_sketch(self, name: str) -> SketchDocument:
        """Load one of the server's bundled demo sketches."""
        try:
            data = self._request("GET", f"/examples/{name}.json")
        except SketchApiError as e:
            logger.exception("Error loading demo sketch %s", name)
            raise SketchApiError(f"Could not load demo sketch: {e}", status_code=e.status_code) from e
        try:
            return sketch_from_payload(data, strict=False)
        except SketchImportError as e:
            raise SketchApiError(f"Demo sketch {name!r} is invalid: {e.detail}") from e

    def list_demos(self) -> list[str]:
        return self._request("GET", "/examples")["demos"]

    def embed_url(self, sketch_id: str, show_code: bool = False) -> str:
        return embed_src(self.api_url, sketch_id, show_code=show_code)

    def view_url(self, sketch_id: str) -> str:
        return f"{self.api_url}/view/{sketch_id}"

    def close(self):
        """Close client."""
        self.client.close()


def _error_text(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.reason_phrase
