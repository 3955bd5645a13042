"""
Editor session.

Holds what the editor screen holds: the active Sketch Document, the
selected source tab, the import dialog's error text, the embed options and
the preview controller. Every document change is written to local storage.
"""

from __future__ import annotations

import dataclasses
import logging

from engine.kernel.embed import PLACEHOLDER_SRC, embed_src, render_embed_snippet
from engine.kernel.importer import SketchImportError, parse_sketch_json
from engine.kernel.preview import PreviewState
from engine.kernel.sketch import EmbedOptions, SketchDocument, SketchField, default_sketch
from sketch_cli.client import SketchApiClient, SketchApiError
from sketch_cli.preview import PreviewController
from sketch_cli.storage import LocalStorage, restore_active_sketch, save_active_sketch

logger = logging.getLogger(__name__)


class EditorSession:
    """One editor's state."""

    def __init__(
        self,
        document: SketchDocument | None = None,
        preview: PreviewController | None = None,
        storage: LocalStorage | None = None,
    ):
        self.document = document or default_sketch()
        self.preview = preview
        self.storage = storage
        self.active_tab = SketchField.JS
        self.embed_options = EmbedOptions()
        self.import_error: str | None = None
        # Set once the current document has been saved to a server
        self.sketch_id: str | None = None
        self.share_base_url: str | None = None

    # ── editor panel ────────────────────────────────────────────────────────

    def switch_tab(self, tab: SketchField) -> None:
        self.active_tab = tab

    @property
    def active_text(self) -> str:
        return self.document.get(self.active_tab)

    def update_field(self, source: SketchField, value: str) -> None:
        """Replace one source field. Does not touch the preview."""
        self.document.set(source, value)
        self.sketch_id = None
        self._persist()

    def edit_active(self, value: str) -> None:
        self.update_field(self.active_tab, value)

    @property
    def has_unapplied_changes(self) -> bool:
        """True when the editor differs from what the preview last ran."""
        if self.preview is None or self.preview.rendered is None:
            return True
        return self.document != self.preview.rendered

    # ── import ──────────────────────────────────────────────────────────────

    def import_json(self, text: str, strict: bool = True) -> bool:
        """
        Replace the document with pasted JSON.

        All or nothing: on failure the document is untouched and the
        message is kept in import_error.
        """
        try:
            document = parse_sketch_json(text, strict=strict)
        except SketchImportError as e:
            self.import_error = str(e)
            return False

        self.import_error = None
        self.replace_document(document)
        return True

    def replace_document(self, document: SketchDocument, sketch_id: str | None = None) -> None:
        self.document = document.copy()
        self.sketch_id = sketch_id
        self._persist()

    # ── preview ─────────────────────────────────────────────────────────────

    @property
    def preview_state(self) -> PreviewState:
        if self.preview is None:
            return PreviewState.STOPPED
        return self.preview.state

    async def run(self) -> None:
        """Run (or apply changes to) the preview with the current document."""
        if self.preview is None:
            raise RuntimeError("No preview attached to this session")
        await self.preview.run_and_wait(self.document)

    def stop(self) -> None:
        if self.preview is not None:
            self.preview.stop()

    async def toggle_running(self) -> None:
        if self.preview is None:
            raise RuntimeError("No preview attached to this session")
        await self.preview.toggle(self.document)

    def close(self) -> None:
        if self.preview is not None:
            self.preview.close()

    # ── embed options ───────────────────────────────────────────────────────

    def set_embed_options(self, **changes) -> EmbedOptions:
        self.embed_options = dataclasses.replace(self.embed_options, **changes)
        return self.embed_options

    @property
    def embed_code(self) -> str:
        """Snippet for the current document; recomputed on every read."""
        if self.sketch_id and self.share_base_url:
            src = embed_src(self.share_base_url, self.sketch_id, show_code=self.embed_options.show_code)
        else:
            src = PLACEHOLDER_SRC
        return render_embed_snippet(self.document, self.embed_options, src=src)

    # ── server ──────────────────────────────────────────────────────────────

    def save(self, client: SketchApiClient) -> dict:
        """Store the document on the server and remember its id for sharing."""
        result = client.save_sketch(self.document)
        self.sketch_id = result["id"]
        self.share_base_url = client.api_url
        return result

    def _persist(self) -> None:
        if self.storage is not None:
            save_active_sketch(self.storage, self.document)


def load_initial_sketch(
    client: SketchApiClient | None,
    storage: LocalStorage | None,
    sketch_id: str | None = None,
    demo: str | None = None,
) -> tuple[SketchDocument, str]:
    """
    Pick the sketch an editor starts with.

    Order: explicit sketch id, explicit demo name, local storage, default.
    A failed fetch falls through to the next source. Returns the document
    and a label naming where it came from.
    """
    if sketch_id and client is not None:
        try:
            return client.fetch_document(sketch_id), f"sketch {sketch_id}"
        except SketchApiError as e:
            logger.warning("Could not load sketch %s: %s", sketch_id, e)

    if demo and client is not None:
        try:
            return client.load_demo_sketch(demo), f"demo {demo}"
        except SketchApiError as e:
            logger.warning("Could not load demo %s: %s", demo, e)

    if storage is not None:
        restored = restore_active_sketch(storage)
        if restored is not None:
            return restored, "local storage"

    return default_sketch(), "default"
