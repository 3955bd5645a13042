"""
Preview refresh protocol.

A PreviewController drives one preview frame:

    STOPPED --run--> LOADING --(delay)--> RUNNING --stop--> STOPPED

Every page shown in the frame is published through a PreviewResources
registry, which hands back a URL. The controller keeps at most one URL
live: publishing a page releases the one it replaces (unless the registry
hands back the same URL again), and close() releases the last one.

The loading delay is an asyncio task. A run during LOADING cancels the
pending refresh before scheduling its own, and stop() cancels it outright.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

from engine.kernel.preview import PreviewState, render_placeholder, render_preview
from engine.kernel.sketch import SketchDocument

logger = logging.getLogger(__name__)

DEFAULT_LOADING_DELAY = 0.5


# ---------------------------------------------------------------------------
# Resource registries
# ---------------------------------------------------------------------------


class PreviewResources:
    """Creates loadable URLs for HTML pages and releases them."""

    def create(self, html: str) -> str:
        raise NotImplementedError

    def release(self, url: str) -> None:
        raise NotImplementedError


class MemoryPreviewResources(PreviewResources):
    """In-memory registry. URLs look like preview:N."""

    def __init__(self) -> None:
        self.pages: dict[str, str] = {}
        self._counter = 0

    def create(self, html: str) -> str:
        self._counter += 1
        url = f"preview:{self._counter}"
        self.pages[url] = html
        return url

    def release(self, url: str) -> None:
        self.pages.pop(url, None)

    def read(self, url: str) -> str:
        return self.pages[url]

    @property
    def live_count(self) -> int:
        return len(self.pages)


class FilePreviewResources(PreviewResources):
    """
    Writes pages to one HTML file and hands out its file:// URL.

    Every create overwrites the same file, so a browser tab opened on the
    first URL shows the latest page when reloaded.
    """

    def __init__(self, directory: Path | None = None, filename: str = "preview.html") -> None:
        self._owns_dir = directory is None
        self.directory = directory or Path(tempfile.mkdtemp(prefix="p5sketch-"))
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path = self.directory / filename
        self.url = self.path.resolve().as_uri()

    def create(self, html: str) -> str:
        self.path.write_text(html, encoding="utf-8")
        return self.url

    def release(self, url: str) -> None:
        if url == self.url:
            self.path.unlink(missing_ok=True)

    def cleanup(self) -> None:
        """Remove the page, and the directory if we made it."""
        self.release(self.url)
        if self._owns_dir:
            shutil.rmtree(self.directory, ignore_errors=True)


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


class PreviewController:
    """Owns one preview frame's state, URL and pending refresh."""

    def __init__(
        self,
        resources: PreviewResources,
        loading_delay: float = DEFAULT_LOADING_DELAY,
        on_change: Callable[[PreviewState, str | None], None] | None = None,
    ):
        self.resources = resources
        self.loading_delay = loading_delay
        self.on_change = on_change
        self.state = PreviewState.STOPPED
        self.url: str | None = None
        self.rendered: SketchDocument | None = None
        self._pending: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        """Running or about to be (the toolbar shows Stop in both cases)."""
        return self.state is not PreviewState.STOPPED

    @property
    def is_loading(self) -> bool:
        return self.state is PreviewState.LOADING

    def run(self, document: SketchDocument) -> asyncio.Task:
        """
        Start (or restart) the preview with a snapshot of `document`.

        Shows the loading page at once and schedules the sketch page after
        the loading delay. Must be called from a running event loop.
        """
        if not document.is_renderable:
            raise ValueError("Sketch has no JS to run")

        self._cancel_pending()
        snapshot = document.copy()
        self._publish(render_placeholder(PreviewState.LOADING), PreviewState.LOADING)
        self._pending = asyncio.get_running_loop().create_task(self._finish(snapshot))
        return self._pending

    async def run_and_wait(self, document: SketchDocument) -> None:
        """Run and return once the sketch page is showing."""
        task = self.run(document)
        await asyncio.wait({task})
        # A cancelled task was superseded by another run or a stop
        if not task.cancelled():
            task.result()

    def stop(self) -> None:
        """Cancel any pending refresh and show the stopped page."""
        self._cancel_pending()
        self._publish(render_placeholder(PreviewState.STOPPED), PreviewState.STOPPED)

    async def toggle(self, document: SketchDocument) -> None:
        if self.is_running:
            self.stop()
        else:
            await self.run_and_wait(document)

    def close(self) -> None:
        """Tear down: cancel pending work and release the live URL."""
        self._cancel_pending()
        if self.url is not None:
            self.resources.release(self.url)
            self.url = None
        self.state = PreviewState.STOPPED

    async def _finish(self, document: SketchDocument) -> None:
        await asyncio.sleep(self.loading_delay)
        self.rendered = document
        self._publish(render_preview(document), PreviewState.RUNNING)
        self._pending = None

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    def _publish(self, html: str, state: PreviewState) -> None:
        old = self.url
        self.url = self.resources.create(html)
        if old is not None and old != self.url:
            self.resources.release(old)
        self.state = state
        logger.debug("Preview %s at %s", state.value, self.url)
        if self.on_change is not None:
            self.on_change(state, self.url)
