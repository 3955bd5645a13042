"""Interactive editor REPL for the sketch CLI."""

import asyncio
import webbrowser
from pathlib import Path

from engine.kernel.preview import PreviewState
from engine.kernel.sketch import SketchField
from sketch_cli.client import SketchApiClient, SketchApiError
from sketch_cli.config import Config
from sketch_cli.editor import EditorSession

_FLAG_WORDS = {"on": True, "true": True, "yes": True, "off": False, "false": False, "no": False}
_EMBED_KEYS = {
    "width": "width",
    "height": "height",
    "code": "show_code",
    "responsive": "responsive",
    "autoplay": "autoplay",
}


def parse_embed_changes(tokens: list[str]) -> dict:
    """
    Parse `key=value` tokens into EmbedOptions changes.

    Keys: width, height, code, responsive, autoplay. Flags take on/off.
    """
    changes = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or key not in _EMBED_KEYS:
            raise ValueError(f"Expected key=value with key in {', '.join(_EMBED_KEYS)}: {token!r}")
        attr = _EMBED_KEYS[key]
        if attr in ("width", "height"):
            changes[attr] = value
        else:
            if value.lower() not in _FLAG_WORDS:
                raise ValueError(f"{key} takes on/off, got {value!r}")
            changes[attr] = _FLAG_WORDS[value.lower()]
    return changes


class Repl:
    """Interactive sketch editor."""

    def __init__(self, config: Config, session: EditorSession, client: SketchApiClient, open_browser: bool = True):
        self.config = config
        self.session = session
        self.client = client
        self.open_browser = open_browser
        self.running = True
        self.loop = asyncio.new_event_loop()
        self._browser_opened = False

    def start(self):
        """Start the REPL."""
        title = self.session.document.title or "Untitled Sketch"
        print(f"sketch > {title}  (/help for commands)")
        self._run_preview()

        while self.running:
            try:
                line = input(f"{self.session.active_tab.filename} > ").strip()

                if not line:
                    continue

                if line.startswith("/"):
                    self._handle_command(line)
                else:
                    print("  Commands start with '/'. Type /help.")

            except (EOFError, KeyboardInterrupt):
                print()
                break
            except Exception as e:
                print(f"Error: {e}")

        self.close()

    def close(self):
        self.session.close()
        self.loop.close()
        self.client.close()

    def _handle_command(self, line: str):
        """Handle REPL commands."""
        parts = line.split(maxsplit=1)
        cmd = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else None

        if cmd == "/quit":
            self.running = False
            print("Goodbye.")
        elif cmd == "/tab":
            if arg:
                self._switch_tab(arg)
            else:
                print("Usage: /tab js|html|css")
        elif cmd == "/show":
            print(self.session.active_text)
        elif cmd == "/load":
            if arg:
                self._load_file(arg)
            else:
                print("Usage: /load <file>")
        elif cmd == "/import":
            if arg:
                self._import_file(arg)
            else:
                print("Usage: /import <file.json>")
        elif cmd == "/run":
            self._run_preview()
        elif cmd == "/stop":
            self.session.stop()
            print("  Sketch stopped.")
        elif cmd == "/status":
            self._show_status()
        elif cmd == "/embed":
            self._show_embed(arg.split() if arg else [])
        elif cmd == "/save":
            self._save()
        elif cmd == "/demo":
            if arg:
                self._load_demo(arg)
            else:
                self._list_demos()
        elif cmd == "/open":
            if arg:
                self._open_sketch(arg)
            else:
                print("Usage: /open <sketch id>")
        elif cmd == "/help":
            self._show_help()
        else:
            print(f"Unknown command: {cmd}")
            print("Type /help for available commands.")

    def _switch_tab(self, name: str):
        try:
            self.session.switch_tab(SketchField.parse(name))
        except ValueError as e:
            print(f"  {e}")

    def _load_file(self, path: str):
        """Replace the active tab's text with a file's contents."""
        try:
            text = Path(path).expanduser().read_text(encoding="utf-8")
        except OSError as e:
            print(f"  Could not read {path}: {e}")
            return
        self.session.edit_active(text)
        print(f"  {self.session.active_tab.filename} updated. /run to apply changes.")

    def _import_file(self, path: str):
        try:
            text = Path(path).expanduser().read_text(encoding="utf-8")
        except OSError as e:
            print(f"  Could not read {path}: {e}")
            return
        if not self.session.import_json(text):
            print(f"  {self.session.import_error}")
            return
        print(f"  Imported {self.session.document.title or 'sketch'}.")
        self._run_preview()

    def _run_preview(self):
        if not self.session.document.is_renderable:
            print("  Nothing to run: sketch.js is empty.")
            return
        print("  Loading sketch...")
        self.loop.run_until_complete(self.session.run())
        url = self.session.preview.url
        print(f"  Running: {url}")
        if not self.open_browser:
            return
        if self._browser_opened:
            print("  Reload the preview tab to see it.")
        else:
            webbrowser.open(url)
            self._browser_opened = True

    def _show_status(self):
        state = self.session.preview_state
        label = {
            PreviewState.STOPPED: "Stopped",
            PreviewState.LOADING: "Loading...",
            PreviewState.RUNNING: "Running",
        }[state]
        print(f"  Preview: {label}")
        print(f"  Tab: {self.session.active_tab.filename}")
        if state is PreviewState.RUNNING and self.session.has_unapplied_changes:
            print("  Unapplied changes. /run to apply.")
        if self.session.sketch_id:
            print(f"  Saved as {self.session.sketch_id}: {self.client.view_url(self.session.sketch_id)}")

    def _show_embed(self, tokens: list[str]):
        try:
            changes = parse_embed_changes(tokens)
        except ValueError as e:
            print(f"  {e}")
            return
        if changes:
            self.session.set_embed_options(**changes)
        print(self.session.embed_code)

    def _save(self):
        try:
            result = self.session.save(self.client)
        except SketchApiError as e:
            print(f"  Failed to save sketch: {e}")
            return
        self.config.last_sketch_id = result["id"]
        print(f"  Saved {result['id']}")
        print(f"  Embed: {self.client.api_url}{result['embedUrl']}")
        print(f"  View:  {self.client.api_url}{result['viewUrl']}")

    def _load_demo(self, name: str):
        try:
            document = self.client.load_demo_sketch(name)
        except SketchApiError as e:
            print(f"  {e}")
            return
        self.session.replace_document(document)
        print(f"  Loaded demo {name}.")
        self._run_preview()

    def _list_demos(self):
        try:
            names = self.client.list_demos()
        except SketchApiError as e:
            print(f"  Failed to list demos: {e}")
            return
        if not names:
            print("  No demos available.")
            return
        print("  Demos:")
        for name in names:
            print(f"    {name}")

    def _open_sketch(self, sketch_id: str):
        try:
            document = self.client.fetch_document(sketch_id)
        except SketchApiError as e:
            print(f"  Failed to load sketch: {e}")
            return
        self.session.replace_document(document, sketch_id=sketch_id)
        self.session.share_base_url = self.client.api_url
        print(f"  Opened {document.title or sketch_id}.")
        self._run_preview()

    def _show_help(self):
        """Show help message."""
        print("""
  REPL Commands:
    /tab js|html|css   - Switch the active source tab
    /show              - Print the active tab's text
    /load <file>       - Replace the active tab's text with a file
    /import <file>     - Replace the sketch with exported JSON
    /run               - Run the sketch (or apply changes)
    /stop              - Stop the sketch
    /status            - Show preview state
    /embed [k=v ...]   - Show embed code (width, height, code, responsive, autoplay)
    /save              - Save the sketch to the server
    /demo [name]       - List demos, or load one
    /open <id>         - Open a saved sketch
    /help              - Show this help
    /quit              - Exit REPL
""")
