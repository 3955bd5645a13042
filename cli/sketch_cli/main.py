"""Main entry point for the sketch CLI."""
from __future__ import annotations

import json
import logging
import os
import sys
import webbrowser
from pathlib import Path

from engine.kernel.importer import SketchImportError, parse_sketch_json
from engine.kernel.preview import render_preview
from engine.kernel.sketch import EmbedOptions
from sketch_cli import __version__
from sketch_cli.client import SketchApiClient, SketchApiError
from sketch_cli.config import Config
from sketch_cli.editor import EditorSession, load_initial_sketch
from sketch_cli.preview import FilePreviewResources, PreviewController
from sketch_cli.repl import Repl
from sketch_cli.storage import LocalStorage

COMMANDS = ("save", "get", "embed", "preview")


def print_help():
    """Print help message."""
    print(f"""
p5sketch v{__version__}

Usage:
  p5sketch [options] [command]

Commands:
  save FILE         Save an exported sketch JSON file to the server
  get ID            Print a stored sketch as JSON
  embed ID          Print the embed snippet for a stored sketch
  preview [FILE]    Open a preview of FILE (or --sketch/--demo) in the browser
  (none)            Start the interactive editor

Options:
  --api-url URL     Override API endpoint (default: http://localhost:3000)
  --sketch ID       Start from a stored sketch
  --demo NAME       Start from a demo sketch
  --width W         Embed width (default: 100%)
  --height H        Embed height (default: 400px)
  --show-code       Include the code listing in the embed
  --no-responsive   Leave out the responsive stylesheet
  --no-autoplay     Mark the embed as not autoplaying
  --no-browser      Do not open a browser
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  SKETCH_API_URL    Override API endpoint (same as --api-url)
  SKETCH_LOG_LEVEL  Logging level (default: WARNING)
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (save, get, embed, preview, None for REPL)
        target: str | None (file or sketch id for the command)
        api_url, sketch_id, demo: str | None
        width, height: str
        show_code, responsive, autoplay, open_browser: bool
        show_help, show_version: bool
    """
    result = {
        "command": None,
        "target": None,
        "api_url": None,
        "sketch_id": None,
        "demo": None,
        "width": "100%",
        "height": "400px",
        "show_code": False,
        "responsive": True,
        "autoplay": True,
        "open_browser": True,
        "show_help": False,
        "show_version": False,
    }
    valued = {
        "--api-url": "api_url",
        "--sketch": "sketch_id",
        "--demo": "demo",
        "--width": "width",
        "--height": "height",
    }
    switches = {
        "--show-code": ("show_code", True),
        "--no-responsive": ("responsive", False),
        "--no-autoplay": ("autoplay", False),
        "--no-browser": ("open_browser", False),
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in valued:
            if i + 1 < len(args):
                result[valued[arg]] = args[i + 1]
                i += 1
            else:
                print(f"Error: {arg} requires a value")
                sys.exit(1)
        elif arg in switches:
            key, value = switches[arg]
            result[key] = value
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'p5sketch --help' for usage.")
            sys.exit(1)
        elif result["command"] is None and arg in COMMANDS:
            result["command"] = arg
        elif result["command"] is not None and result["target"] is None:
            result["target"] = arg
        else:
            print(f"Unknown command: {arg}")
            print("Run 'p5sketch --help' for usage.")
            sys.exit(1)

        i += 1

    if result["command"] in ("save", "get", "embed") and not result["target"]:
        print(f"Error: {result['command']} requires an argument")
        sys.exit(1)

    return result


def _read_sketch_file(path: str):
    text = Path(path).expanduser().read_text(encoding="utf-8")
    return parse_sketch_json(text)


def cmd_save(client: SketchApiClient, config: Config, path: str) -> bool:
    try:
        document = _read_sketch_file(path)
    except (OSError, SketchImportError) as e:
        print(f"Error: {e}")
        return False
    try:
        result = client.save_sketch(document)
    except SketchApiError as e:
        print(f"Failed to save sketch: {e}")
        return False
    config.last_sketch_id = result["id"]
    print(f"id:    {result['id']}")
    print(f"embed: {client.api_url}{result['embedUrl']}")
    print(f"view:  {client.api_url}{result['viewUrl']}")
    return True


def cmd_get(client: SketchApiClient, sketch_id: str) -> bool:
    try:
        sketch = client.get_sketch_by_id(sketch_id)
    except SketchApiError as e:
        print(f"Failed to fetch sketch: {e}")
        return False
    print(json.dumps(sketch, indent=2))
    return True


def cmd_embed(client: SketchApiClient, sketch_id: str, options: EmbedOptions) -> bool:
    try:
        print(client.get_embed_code(sketch_id, options))
    except SketchApiError as e:
        print(f"Failed to get embed code: {e}")
        return False
    return True


def cmd_preview(client: SketchApiClient, config: Config, storage: LocalStorage, args: dict) -> bool:
    """Write the preview page to the config dir and open it. Each call overwrites the last page."""
    if args["target"]:
        try:
            document = _read_sketch_file(args["target"])
        except (OSError, SketchImportError) as e:
            print(f"Error: {e}")
            return False
    else:
        document, source = load_initial_sketch(client, storage, sketch_id=args["sketch_id"], demo=args["demo"])
        print(f"Previewing {source}")

    url = FilePreviewResources(config.preview_dir).create(render_preview(document))
    print(url)
    if args["open_browser"]:
        webbrowser.open(url)
    return True


def start_editor(client: SketchApiClient, config: Config, storage: LocalStorage, args: dict):
    document, source = load_initial_sketch(client, storage, sketch_id=args["sketch_id"], demo=args["demo"])
    resources = FilePreviewResources()
    session = EditorSession(document, preview=PreviewController(resources), storage=storage)
    if source.startswith("sketch "):
        session.sketch_id = args["sketch_id"]
        session.share_base_url = client.api_url

    repl = Repl(config, session, client, open_browser=args["open_browser"])
    try:
        repl.start()
    finally:
        resources.cleanup()


def main():
    """Main entry point."""
    logging.basicConfig(level=os.environ.get("SKETCH_LOG_LEVEL", "WARNING").upper())
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"p5sketch {__version__}")
        return

    config = Config(api_url_override=args["api_url"])
    storage = LocalStorage(config.storage_file)
    client = SketchApiClient(config.api_url)

    if args["command"] is None:
        start_editor(client, config, storage, args)
        return

    try:
        if args["command"] == "save":
            ok = cmd_save(client, config, args["target"])
        elif args["command"] == "get":
            ok = cmd_get(client, args["target"])
        elif args["command"] == "embed":
            options = EmbedOptions(
                width=args["width"],
                height=args["height"],
                show_code=args["show_code"],
                responsive=args["responsive"],
                autoplay=args["autoplay"],
            )
            ok = cmd_embed(client, args["target"], options)
        else:
            ok = cmd_preview(client, config, storage, args)
    finally:
        client.close()

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
