"""Drive the interactive editor with scripted input."""

from __future__ import annotations

import json

import pytest

from engine.kernel.preview import PreviewState
from sketch_cli.config import Config
from sketch_cli.editor import EditorSession
from sketch_cli.preview import MemoryPreviewResources, PreviewController
from sketch_cli.repl import Repl


@pytest.fixture
def make_repl(tmp_path, client, document, storage):
    def _make(lines):
        feed = iter(lines)

        def fake_input(prompt=""):
            try:
                return next(feed)
            except StopIteration:
                raise EOFError from None

        preview = PreviewController(MemoryPreviewResources(), loading_delay=0)
        session = EditorSession(document.copy(), preview=preview, storage=storage)
        repl = Repl(Config(config_dir=tmp_path / "cfg"), session, client, open_browser=False)
        return repl, fake_input

    return _make


def test_starts_running_and_quits(make_repl, monkeypatch, capsys):
    repl, fake_input = make_repl(["/status", "/quit"])
    monkeypatch.setattr("builtins.input", fake_input)
    repl.start()
    out = capsys.readouterr().out
    assert "Running: preview:" in out
    assert "Preview: Running" in out
    assert "Goodbye." in out


def test_edit_import_and_embed(make_repl, monkeypatch, capsys, tmp_path):
    exported = tmp_path / "sketch.json"
    exported.write_text(json.dumps({"js": "let a = 1 < 2;", "css": "", "html": ""}))
    repl, fake_input = make_repl([f"/import {exported}", "/tab js", "/show", "/embed code=on responsive=off", "/stop"])
    monkeypatch.setattr("builtins.input", fake_input)
    session = repl.session
    repl.start()
    out = capsys.readouterr().out
    assert "let a = 1 < 2;" in out
    assert "let a = 1 &lt; 2;" in out
    assert session.embed_options.show_code is True
    assert session.preview.rendered.js == "let a = 1 < 2;"
    assert session.preview_state is PreviewState.STOPPED


def test_bad_import_reports_error(make_repl, monkeypatch, capsys, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"css": ""}')
    repl, fake_input = make_repl([f"/import {bad}"])
    monkeypatch.setattr("builtins.input", fake_input)
    before = repl.session.document.copy()
    repl.start()
    assert "Invalid JSON format or missing keys" in capsys.readouterr().out
    assert repl.session.document == before


def test_save_remembers_id(make_repl, monkeypatch, capsys, tmp_path):
    repl, fake_input = make_repl(["/save"])
    monkeypatch.setattr("builtins.input", fake_input)
    repl.start()
    assert "Saved id1" in capsys.readouterr().out
    assert Config(config_dir=tmp_path / "cfg").last_sketch_id == "id1"
