from __future__ import annotations

"""
Unit tests for the Output Emission Component.
"""

import io
from pathlib import Path

from gotracer.core.pipeline.components.writer import emit_source


def test_dry_run_writes_stream_only(tmp_path: Path) -> None:
    target = tmp_path / "main.go"
    target.write_text("original", encoding="utf-8")
    stream = io.StringIO()

    written = emit_source(str(target), "new text", dry_run=True, stream=stream)

    assert written is False
    assert stream.getvalue() == "new text"
    assert target.read_text(encoding="utf-8") == "original"


def test_dry_run_defaults_to_stdout(tmp_path: Path, capsys) -> None:
    emit_source(str(tmp_path / "main.go"), "to stdout", dry_run=True)

    assert capsys.readouterr().out == "to stdout"


def test_live_atomic_rewrites_file(tmp_path: Path) -> None:
    target = tmp_path / "main.go"
    target.write_text("original", encoding="utf-8")

    assert emit_source(str(target), "new text", dry_run=False) is True
    assert target.read_text(encoding="utf-8") == "new text"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["main.go"]


def test_live_overwrite_rewrites_file(tmp_path: Path) -> None:
    target = tmp_path / "main.go"
    target.write_text("a much longer original content", encoding="utf-8")

    assert emit_source(str(target), "short", dry_run=False, atomic=False) is True
    assert target.read_text(encoding="utf-8") == "short"
