from __future__ import annotations

"""
Unit tests for the CLI application controller.

Verifies configuration resolution and exit code mapping.
"""

import json
import logging
from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest

from gotracer.domain.errors import SynthesisError
from gotracer.infra.logging import _QUEUE_LISTENER_ATTR, shutdown_logging
from gotracer.interface.cli.app import EXIT_INTERNAL_ERROR, EXIT_INTERRUPTED, EXIT_OK, EXIT_USAGE, main


@pytest.fixture(autouse=True)
def stop_cli_logging(capsys) -> Iterator[None]:
    """Stop the listener while the captured stderr it writes to is still open."""
    yield
    shutdown_logging()


def test_dump_config_prints_resolved_configuration(capsys) -> None:
    code = main(["--dump-config", "--paths", "a.go", "--dry=false"])

    assert code == EXIT_OK
    dumped = json.loads(capsys.readouterr().out)
    assert dumped["paths"] == ["a.go"]
    assert dumped["dry_run"] is False


def test_no_paths_is_a_usage_error(capsys) -> None:
    assert main([]) == EXIT_USAGE
    assert "usage: gotracer" in capsys.readouterr().err


def test_missing_config_file_is_a_usage_error(tmp_path: Path) -> None:
    assert main(["--config", str(tmp_path / "absent.json"), "--paths", "x.go"]) == EXIT_USAGE


def test_config_file_values_are_overridden_by_flags(tmp_path: Path, capsys) -> None:
    cfg_file = tmp_path / "cfg.json"
    cfg_file.write_text(json.dumps({"paths": ["from-file"], "dry_run": False}), encoding="utf-8")

    main(["--config", str(cfg_file), "--paths", "from-cli", "--dump-config"])

    dumped = json.loads(capsys.readouterr().out)
    assert dumped["paths"] == ["from-cli"]
    assert dumped["dry_run"] is False


def test_dry_run_prints_instrumented_source(write_go, add_source: str, capsys) -> None:
    target = write_go("main.go", add_source)

    assert main(["--paths", str(target)]) == EXIT_OK

    out = capsys.readouterr().out
    assert "CALL>>>" in out
    assert target.read_text(encoding="utf-8") == add_source


def test_parse_errors_keep_exit_code_zero(write_go) -> None:
    target = write_go("broken.go", "package main\n\nfunc Broken( {\n")

    assert main(["--paths", str(target)]) == EXIT_OK


def test_synthesis_error_is_internal_error(write_go, add_source: str) -> None:
    target = write_go("main.go", add_source)

    with patch("gotracer.interface.cli.app.run_pipeline", side_effect=SynthesisError("x(", "bad")):
        assert main(["--paths", str(target)]) == EXIT_INTERNAL_ERROR


def test_keyboard_interrupt_maps_to_130(write_go, add_source: str) -> None:
    target = write_go("main.go", add_source)

    with patch("gotracer.interface.cli.app.run_pipeline", side_effect=KeyboardInterrupt):
        assert main(["--paths", str(target)]) == EXIT_INTERRUPTED


def test_diagnostics_reach_captured_stderr(write_go, add_source: str, capsys) -> None:
    """Stopping the listener flushes every queued record into the open stream."""
    target = write_go("main.go", add_source)

    main(["--paths", str(target)])
    shutdown_logging()

    captured = capsys.readouterr()
    assert getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR) is None
    assert "Summary (dry run): 1 processed" in captured.err
    assert "CALL>>>" not in captured.err
