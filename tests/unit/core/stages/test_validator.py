from __future__ import annotations

"""
Unit tests for the Configuration Validator.

Verifies:
1. Type coercion (String to Bool/List).
2. Default value injection.
3. Path splitting.
4. Domain checks on extensions, patterns and the trace callee.
5. Strict mode validation.
"""

import pytest

from gotracer.core.pipeline.stages.validator import validate_config


def test_validate_none_returns_defaults() -> None:
    """Passing None should return the full default configuration."""
    cfg, warnings = validate_config(None)

    assert cfg["dry_run"] is True
    assert cfg["atomic_write"] is True
    assert cfg["extensions"] == [".go"]
    assert cfg["paths"] == []
    assert len(warnings) > 0


def test_validate_empty_dict_returns_defaults() -> None:
    cfg, warnings = validate_config({})

    assert cfg["logger_call"] == "logrus.Infof"
    assert cfg["logger_import_path"] == "github.com/sirupsen/logrus"
    assert cfg["capture_results_at_exit"] is True
    assert cfg["skip_instrumented"] is False
    assert warnings == []


def test_validate_converts_strings_to_bools() -> None:
    raw = {
        "dry_run": "false",
        "atomic_write": "0",
        "capture_results_at_exit": "no",
        "skip_instrumented": "yes",
    }
    cfg, warnings = validate_config(raw)

    assert cfg["dry_run"] is False
    assert cfg["atomic_write"] is False
    assert cfg["capture_results_at_exit"] is False
    assert cfg["skip_instrumented"] is True
    assert len(warnings) == 4


def test_validate_splits_space_separated_paths() -> None:
    cfg, _ = validate_config({"paths": "a.go  pkg/ cmd"})
    assert cfg["paths"] == ["a.go", "pkg/", "cmd"]

    cfg, _ = validate_config({"paths": ["a.go b.go", "c"]})
    assert cfg["paths"] == ["a.go", "b.go", "c"]


def test_validate_drops_bad_path_items() -> None:
    cfg, warnings = validate_config({"paths": ["a.go", 3]})

    assert cfg["paths"] == ["a.go"]
    assert any("paths[1]" in w for w in warnings)


def test_validate_csv_extensions_get_dot_prefix() -> None:
    cfg, warnings = validate_config({"extensions": "go, .gox"})

    assert cfg["extensions"] == [".go", ".gox"]
    assert any("corrected" in w for w in warnings)


def test_validate_discards_invalid_patterns() -> None:
    cfg, warnings = validate_config({"exclude_patterns": ["^vendor$", "(broken"]})

    assert cfg["exclude_patterns"] == ["^vendor$"]
    assert any("(broken" in w for w in warnings)


@pytest.mark.parametrize("callee", ["log.Printf", "Tracef", "glog.Info"])
def test_validate_accepts_go_callees(callee: str) -> None:
    cfg, warnings = validate_config({"logger_call": callee})
    assert cfg["logger_call"] == callee
    assert warnings == []


@pytest.mark.parametrize("callee", ["logrus.Infof(", "a.b.c", "1abc", "fmt Printf"])
def test_validate_rejects_bad_callees(callee: str) -> None:
    cfg, warnings = validate_config({"logger_call": callee})
    assert cfg["logger_call"] == "logrus.Infof"
    assert any("logger_call" in w for w in warnings)


def test_validate_blank_string_falls_back() -> None:
    cfg, _ = validate_config({"call_marker": "   "})
    assert cfg["call_marker"] == "CALL>>>"


def test_validate_strict_mode_raises() -> None:
    with pytest.raises(TypeError):
        validate_config({"dry_run": "maybe"}, strict=True)
    with pytest.raises(TypeError):
        validate_config("not a dict", strict=True)
    with pytest.raises(ValueError):
        validate_config({"logger_call": "x.y("}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"extensions": ["go"]}, strict=True)
