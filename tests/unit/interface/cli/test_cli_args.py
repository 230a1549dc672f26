from __future__ import annotations

"""
Unit tests for CLI argument parsing and override mapping.
"""

import pytest

from gotracer.interface.cli.args import args_to_overrides, build_parser


def _overrides(argv):
    return args_to_overrides(build_parser().parse_args(argv))


def test_no_arguments_yield_no_overrides() -> None:
    assert _overrides([]) == {}


def test_paths_accept_multiple_and_space_separated_values() -> None:
    assert _overrides(["--paths", "a.go", "pkg cmd"]) == {"paths": ["a.go", "pkg", "cmd"]}


@pytest.mark.parametrize("argv, expected", [
    (["--dry"], True),
    (["--dry=false"], False),
    (["--dry", "true"], True),
    (["--dry=0"], False),
])
def test_dry_flag_values(argv, expected) -> None:
    assert _overrides(argv)["dry_run"] is expected


def test_dry_flag_rejects_garbage() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--dry=maybe"])


def test_behavior_switches() -> None:
    overrides = _overrides(["--no-atomic", "--skip-instrumented", "--no-capture-results"])

    assert overrides == {
        "atomic_write": False,
        "skip_instrumented": True,
        "capture_results_at_exit": False,
    }


def test_csv_options() -> None:
    overrides = _overrides(["--ext", ".go, .gox", "--exclude", "^vendor$,^testdata$"])

    assert overrides["extensions"] == [".go", ".gox"]
    assert overrides["exclude_patterns"] == ["^vendor$", "^testdata$"]


def test_diagnostic_options_are_not_overrides() -> None:
    args = build_parser().parse_args(["--debug", "--log-file", "run.log", "--config", "c.json"])

    assert args.debug is True
    assert args.log_file == "run.log"
    assert args.config_file == "c.json"
    assert args_to_overrides(args) == {}
