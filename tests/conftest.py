from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared Go source samples and trace settings.
3. Teardown of the logging infrastructure installed by CLI tests.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from gotracer.domain.trace_models import TraceSettings  # noqa: E402
from gotracer.infra.logging import shutdown_logging  # noqa: E402

# -----------------------------------------------------------------------------
# Go Samples
# -----------------------------------------------------------------------------
ADD_SOURCE = "package main\n\nfunc Add(a int, b int) (sum int) { sum = a + b; return }\n"

SERVICE_SOURCE = """// Package service is a sample.
package service

import (
\t"errors"
\t"fmt"
)

// Limit caps the retries.
const Limit = 3

type Server struct {
\tname string
}

// Start boots the server.
func (s *Server) Start(port int, _ bool) error {
\tif port <= 0 {
\t\treturn errors.New("bad port")
\t}
\tfmt.Println(s.name, port)
\treturn nil
}

func Divide(x, y float64) (q float64, err error) {
\tif y == 0 {
\t\terr = errors.New("division by zero")
\t\treturn
\t}
\tq = x / y
\treturn
}

func noop() {}
"""


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def trace_settings() -> TraceSettings:
    """Default trace synthesis settings."""
    return TraceSettings()


@pytest.fixture
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing a Go file below tmp_path."""
    def _write(rel_path: str, content: str) -> Path:
        target = tmp_path / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target
    return _write


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Detach any handler installed by configure_logging during a test."""
    yield
    shutdown_logging()


@pytest.fixture
def add_source() -> str:
    """Single-line function with two parameters and a named result."""
    return ADD_SOURCE


@pytest.fixture
def service_source() -> str:
    """File with imports, a method, multi-name groups and a blank parameter."""
    return SERVICE_SOURCE
