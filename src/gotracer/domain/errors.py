from __future__ import annotations

"""
Domain Error Hierarchy.

Separates recoverable per-file failures (parse and serialization problems)
from internal invariant violations that must stop the whole run.
"""


class GoTracerError(Exception):
    """Base class for every error raised by the instrumentation tool."""


class ConfigError(GoTracerError):
    """The provided configuration source cannot be used."""


class ParseError(GoTracerError):
    """
    A candidate file could not be turned into a syntax tree.

    Attributes:
        path: Source file identifier.
        reason: Human readable description of the failure.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class SerializationError(GoTracerError):
    """A mutated syntax tree could not be turned back into source text."""


class SynthesisError(GoTracerError):
    """
    A synthesized trace fragment is not valid Go.

    Signals a defect in the synthesizer itself. The orchestrator never
    recovers from it: emitting broken source is worse than stopping.
    """

    def __init__(self, fragment: str, reason: str) -> None:
        super().__init__(f"invalid synthesized fragment {fragment!r}: {reason}")
        self.fragment = fragment
        self.reason = reason
