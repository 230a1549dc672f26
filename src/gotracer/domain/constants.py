from __future__ import annotations

"""
Domain Constants.

Centralizes the literals shared by the instrumentation core: the logging
package injected into Go sources, the trace markers embedded in every
message, and the Go syntax tokens the synthesizer relies on.
"""

from typing import List

# -----------------------------------------------------------------------------
# INJECTED LOGGING FACILITY
# -----------------------------------------------------------------------------

LOGGER_IMPORT_PATH = "github.com/sirupsen/logrus"
LOGGER_CALL = "logrus.Infof"

# -----------------------------------------------------------------------------
# TRACE MESSAGE FORMAT
# -----------------------------------------------------------------------------

CALL_MARKER = "CALL>>>"
RETURN_MARKER = "RET>>>"

# Verb used for every traced value (fields and struct names included)
VALUE_VERB = "%+v"

# -----------------------------------------------------------------------------
# GO SOURCE CONVENTIONS
# -----------------------------------------------------------------------------

GO_SOURCE_EXTENSIONS: List[str] = [".go"]
BLANK_IDENTIFIER = "_"
GO_INDENT = "\t"
CGO_PSEUDO_PACKAGE = "C"
