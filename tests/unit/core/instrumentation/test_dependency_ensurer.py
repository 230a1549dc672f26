from __future__ import annotations

"""
Unit tests for the Dependency Ensurer.

Verifies every starting import state: none, a parenthesized block, a single
unparenthesized import, an aliased import and an already present one.
"""

import pytest

from gotracer.core.instrumentation.imports import ensure_import, has_import
from gotracer.core.parsing.tree_provider import parse_source, serialize_tree
from gotracer.domain.constants import LOGGER_IMPORT_PATH

LOGRUS = LOGGER_IMPORT_PATH


def _parse(src: str):
    return parse_source(src.encode("utf-8"), "main.go")


def test_no_imports_creates_block() -> None:
    tree = _parse("package main\n\nfunc f() {}\n")

    assert ensure_import(tree, LOGRUS) is True
    assert serialize_tree(tree) == (
        "package main\n\n"
        "import (\n"
        '\t"github.com/sirupsen/logrus"\n'
        ")\n\n"
        "func f() {}\n"
    )


def test_parenthesized_block_gets_appended_spec(service_source: str) -> None:
    tree = _parse(service_source)

    assert ensure_import(tree, LOGRUS) is True
    out = serialize_tree(tree)

    assert (
        'import (\n\t"errors"\n\t"fmt"\n\t"github.com/sirupsen/logrus"\n)\n'
    ) in out
    assert out.count("import") == 1


def test_single_import_becomes_block() -> None:
    tree = _parse('package main\n\nimport "fmt"\n\nfunc f() {}\n')

    assert ensure_import(tree, LOGRUS) is True
    assert serialize_tree(tree) == (
        "package main\n\n"
        'import (\n\t"fmt"\n\t"github.com/sirupsen/logrus"\n)\n\n'
        "func f() {}\n"
    )


def test_only_first_import_declaration_is_extended() -> None:
    src = 'package main\n\nimport "fmt"\nimport "os"\n\nfunc f() {}\n'
    tree = _parse(src)

    ensure_import(tree, LOGRUS)
    first, second = tree.imports
    assert [s.path for s in first.specs] == ["fmt", LOGRUS]
    assert [s.path for s in second.specs] == ["os"]


def test_already_imported_is_untouched() -> None:
    src = 'package main\n\nimport (\n\t"github.com/sirupsen/logrus"\n)\n\nfunc f() {}\n'
    tree = _parse(src)

    assert has_import(tree, LOGRUS) is True
    assert ensure_import(tree, LOGRUS) is False
    assert serialize_tree(tree) == src


def test_aliased_import_does_not_count() -> None:
    src = 'package main\n\nimport (\n\tlog "github.com/sirupsen/logrus"\n)\n\nfunc f() {}\n'
    tree = _parse(src)

    assert has_import(tree, LOGRUS) is False
    assert ensure_import(tree, LOGRUS) is True
    assert [(s.name, s.path) for s in tree.imports[0].specs] == [
        ("log", LOGRUS),
        (None, LOGRUS),
    ]


@pytest.mark.parametrize("src", [
    "package main\n\nfunc f() {}\n",
    'package main\n\nimport "fmt"\n\nfunc f() {}\n',
    'package main\n\nimport (\n\t"fmt"\n)\n\nfunc f() {}\n',
])
def test_repeated_calls_add_one_spec(src: str) -> None:
    tree = _parse(src)

    assert ensure_import(tree, LOGRUS) is True
    assert ensure_import(tree, LOGRUS) is False

    specs = [s for d in tree.imports for s in d.specs if s.path == LOGRUS]
    assert len(specs) == 1
    assert serialize_tree(tree).count('"github.com/sirupsen/logrus"') == 1

# -----------------------------------------------------------------------------
# CGO
# -----------------------------------------------------------------------------

CGO_SOURCE = (
    "package main\n\n"
    "// #include <stdlib.h>\n"
    'import "C"\n\n'
    "func F() { C.free(nil) }\n"
)


def test_cgo_import_is_never_extended() -> None:
    """The preamble comment must stay attached to a lone import "C"."""
    tree = _parse(CGO_SOURCE)

    assert ensure_import(tree, LOGRUS) is True
    assert serialize_tree(tree) == (
        "package main\n\n"
        'import (\n\t"github.com/sirupsen/logrus"\n)\n\n'
        "// #include <stdlib.h>\n"
        'import "C"\n\n'
        "func F() { C.free(nil) }\n"
    )


def test_cgo_import_skipped_for_next_declaration() -> None:
    src = (
        "package main\n\n"
        "// #include <stdlib.h>\n"
        'import "C"\n\n'
        'import "fmt"\n\n'
        "func F() {}\n"
    )
    tree = _parse(src)

    ensure_import(tree, LOGRUS)
    cgo, regular = tree.imports
    assert [s.path for s in cgo.specs] == ["C"]
    assert [s.path for s in regular.specs] == ["fmt", LOGRUS]
    assert '// #include <stdlib.h>\nimport "C"\n' in serialize_tree(tree)
