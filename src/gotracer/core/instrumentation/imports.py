from __future__ import annotations

"""
Dependency Ensurer.

Guarantees that the logging package is imported exactly once, without an
alias. The scan always precedes the mutation, so repeated calls on the same
tree never add a second entry.
"""

import logging

from gotracer.domain.constants import CGO_PSEUDO_PACKAGE
from gotracer.domain.syntax_models import ImportDecl, ImportSpec, SyntaxTree

logger = logging.getLogger(__name__)


def has_import(tree: SyntaxTree, import_path: str) -> bool:
    """Check for an unaliased import of the given package path."""
    return any(
        spec.path == import_path and spec.name is None
        for decl in tree.imports
        for spec in decl.specs
    )


def ensure_import(tree: SyntaxTree, import_path: str) -> bool:
    """
    Add the package import when it is missing.

    Appends a spec to the first import declaration, or prepends a new
    parenthesized declaration when none can be extended. A declaration holding
    the cgo pseudo-package is never extended: its preamble comment must stay
    attached to a lone `import "C"`.

    Args:
        tree: Syntax tree, mutated in place.
        import_path: Unquoted package path.

    Returns:
        bool: True if the tree was modified.
    """
    if has_import(tree, import_path):
        return False

    spec = ImportSpec(path=import_path)
    existing = [decl for decl in tree.imports if not _is_cgo(decl)]
    if existing:
        existing[0].specs.append(spec)
        logger.debug(f"{tree.path}: appended import {import_path}")
    else:
        tree.decls.insert(0, ImportDecl(specs=[spec], parenthesized=True))
        logger.debug(f"{tree.path}: created import block for {import_path}")
    return True


def _is_cgo(decl: ImportDecl) -> bool:
    return any(spec.path == CGO_PSEUDO_PACKAGE for spec in decl.specs)
