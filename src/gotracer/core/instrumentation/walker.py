from __future__ import annotations

"""
Declaration Walker.

Single top-down traversal of the concrete syntax tree, in document order.
Each node is dispatched to a 'visit_<kind>' method of the visitor when one
exists; nodes without a handler are only descended into.
"""

from typing import Any, Callable, List, Optional

from tree_sitter import Node


class DeclarationWalker:
    """
    Dispatching pre-order walker.

    The traversal uses an explicit stack so deeply nested sources cannot
    exhaust the interpreter recursion limit.

    Args:
        visitor: Object exposing 'visit_<node kind>' methods.
    """

    def __init__(self, visitor: Any) -> None:
        self.visitor = visitor
        self.visited = 0

    def walk(self, root: Node) -> None:
        stack: List[Node] = [root]
        while stack:
            node = stack.pop()
            self.visited += 1
            handler = self._handler_for(node.type)
            if handler is not None:
                handler(node)
            stack.extend(reversed(node.children))

    def _handler_for(self, kind: str) -> Optional[Callable[[Node], None]]:
        return getattr(self.visitor, f"visit_{kind}", None)
