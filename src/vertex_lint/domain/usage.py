"""Lexical usage checks for bound names."""

from vertex_lint.domain.nodes import Node, NodeType
from vertex_lint.domain.walker import TreeWalker


class UsageAnalyzer:
    """
    Answers "is this name referenced inside that subtree?".

    This is an occurrence check, not scope resolution: an inner declaration
    that shadows the name counts as a reference to it. Callers that care
    about shadowing must not rely on it.
    """

    @staticmethod
    def references(block: Node, name: str) -> list[Node]:
        """Identifier nodes named ``name`` under block, in walk order."""
        try:
            return [
                node
                for node in TreeWalker.iter_nodes(block)
                if node.type == NodeType.IDENTIFIER and node.get("name") == name
            ]
        except Exception:
            return []

    @staticmethod
    def is_bound(block: Node | None, name: str) -> bool:
        """True when an identifier called ``name`` occurs anywhere inside block."""
        if block is None or not name:
            return False
        try:
            for node in TreeWalker.iter_nodes(block):
                if node.type == NodeType.IDENTIFIER and node.get("name") == name:
                    return True
            return False
        except Exception:
            return False
