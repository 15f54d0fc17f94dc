"""Visit-once traversal over the node graph."""

import logging
from collections.abc import Callable, Iterator

from vertex_lint.domain.nodes import Node

logger = logging.getLogger(__name__)


class TreeWalker:
    """
    Pre-order traversal following structural fields only.

    Every call owns a fresh identity set, so a node reachable through two
    fields (or through a cycle) is yielded once. The parent link is never
    followed.
    """

    @staticmethod
    def iter_nodes(root: Node) -> Iterator[Node]:
        """Yield each node reachable from root exactly once, in field/index order."""
        visited: set[int] = set()
        stack: list[Node] = [root]
        while stack:
            node = stack.pop()
            if id(node) in visited:
                continue
            visited.add(id(node))
            yield node
            children = list(node.iter_children())
            stack.extend(reversed(children))

    @staticmethod
    def walk(root: Node, visitor: Callable[[Node], object]) -> int:
        """
        Call visitor once per reachable node; return how many nodes were visited.

        The node is marked visited before the visitor runs. A visitor error
        ends that call only: traversal continues into the node's children and
        siblings.
        """
        count = 0
        for node in TreeWalker.iter_nodes(root):
            count += 1
            try:
                visitor(node)
            except Exception:
                logger.debug("Visitor failed on %r; continuing traversal", node, exc_info=True)
        return count

    @staticmethod
    def find_all(root: Node, node_type: str) -> list[Node]:
        """Return all nodes of the given tag under root (root included)."""
        return [n for n in TreeWalker.iter_nodes(root) if n.type == node_type]
