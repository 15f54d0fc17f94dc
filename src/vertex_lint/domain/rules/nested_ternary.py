"""Nested conditional expressions (no-nested-ternary)."""

from vertex_lint.domain.entities import Diagnostic
from vertex_lint.domain.nodes import Node, NodeType
from vertex_lint.domain.rules import BaseDetector


class NestedTernaryDetector(BaseDetector):
    """One diagnostic per nesting boundary, not per leaf."""

    rule_id = "no-nested-ternary"
    description = "Disallow conditional expressions nested in another conditional's branches."
    message_ids = ("noNestedTernary",)

    def visit_conditionalexpression(self, node: Node) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for branch in (node.get("consequent"), node.get("alternate")):
            if branch is not None and branch.type == NodeType.CONDITIONAL_EXPRESSION:
                diagnostics.append(self.report("noNestedTernary", branch))
        return diagnostics
