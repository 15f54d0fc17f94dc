"""One component definition per file (one-component-per-file)."""

from vertex_lint.domain.classifiers import NodeClassifier
from vertex_lint.domain.entities import Diagnostic
from vertex_lint.domain.nodes import Node, NodeType
from vertex_lint.domain.rules import BaseDetector, FileContext


class OneComponentPerFileDetector(BaseDetector):
    """
    Collects component definitions and compound children, reports at end of file.

    ``Card.Header = CardHeader`` marks CardHeader as a compound child; compound
    children do not count. With more than one remaining definition, a single
    diagnostic lands on the second one.
    """

    rule_id = "one-component-per-file"
    description = "Allow one component per file, except explicit compound components."
    message_ids = ("multipleComponents",)

    def __init__(self, context: FileContext) -> None:
        super().__init__(context)
        self._components: list[tuple[str, Node]] = []
        self._compound_children: set[str] = set()

    def visit_functiondeclaration(self, node: Node) -> list[Diagnostic]:
        return self._collect(node)

    def visit_variabledeclarator(self, node: Node) -> list[Diagnostic]:
        return self._collect(node)

    def visit_classdeclaration(self, node: Node) -> list[Diagnostic]:
        return self._collect(node)

    def visit_assignmentexpression(self, node: Node) -> list[Diagnostic]:
        left, right = node.left, node.right
        if (
            left.type == NodeType.MEMBER_EXPRESSION
            and left.object.type == NodeType.IDENTIFIER
            and left.property.type == NodeType.IDENTIFIER
            and right.type == NodeType.IDENTIFIER
        ):
            self._compound_children.add(str(right.name))
        return []

    def _collect(self, node: Node) -> list[Diagnostic]:
        if NodeClassifier.is_component(node):
            name = NodeClassifier.definition_name(node) or "anonymous"
            self._components.append((name, node))
        return []

    def leave_program(self, program: Node) -> list[Diagnostic]:
        remaining = [(name, node) for name, node in self._components
                     if name not in self._compound_children]
        if len(remaining) <= 1:
            return []
        names = ", ".join(name for name, _ in remaining)
        return [
            self.report(
                "multipleComponents",
                remaining[1][1],
                {"count": len(remaining), "componentNames": names},
            )
        ]
