"""Props built inline on every render (no-inline-objects, no-inline-functions)."""

from vertex_lint.domain.classifiers import NodeClassifier
from vertex_lint.domain.entities import Diagnostic
from vertex_lint.domain.nodes import Node
from vertex_lint.domain.rules import BaseDetector


class InlinePropDetector(BaseDetector):
    """Reports on the prop's expression; subclasses pick which literal kind counts."""

    def visit_jsxattribute(self, node: Node) -> list[Diagnostic]:
        if not NodeClassifier.is_valid_jsx_attribute(node) or NodeClassifier.is_variable_reference(node):
            return []
        if not self._matches(node):
            return []
        expression = NodeClassifier.get_prop_value(node)
        if expression is None:
            return []
        opening = node.parent
        data = {
            "propName": NodeClassifier.get_attribute_name(node) or "unknown",
            "elementName": (
                NodeClassifier.get_jsx_element_name(opening) if opening is not None else None
            ) or "unknown",
        }
        return [self.report(self.message_ids[0], expression, data)]

    def _matches(self, attr: Node) -> bool:
        raise NotImplementedError


class InlineObjectDetector(InlinePropDetector):
    rule_id = "no-inline-objects"
    description = "Disallow object literals passed directly as JSX props."
    message_ids = ("noInlineObject",)

    def _matches(self, attr: Node) -> bool:
        return NodeClassifier.is_inline_object(attr)


class InlineFunctionDetector(InlinePropDetector):
    rule_id = "no-inline-functions"
    description = "Disallow arrow or function expressions passed directly as JSX props."
    message_ids = ("noInlineFunction",)

    def _matches(self, attr: Node) -> bool:
        return NodeClassifier.is_inline_function(attr)
