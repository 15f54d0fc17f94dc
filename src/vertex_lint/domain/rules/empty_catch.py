"""Empty catch handlers and unused catch parameters (no-empty-catch)."""

import re

from vertex_lint.domain.classifiers import NodeClassifier
from vertex_lint.domain.entities import Diagnostic, FixPlan
from vertex_lint.domain.nodes import Node, NodeType
from vertex_lint.domain.rules import BaseDetector, FileContext
from vertex_lint.domain.usage import UsageAnalyzer

DEFAULT_IGNORE_MARKER = "intentionally ignored"


class EmptyCatchDetector(BaseDetector):
    """
    Flags catch clauses that silently drop errors.

    An empty body gets ``emptyCatch`` and a fix that writes the ignore marker
    as a block comment just inside the braces, so the fixed clause carries a
    recognized marker and is not reported again. A non-empty body whose
    Identifier parameter is never referenced gets ``unusedParam`` with no fix.
    A marker comment anywhere in the clause silences both.
    """

    rule_id = "no-empty-catch"
    description = "Disallow empty catch blocks and unused catch parameters."
    message_ids = ("emptyCatch", "unusedParam")
    fix_type = "code"

    def __init__(self, context: FileContext) -> None:
        super().__init__(context)
        self._marker = self.option_str("ignore_comment_marker", DEFAULT_IGNORE_MARKER)
        patterns = list(NodeClassifier.IGNORE_COMMENT_PATTERNS)
        if not any(p.search(self._marker) for p in patterns):
            patterns.append(re.compile(re.escape(self._marker), re.IGNORECASE))
        self._patterns = tuple(patterns)

    def visit_catchclause(self, node: Node) -> list[Diagnostic]:
        if NodeClassifier.has_intentional_ignore_comment(
            node, self.context.comments, self._patterns
        ):
            return []

        if NodeClassifier.is_effectively_empty(node):
            return [self.report("emptyCatch", node, plans=self._marker_plans(node))]

        param = node.get("param")
        if param is None or param.type != NodeType.IDENTIFIER:
            return []
        if UsageAnalyzer.is_bound(node.get("body"), str(param.name)):
            return []
        return [self.report("unusedParam", param, {"paramName": param.name})]

    def _marker_plans(self, node: Node) -> list[FixPlan] | None:
        body = node.get("body")
        if body is None or body.type != NodeType.BLOCK_STATEMENT:
            return None
        start, end = body.range
        # Need room for both braces; a marker containing the closer would end the comment early.
        if end - start < 2 or "*/" in self._marker:
            return None
        return [FixPlan.insert_text(start + 1, f" /* {self._marker} */ ")]
