"""Boolean variable naming (boolean-naming-convention)."""

from typing import ClassVar

from vertex_lint.domain.classifiers import NodeClassifier
from vertex_lint.domain.entities import Diagnostic
from vertex_lint.domain.nodes import Node, NodeType
from vertex_lint.domain.rules import BaseDetector, FileContext


class BooleanNamingDetector(BaseDetector):
    """
    Variables bound to a boolean literal or a ``!`` negation must read as a predicate.

    A name passes when it is in the allowed names, or when it starts with an
    allowed prefix followed by an uppercase letter, a digit, ``_`` or ``$``
    (``isOpen`` passes, ``island`` does not). The ``allowed_names`` and
    ``allowed_prefixes`` options extend the built-in lists.
    """

    rule_id = "boolean-naming-convention"
    description = "Boolean variables should start with a predicate prefix such as is/has/should."
    message_ids = ("booleanNaming",)

    DEFAULT_PREFIXES: ClassVar[tuple[str, ...]] = (
        "is", "has", "should", "can", "will", "show", "hide", "open", "close", "with", "as",
    )
    DEFAULT_NAMES: ClassVar[frozenset[str]] = frozenset(
        {"open", "close", "visible", "hidden", "loading", "disabled", "checked", "selected"}
    )

    def __init__(self, context: FileContext) -> None:
        super().__init__(context)
        self._names = self.DEFAULT_NAMES | set(self.option_list("allowed_names"))
        extra = [p for p in self.option_list("allowed_prefixes") if p not in self.DEFAULT_PREFIXES]
        self._prefixes = (*self.DEFAULT_PREFIXES, *extra)

    def visit_variabledeclarator(self, node: Node) -> list[Diagnostic]:
        ident = node.get("id")
        if ident is None or ident.type != NodeType.IDENTIFIER:
            return []
        if not NodeClassifier.is_boolean_initializer(node):
            return []
        name = str(ident.name)
        if self.is_allowed(name):
            return []
        return [self.report("booleanNaming", ident, {"name": name})]

    def is_allowed(self, name: str) -> bool:
        if name in self._names:
            return True
        return any(self._has_prefix(name, prefix) for prefix in self._prefixes)

    @staticmethod
    def _has_prefix(name: str, prefix: str) -> bool:
        if not prefix or len(name) <= len(prefix) or not name.startswith(prefix):
            return False
        boundary = name[len(prefix)]
        return boundary.isupper() or boundary.isdigit() or boundary in "_$"
