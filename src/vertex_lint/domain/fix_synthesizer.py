"""Turns FixPlans into validated, non-overlapping text edits."""

import logging
from collections.abc import Iterable

from vertex_lint.domain.entities import Fix, FixPlan, PlanType, TextEdit
from vertex_lint.domain.nodes import Node, NodeType
from vertex_lint.domain.transformation_contexts import (
    AddImportContext,
    CreateImportContext,
    InsertTextContext,
    ReplaceRangeContext,
    TypeAnnotationContext,
    WrapNodeContext,
)

logger = logging.getLogger(__name__)


class UnsafeFixError(Exception):
    """A plan's precondition does not hold; no edit may be produced."""


class FixSynthesizer:
    """
    Realizes FixPlans as a single Fix.

    Offsets come only from ranges already on nodes; no source text is
    scanned. Any failed precondition, or edits that overlap, yields None so
    the caller reports the diagnostic without an automatic fix.
    """

    PATTERN_PARAM_TYPES = frozenset(
        {NodeType.IDENTIFIER, NodeType.OBJECT_PATTERN, NodeType.ARRAY_PATTERN}
    )

    def synthesize(self, plans: Iterable[FixPlan] | None) -> Fix | None:
        if plans is None:
            return None
        try:
            edits: list[TextEdit] = []
            for plan in plans:
                edits.append(self._edit_for(plan))
            if not edits:
                return None
            return Fix.from_edits(edits)
        except (UnsafeFixError, ValueError) as exc:
            logger.debug("No fix synthesized: %s", exc)
            return None

    def _edit_for(self, plan: FixPlan) -> TextEdit:
        t = plan.plan_type
        if t == PlanType.INSERT_TEXT:
            return self._insert_text(plan.params)  # type: ignore[arg-type]
        if t == PlanType.REPLACE_RANGE:
            return self._replace_range(plan.params)  # type: ignore[arg-type]
        if t == PlanType.WRAP_NODE:
            return self._wrap_node(plan.params)  # type: ignore[arg-type]
        if t == PlanType.ADD_TYPE_ANNOTATION:
            return self._add_type_annotation(plan.params)  # type: ignore[arg-type]
        if t == PlanType.ADD_NAMED_IMPORT:
            return self._add_named_import(plan.params)  # type: ignore[arg-type]
        if t == PlanType.CREATE_IMPORT:
            return self._create_import(plan.params)  # type: ignore[arg-type]
        raise UnsafeFixError(f"Unknown plan type: {plan.plan_type}")

    @staticmethod
    def _require_range(node: Node | None) -> tuple[int, int]:
        if node is None:
            raise UnsafeFixError("Plan anchor is missing")
        start, end = node.range
        if end <= start:
            raise UnsafeFixError(f"{node.type} has no usable range")
        return start, end

    def _insert_text(self, params: InsertTextContext) -> TextEdit:
        if params["offset"] < 0:
            raise UnsafeFixError("Negative insertion offset")
        return TextEdit.insert(params["offset"], params["text"])

    def _replace_range(self, params: ReplaceRangeContext) -> TextEdit:
        self._require_range(params["target"])
        return TextEdit.replace(params["target"], params["text"])

    def _wrap_node(self, params: WrapNodeContext) -> TextEdit:
        target = params["target"]
        self._require_range(target)
        if target.type != NodeType.IDENTIFIER:
            raise UnsafeFixError("Only identifier references can be wrapped")
        return TextEdit.replace(target, f"{params['callee']}({target.name})")

    def _add_type_annotation(self, params: TypeAnnotationContext) -> TextEdit:
        target = params["target"]
        annotation = params["annotation"]
        container = params["container"]
        start, end = self._require_range(target)

        if target.type == NodeType.ASSIGNMENT_PATTERN:
            # `props = {}`: the annotation belongs to the left-hand side.
            return self._add_type_annotation(
                {"target": target.left, "annotation": annotation, "container": container}
            )
        if target.type not in self.PATTERN_PARAM_TYPES:
            raise UnsafeFixError(f"Cannot annotate a {target.type} parameter")
        if target.get("typeAnnotation") is not None:
            raise UnsafeFixError("Parameter already carries a type annotation")

        if container is not None and container.type == NodeType.ARROW_FUNCTION_EXPRESSION:
            params_list = container.get("params") or []
            if len(params_list) == 1 and target.type == NodeType.IDENTIFIER:
                if container.get("async"):
                    # `async x => ...` may or may not be parenthesized; ranges cannot tell.
                    raise UnsafeFixError("Cannot locate parentheses of an async arrow")
                if container.range[0] == start:
                    return TextEdit.replace(target, f"({target.name}: {annotation})")
        return TextEdit.insert(end, f": {annotation}")

    def _add_named_import(self, params: AddImportContext) -> TextEdit:
        _, end = self._require_range(params["anchor"])
        names = ", ".join(params["names"])
        if not names:
            raise UnsafeFixError("Nothing to import")
        text = f", {{ {names} }}" if params["wrap_in_braces"] else f", {names}"
        return TextEdit.insert(end, text)

    def _create_import(self, params: CreateImportContext) -> TextEdit:
        program = params["program"]
        if program is None:
            raise UnsafeFixError("Program node is missing")
        names = ", ".join(params["names"])
        if not names:
            raise UnsafeFixError("Nothing to import")
        keyword = "import type" if params["type_only"] else "import"
        return TextEdit.insert(
            program.range[0], f"{keyword} {{ {names} }} from '{params['module']}';\n")
