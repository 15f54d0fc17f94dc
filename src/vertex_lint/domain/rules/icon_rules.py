"""Icon component rules: one svg per file, currentColor paint, memoized export, svg props type."""

from collections.abc import Callable
from typing import ClassVar

from vertex_lint.domain.classifiers import NodeClassifier
from vertex_lint.domain.entities import Diagnostic, FixPlan
from vertex_lint.domain.imports import ImportAnalyzer, ImportStrategySelector, ImportTarget
from vertex_lint.domain.nodes import Node, NodeType
from vertex_lint.domain.rules import BaseDetector, FileContext
from vertex_lint.domain.walker import TreeWalker

REACT_MODULE = "react"
REACT_NATIVE_SVG_MODULE = "react-native-svg"


class SingleSvgPerFileDetector(BaseDetector):
    """Every svg element after the first one in the file is reported."""

    rule_id = "single-svg-per-file"
    description = "Allow a single svg element per file."
    message_ids = ("multipleSvgs",)

    def __init__(self, context: FileContext) -> None:
        super().__init__(context)
        self._seen = 0

    def visit_jsxelement(self, node: Node) -> list[Diagnostic]:
        if not NodeClassifier.is_svg_element(node):
            return []
        self._seen += 1
        if self._seen == 1:
            return []
        return [self.report("multipleSvgs", node)]


class SvgCurrentColorDetector(BaseDetector):
    """
    Single-color icons should paint with ``currentColor``.

    Color attributes are gathered across the whole subtree of the outermost
    svg element. ``none`` and ``currentColor`` are sentinels. Exactly one
    distinct literal color means a single-color icon: each attribute
    carrying it is reported with a fix swapping the literal for
    ``currentColor``. Two or more colors, or any ``url(...)`` paint server,
    mean the icon is multi-color on purpose.
    """

    rule_id = "svg-currentcolor"
    description = "Single-color svg icons should use currentColor."
    message_ids = ("useCurrentColor",)
    fix_type = "code"

    COLOR_ATTRIBUTES: ClassVar[frozenset[str]] = frozenset(
        {
            "fill",
            "stroke",
            "color",
            "stopColor",
            "floodColor",
            "lightingColor",
            "stop-color",
            "flood-color",
            "lighting-color",
        }
    )
    SENTINELS: ClassVar[frozenset[str]] = frozenset({"none", "currentcolor"})
    REPLACEMENT = "currentColor"

    def visit_jsxelement(self, node: Node) -> list[Diagnostic]:
        if not NodeClassifier.is_svg_element(node) or self._inside_svg(node):
            return []

        found: list[tuple[str, str, Node]] = []
        for attr in TreeWalker.find_all(node, NodeType.JSX_ATTRIBUTE):
            name = NodeClassifier.get_attribute_name(attr)
            if name not in self.COLOR_ATTRIBUTES:
                continue
            literal = self._string_literal(attr)
            if literal is None:
                continue
            value = str(literal.value).strip()
            if value.lower().startswith("url("):
                return []
            if value.lower() in self.SENTINELS or not value:
                continue
            found.append((str(name), value, literal))

        distinct = {value.lower() for _, value, _ in found}
        if len(distinct) != 1:
            return []
        return [
            self.report(
                "useCurrentColor",
                literal,
                {"color": value, "attribute": name},
                plans=[FixPlan.replace_range(literal, self._quoted(literal))],
            )
            for name, value, literal in found
        ]

    @staticmethod
    def _inside_svg(node: Node) -> bool:
        return any(NodeClassifier.is_svg_element(a) for a in node.ancestors())

    @staticmethod
    def _string_literal(attr: Node) -> Node | None:
        """``fill="#000"`` or ``fill={'#000'}``; None for anything computed."""
        value = attr.get("value")
        if value is None:
            return None
        if value.type == NodeType.JSX_EXPRESSION_CONTAINER:
            value = value.get("expression")
        if value is None or value.type != NodeType.LITERAL:
            return None
        return value if isinstance(value.get("value"), str) else None

    def _quoted(self, literal: Node) -> str:
        raw = literal.get("raw")
        quote = raw[0] if isinstance(raw, str) and raw[:1] in ("'", '"') else '"'
        return f"{quote}{self.REPLACEMENT}{quote}"


class TopLevelComponents:
    """Lookup of component definitions declared at the top level of a program."""

    @staticmethod
    def find(program: Node, name: str) -> Node | None:
        for statement in program.get("body") or []:
            if statement.type in (NodeType.EXPORT_DEFAULT_DECLARATION, NodeType.EXPORT_NAMED_DECLARATION):
                statement = statement.get("declaration")
                if statement is None:
                    continue
            candidates: list[Node]
            if statement.type == NodeType.VARIABLE_DECLARATION:
                candidates = list(statement.get("declarations") or [])
            else:
                candidates = [statement]
            for candidate in candidates:
                if NodeClassifier.definition_name(candidate) != name:
                    continue
                if NodeClassifier.is_component(candidate):
                    return candidate
        return None


class MemoizedExportDetector(BaseDetector):
    """``export default Icon`` should be ``export default memo(Icon)``."""

    rule_id = "memoized-export"
    description = "Default-exported components should be wrapped in memo."
    message_ids = ("memoizeExport",)
    fix_type = "code"

    MEMO_NAME = "memo"

    def visit_exportdefaultdeclaration(self, node: Node) -> list[Diagnostic]:
        exported = node.get("declaration")
        if exported is None or NodeClassifier.is_wrapped_in_call(exported, (self.MEMO_NAME,)):
            return []
        if exported.type != NodeType.IDENTIFIER:
            return []
        name = str(exported.name)
        program = self.context.program
        if TopLevelComponents.find(program, name) is None:
            return []

        target = ImportTarget(module=self.option_str("memo_module", REACT_MODULE), name=self.MEMO_NAME)
        strategy, import_plans = ImportStrategySelector.resolve(program, target)
        plans: list[FixPlan] | None = None
        if import_plans is not None:
            plans = [*import_plans, FixPlan.wrap_node(exported, strategy.reference)]
        return [self.report("memoizeExport", exported, {"componentName": name}, plans=plans)]


class SvgPropsTypeDetector(BaseDetector):
    """
    Icon components should type their props.

    React Native files (importing react-native-svg or rendering ``<Svg>``)
    use ``SvgProps``; web files use ``SVGProps<SVGSVGElement>`` from react.
    The fix annotates the first parameter and brings the type into scope.
    """

    rule_id = "svg-props-type"
    description = "Svg icon components should annotate their props type."
    message_ids = ("missingPropsType",)
    fix_type = "code"

    def __init__(self, context: FileContext) -> None:
        super().__init__(context)
        self._native: bool | None = None

    def visit_functiondeclaration(self, node: Node) -> list[Diagnostic]:
        return self._check(node)

    def visit_variabledeclarator(self, node: Node) -> list[Diagnostic]:
        ident = node.get("id")
        # `const Icon: FC<SvgProps> = (props) => ...` is typed through the binding.
        if ident is not None and ident.get("typeAnnotation") is not None:
            return []
        return self._check(node)

    def _check(self, node: Node) -> list[Diagnostic]:
        fn = NodeClassifier.component_function(node)
        if fn is None:
            return []
        if not any(NodeClassifier.is_svg_element(j) for j in NodeClassifier.rendered_jsx(fn)):
            return []
        params = fn.get("params") or []
        first = params[0] if params else None
        if first is not None and self._is_annotated(first):
            return []

        target, annotation_of = self._props_type()
        strategy, import_plans = ImportStrategySelector.resolve(self.context.program, target)
        annotation = annotation_of(strategy.reference)
        plans: list[FixPlan] | None = None
        if first is not None and import_plans is not None:
            plans = [*import_plans, FixPlan.add_type_annotation(first, annotation, fn)]
        return [
            self.report(
                "missingPropsType",
                node,
                {
                    "componentName": NodeClassifier.definition_name(node) or "anonymous",
                    "propsType": annotation,
                },
                plans=plans,
            )
        ]

    @staticmethod
    def _is_annotated(param: Node) -> bool:
        if param.type == NodeType.ASSIGNMENT_PATTERN:
            param = param.left
        return param.get("typeAnnotation") is not None

    def _is_native(self) -> bool:
        if self._native is None:
            program = self.context.program
            self._native = ImportAnalyzer.find_import(program, REACT_NATIVE_SVG_MODULE) is not None or any(
                NodeClassifier.get_jsx_element_name(el) == "Svg"
                for el in TreeWalker.find_all(program, NodeType.JSX_ELEMENT)
            )
        return self._native

    def _props_type(self) -> tuple[ImportTarget, Callable[[str], str]]:
        if self._is_native():
            return (
                ImportTarget(REACT_NATIVE_SVG_MODULE, "SvgProps", type_only=True),
                lambda ref: ref,
            )
        return (
            ImportTarget(REACT_MODULE, "SVGProps", type_only=True),
            lambda ref: f"{ref}<SVGSVGElement>",
        )
