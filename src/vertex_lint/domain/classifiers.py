"""Structural predicates over nodes. Each answers one question and never raises."""

import re
from collections.abc import Iterable, Sequence
from typing import ClassVar

from vertex_lint.domain.nodes import Node, NodeType

JSX_NODE_TYPES = frozenset({NodeType.JSX_ELEMENT, NodeType.JSX_FRAGMENT})


class NodeClassifier:
    """
    Pure predicates and type-narrowing helpers.

    Every method swallows internal errors (missing fields, unexpected
    shapes) and answers False / None, so a classification failure never
    aborts the enclosing rule.
    """

    DEFAULT_COMPONENT_BASES: ClassVar[frozenset[str]] = frozenset({"Component", "PureComponent"})
    DEFAULT_COMPONENT_NAMESPACES: ClassVar[frozenset[str]] = frozenset({"React"})
    DEFAULT_FORM_HOOKS: ClassVar[frozenset[str]] = frozenset({"useForm", "useFormik"})
    SVG_ELEMENT_NAMES: ClassVar[frozenset[str]] = frozenset({"svg", "Svg"})

    FORM_CONFIG_KEYS: ClassVar[frozenset[str]] = frozenset(
        {
            "defaultValues",
            "schema",
            "resolver",
            "mode",
            "reValidateMode",
            "criteriaMode",
            "shouldFocusError",
            "shouldUnregister",
            "shouldUseNativeValidation",
            "delayError",
            "initialValues",
            "validationSchema",
            "validate",
            "validateOnBlur",
            "validateOnChange",
            "validateOnMount",
        }
    )

    IGNORE_COMMENT_PATTERNS: ClassVar[tuple[re.Pattern[str], ...]] = (
        re.compile(r"intentionally\s+ignored?", re.IGNORECASE),
        re.compile(r"deliberately\s+ignored?", re.IGNORECASE),
        re.compile(r"ignore\s+error", re.IGNORECASE),
        re.compile(r"no-op", re.IGNORECASE),
        re.compile(r"noop", re.IGNORECASE),
    )

    RESPONSE_EXACT_NAMES: ClassVar[frozenset[str]] = frozenset({"response", "res", "r"})
    RESPONSE_NAME_FRAGMENTS: ClassVar[tuple[str, ...]] = ("response", "result")

    # --- JSX ---------------------------------------------------------------

    @staticmethod
    def is_valid_jsx_attribute(node: Node) -> bool:
        """JSXAttribute with a plain JSXIdentifier name and a non-null value."""
        try:
            return (
                node.type == NodeType.JSX_ATTRIBUTE
                and node.name.type == NodeType.JSX_IDENTIFIER
                and node.get("value") is not None
            )
        except Exception:
            return False

    @staticmethod
    def get_attribute_name(attr: Node) -> str | None:
        try:
            if attr.name.type == NodeType.JSX_IDENTIFIER:
                return str(attr.name.name)
            return None
        except Exception:
            return None

    @staticmethod
    def get_prop_value(attr: Node) -> Node | None:
        """Expression inside ``prop={...}``; None for string values and empty containers."""
        try:
            value = attr.get("value")
            if value is None or value.type != NodeType.JSX_EXPRESSION_CONTAINER:
                return None
            expression = value.expression
            if expression.type == "JSXEmptyExpression":
                return None
            return expression
        except Exception:
            return None

    @staticmethod
    def is_inline_object(attr: Node) -> bool:
        """Prop value is an object literal constructed in place."""
        expression = NodeClassifier.get_prop_value(attr)
        return expression is not None and expression.type == NodeType.OBJECT_EXPRESSION

    @staticmethod
    def is_inline_function(attr: Node) -> bool:
        """Prop value is an arrow or function expression constructed in place."""
        expression = NodeClassifier.get_prop_value(attr)
        return expression is not None and expression.type in (
            NodeType.ARROW_FUNCTION_EXPRESSION,
            NodeType.FUNCTION_EXPRESSION,
        )

    @staticmethod
    def is_variable_reference(attr: Node) -> bool:
        """Prop value refers to something bound elsewhere."""
        expression = NodeClassifier.get_prop_value(attr)
        return expression is not None and expression.type in (
            NodeType.IDENTIFIER,
            NodeType.MEMBER_EXPRESSION,
        )

    @staticmethod
    def get_jsx_element_name(element: Node) -> str | None:
        """Tag name of a JSXElement or JSXOpeningElement; None for member/namespaced names."""
        try:
            opening = element.openingElement if element.type == NodeType.JSX_ELEMENT else element
            name = opening.name
            if name.type == NodeType.JSX_IDENTIFIER:
                return str(name.name)
            return None
        except Exception:
            return None

    @staticmethod
    def is_svg_element(node: Node) -> bool:
        if node.type != NodeType.JSX_ELEMENT:
            return False
        return NodeClassifier.get_jsx_element_name(node) in NodeClassifier.SVG_ELEMENT_NAMES

    @staticmethod
    def is_jsx(node: Node | None) -> bool:
        return node is not None and node.type in JSX_NODE_TYPES

    # --- functions and components ------------------------------------------

    @staticmethod
    def rendered_jsx(fn: Node) -> list[Node]:
        """JSX nodes a function hands back: its expression body or top-level returns."""
        try:
            body = fn.body
            if fn.type == NodeType.ARROW_FUNCTION_EXPRESSION and body.type != NodeType.BLOCK_STATEMENT:
                return [body] if NodeClassifier.is_jsx(body) else []
            if body is None or body.type != NodeType.BLOCK_STATEMENT:
                return []
            return [
                statement.argument
                for statement in body.body
                if statement.type == NodeType.RETURN_STATEMENT
                and NodeClassifier.is_jsx(statement.get("argument"))
            ]
        except Exception:
            return []

    @staticmethod
    def returns_jsx(fn: Node) -> bool:
        """True when the arrow body is JSX or a top-level return hands back JSX."""
        return bool(NodeClassifier.rendered_jsx(fn))

    @staticmethod
    def component_function(node: Node) -> Node | None:
        """The function node behind a function declaration or a function-bound declarator."""
        try:
            if node.type == NodeType.FUNCTION_DECLARATION:
                return node
            if node.type == NodeType.VARIABLE_DECLARATOR:
                init = node.get("init")
                if init is not None and init.type in (
                    NodeType.ARROW_FUNCTION_EXPRESSION,
                    NodeType.FUNCTION_EXPRESSION,
                ):
                    return init
            return None
        except Exception:
            return None

    @staticmethod
    def is_component(
        node: Node,
        base_names: Iterable[str] = DEFAULT_COMPONENT_BASES,
        namespaces: Iterable[str] = DEFAULT_COMPONENT_NAMESPACES,
    ) -> bool:
        """Function returning JSX, or a class extending a known base component."""
        try:
            fn = NodeClassifier.component_function(node)
            if fn is not None:
                return NodeClassifier.returns_jsx(fn)
            if node.type != NodeType.CLASS_DECLARATION:
                return False
            superclass = node.get("superClass")
            if superclass is None:
                return False
            bases = set(base_names)
            if superclass.type == NodeType.IDENTIFIER:
                return superclass.name in bases
            if superclass.type == NodeType.MEMBER_EXPRESSION:
                obj, prop = superclass.object, superclass.property
                return (
                    obj.type == NodeType.IDENTIFIER
                    and obj.name in set(namespaces)
                    and prop.type == NodeType.IDENTIFIER
                    and prop.name in bases
                )
            return False
        except Exception:
            return False

    @staticmethod
    def definition_name(node: Node) -> str | None:
        """Declared name of a function/class declaration or an identifier-bound declarator."""
        try:
            ident = node.get("id")
            if ident is not None and ident.type == NodeType.IDENTIFIER:
                return str(ident.name)
            return None
        except Exception:
            return None

    # --- calls -------------------------------------------------------------

    @staticmethod
    def callee_name(call: Node) -> str | None:
        """Plain callee name, or the property name of a member callee."""
        try:
            callee = call.callee
            if callee.type == NodeType.IDENTIFIER:
                return str(callee.name)
            if callee.type == NodeType.MEMBER_EXPRESSION and callee.property.type == NodeType.IDENTIFIER:
                return str(callee.property.name)
            return None
        except Exception:
            return None

    @staticmethod
    def is_form_hook(call: Node, hook_names: Iterable[str] = DEFAULT_FORM_HOOKS) -> bool:
        try:
            if call.type != NodeType.CALL_EXPRESSION:
                return False
            return NodeClassifier.callee_name(call) in set(hook_names)
        except Exception:
            return False

    @staticmethod
    def is_form_config_property(key: str) -> bool:
        return key in NodeClassifier.FORM_CONFIG_KEYS

    @staticmethod
    def property_key_name(prop: Node) -> str | None:
        """Static key of an object Property (identifier or string literal)."""
        try:
            if prop.type != NodeType.PROPERTY or prop.get("computed"):
                return None
            key = prop.key
            if key.type == NodeType.IDENTIFIER:
                return str(key.name)
            if key.type == NodeType.LITERAL and isinstance(key.get("value"), str):
                return str(key.value)
            return None
        except Exception:
            return None

    @staticmethod
    def is_wrapped_in_call(node: Node, callee_names: Iterable[str]) -> bool:
        """Call whose callee (plain or member property) is one of callee_names."""
        try:
            return node.type == NodeType.CALL_EXPRESSION and NodeClassifier.callee_name(node) in set(
                callee_names
            )
        except Exception:
            return False

    # --- naming ------------------------------------------------------------

    @staticmethod
    def is_boolean_initializer(declarator: Node) -> bool:
        """Declarator initialized with a boolean literal or a logical negation."""
        try:
            init = declarator.get("init")
            if init is None:
                return False
            if init.type == NodeType.LITERAL:
                return isinstance(init.get("value"), bool)
            if init.type == NodeType.UNARY_EXPRESSION:
                return init.operator == "!"
            return False
        except Exception:
            return False

    # --- error handling ----------------------------------------------------

    @staticmethod
    def is_effectively_empty(catch_clause: Node) -> bool:
        """Catch body is missing or holds zero statements. Comments do not count."""
        try:
            body = catch_clause.get("body")
            if body is None or body.type != NodeType.BLOCK_STATEMENT:
                return True
            return len(body.body) == 0
        except Exception:
            return True

    @staticmethod
    def has_intentional_ignore_comment(
        catch_clause: Node,
        comments: Sequence[Node],
        patterns: Sequence[re.Pattern[str]] = IGNORE_COMMENT_PATTERNS,
    ) -> bool:
        """A comment within the clause's range states that the error is ignored on purpose."""
        try:
            start, end = catch_clause.range
            for comment in comments:
                c_start, c_end = comment.range
                if c_start < start or c_end > end:
                    continue
                text = str(comment.get("value", ""))
                if any(p.search(text) for p in patterns):
                    return True
            return False
        except Exception:
            return False

    # --- service layer -----------------------------------------------------

    @staticmethod
    def matches_service_path(filename: str, marker: str = "src/services/") -> bool:
        try:
            return marker in filename.replace("\\", "/")
        except Exception:
            return False

    @staticmethod
    def is_response_like_name(name: str) -> bool:
        lowered = name.lower()
        if lowered in NodeClassifier.RESPONSE_EXACT_NAMES:
            return True
        return any(fragment in lowered for fragment in NodeClassifier.RESPONSE_NAME_FRAGMENTS)

    @staticmethod
    def is_response_data_access(member: Node) -> bool:
        """``<root>.….data`` where the root identifier looks like an HTTP response."""
        try:
            if member.type != NodeType.MEMBER_EXPRESSION or member.get("computed"):
                return False
            prop = member.property
            if prop.type != NodeType.IDENTIFIER or prop.name != "data":
                return False
            current = member.object
            while current.type == NodeType.MEMBER_EXPRESSION:
                current = current.object
            if current.type != NodeType.IDENTIFIER:
                return False
            return NodeClassifier.is_response_like_name(str(current.name))
        except Exception:
            return False

    @staticmethod
    def is_response_passthrough(return_stmt: Node) -> bool:
        """Return statement handing back a raw ``response.data``, directly or via ``?.``."""
        try:
            argument = return_stmt.get("argument")
            if argument is None:
                return False
            if argument.type == NodeType.CHAIN_EXPRESSION:
                argument = argument.expression
            return NodeClassifier.is_response_data_access(argument)
        except Exception:
            return False
