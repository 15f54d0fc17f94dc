"""Generic syntax-tree node model built from ESTree-shaped mappings."""

from __future__ import annotations

import weakref
from collections.abc import Iterator, Mapping
from typing import Any, ClassVar


class NodeType:
    """Type tags the core knows about. Tags are plain ESTree strings."""

    PROGRAM = "Program"
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"
    TEMPLATE_LITERAL = "TemplateLiteral"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    BLOCK_STATEMENT = "BlockStatement"
    RETURN_STATEMENT = "ReturnStatement"
    TRY_STATEMENT = "TryStatement"
    CATCH_CLAUSE = "CatchClause"
    VARIABLE_DECLARATION = "VariableDeclaration"
    VARIABLE_DECLARATOR = "VariableDeclarator"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    FUNCTION_EXPRESSION = "FunctionExpression"
    ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
    CLASS_DECLARATION = "ClassDeclaration"
    CONDITIONAL_EXPRESSION = "ConditionalExpression"
    UNARY_EXPRESSION = "UnaryExpression"
    ASSIGNMENT_EXPRESSION = "AssignmentExpression"
    CALL_EXPRESSION = "CallExpression"
    MEMBER_EXPRESSION = "MemberExpression"
    CHAIN_EXPRESSION = "ChainExpression"
    OBJECT_EXPRESSION = "ObjectExpression"
    ARRAY_EXPRESSION = "ArrayExpression"
    PROPERTY = "Property"
    OBJECT_PATTERN = "ObjectPattern"
    ARRAY_PATTERN = "ArrayPattern"
    ASSIGNMENT_PATTERN = "AssignmentPattern"
    IMPORT_DECLARATION = "ImportDeclaration"
    IMPORT_SPECIFIER = "ImportSpecifier"
    IMPORT_DEFAULT_SPECIFIER = "ImportDefaultSpecifier"
    IMPORT_NAMESPACE_SPECIFIER = "ImportNamespaceSpecifier"
    EXPORT_DEFAULT_DECLARATION = "ExportDefaultDeclaration"
    EXPORT_NAMED_DECLARATION = "ExportNamedDeclaration"
    JSX_ELEMENT = "JSXElement"
    JSX_FRAGMENT = "JSXFragment"
    JSX_OPENING_ELEMENT = "JSXOpeningElement"
    JSX_ATTRIBUTE = "JSXAttribute"
    JSX_IDENTIFIER = "JSXIdentifier"
    JSX_EXPRESSION_CONTAINER = "JSXExpressionContainer"
    LINE_COMMENT = "Line"
    BLOCK_COMMENT = "Block"


# Ordered child-holding fields per tag (ESTree declaration order). The walker
# dispatches on this table; the parent link never appears here.
CHILD_FIELDS: dict[str, tuple[str, ...]] = {
    "Program": ("body",),
    "Identifier": ("typeAnnotation",),
    "PrivateIdentifier": (),
    "Literal": (),
    "TemplateLiteral": ("quasis", "expressions"),
    "TemplateElement": (),
    "TaggedTemplateExpression": ("tag", "quasi"),
    "ExpressionStatement": ("expression",),
    "BlockStatement": ("body",),
    "EmptyStatement": (),
    "DebuggerStatement": (),
    "ReturnStatement": ("argument",),
    "ThrowStatement": ("argument",),
    "BreakStatement": ("label",),
    "ContinueStatement": ("label",),
    "LabeledStatement": ("label", "body"),
    "IfStatement": ("test", "consequent", "alternate"),
    "SwitchStatement": ("discriminant", "cases"),
    "SwitchCase": ("test", "consequent"),
    "TryStatement": ("block", "handler", "finalizer"),
    "CatchClause": ("param", "body"),
    "WhileStatement": ("test", "body"),
    "DoWhileStatement": ("body", "test"),
    "ForStatement": ("init", "test", "update", "body"),
    "ForInStatement": ("left", "right", "body"),
    "ForOfStatement": ("left", "right", "body"),
    "VariableDeclaration": ("declarations",),
    "VariableDeclarator": ("id", "init"),
    "FunctionDeclaration": ("id", "typeParameters", "params", "returnType", "body"),
    "FunctionExpression": ("id", "typeParameters", "params", "returnType", "body"),
    "ArrowFunctionExpression": ("typeParameters", "params", "returnType", "body"),
    "ClassDeclaration": ("id", "superClass", "body"),
    "ClassExpression": ("id", "superClass", "body"),
    "ClassBody": ("body",),
    "MethodDefinition": ("key", "value"),
    "PropertyDefinition": ("key", "value"),
    "ThisExpression": (),
    "Super": (),
    "ArrayExpression": ("elements",),
    "ObjectExpression": ("properties",),
    "Property": ("key", "value"),
    "SpreadElement": ("argument",),
    "RestElement": ("argument", "typeAnnotation"),
    "ObjectPattern": ("properties", "typeAnnotation"),
    "ArrayPattern": ("elements", "typeAnnotation"),
    "AssignmentPattern": ("left", "right"),
    "UnaryExpression": ("argument",),
    "UpdateExpression": ("argument",),
    "BinaryExpression": ("left", "right"),
    "LogicalExpression": ("left", "right"),
    "AssignmentExpression": ("left", "right"),
    "ConditionalExpression": ("test", "consequent", "alternate"),
    "CallExpression": ("callee", "typeArguments", "arguments"),
    "NewExpression": ("callee", "typeArguments", "arguments"),
    "MemberExpression": ("object", "property"),
    "ChainExpression": ("expression",),
    "SequenceExpression": ("expressions",),
    "AwaitExpression": ("argument",),
    "YieldExpression": ("argument",),
    "ImportExpression": ("source",),
    "ImportDeclaration": ("specifiers", "source"),
    "ImportSpecifier": ("imported", "local"),
    "ImportDefaultSpecifier": ("local",),
    "ImportNamespaceSpecifier": ("local",),
    "ExportDefaultDeclaration": ("declaration",),
    "ExportNamedDeclaration": ("declaration", "specifiers", "source"),
    "ExportAllDeclaration": ("exported", "source"),
    "ExportSpecifier": ("local", "exported"),
    "JSXElement": ("openingElement", "children", "closingElement"),
    "JSXFragment": ("openingFragment", "children", "closingFragment"),
    "JSXOpeningElement": ("name", "typeArguments", "attributes"),
    "JSXClosingElement": ("name",),
    "JSXOpeningFragment": (),
    "JSXClosingFragment": (),
    "JSXAttribute": ("name", "value"),
    "JSXSpreadAttribute": ("argument",),
    "JSXIdentifier": (),
    "JSXNamespacedName": ("namespace", "name"),
    "JSXMemberExpression": ("object", "property"),
    "JSXExpressionContainer": ("expression",),
    "JSXEmptyExpression": (),
    "JSXSpreadChild": ("expression",),
    "JSXText": (),
    "TSTypeAnnotation": ("typeAnnotation",),
    "TSTypeReference": ("typeName", "typeArguments"),
    "TSTypeParameterInstantiation": ("params",),
    "TSQualifiedName": ("left", "right"),
    "TSAsExpression": ("expression", "typeAnnotation"),
    "TSNonNullExpression": ("expression",),
}

# ESTree keys that never hold structural children.
NON_STRUCTURAL_KEYS = frozenset(
    {"type", "parent", "loc", "range", "start", "end", "tokens", "comments"}
)


class Node:
    """
    One element of the syntax tree.

    Fields are reachable as attributes (``node.init``). The parent is held
    through a weak reference and is only ever used for upward queries.
    """

    __slots__ = ("type", "range", "_fields", "_dynamic_children", "_parent", "__weakref__")

    UNKNOWN_RANGE: ClassVar[tuple[int, int]] = (0, 0)

    def __init__(
        self,
        type: str,
        range: tuple[int, int] | None = None,
        fields: Mapping[str, Any] | None = None,
        parent: Node | None = None,
    ) -> None:
        if not type:
            raise ValueError("Node requires a type tag")
        self.type = type
        self.range: tuple[int, int] = (
            (int(range[0]), int(range[1])) if range is not None else self.UNKNOWN_RANGE
        )
        self._fields: dict[str, Any] = {}
        self._dynamic_children: tuple[str, ...] = ()
        self._parent: weakref.ReferenceType[Node] | None = None
        if parent is not None:
            self.parent = parent
        for name, value in (fields or {}).items():
            self.set(name, value)

    def __getattr__(self, name: str) -> Any:
        fields = object.__getattribute__(self, "_fields")
        if name in fields:
            return fields[name]
        raise AttributeError(f"{object.__getattribute__(self, 'type')} has no field {name!r}")

    def __repr__(self) -> str:
        label = self._fields.get("name")
        suffix = f" {label!r}" if isinstance(label, str) else ""
        return f"<Node {self.type}{suffix} [{self.range[0]}, {self.range[1]})>"

    @property
    def start(self) -> int:
        return self.range[0]

    @property
    def end(self) -> int:
        return self.range[1]

    @property
    def parent(self) -> Node | None:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, value: Node | None) -> None:
        self._parent = weakref.ref(value) if value is not None else None

    def get(self, name: str, default: Any = None) -> Any:
        """Return a field value or ``default`` when the field is absent."""
        return self._fields.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._fields

    def set(self, name: str, value: Any, structural: bool = True) -> None:
        """
        Set a field while building a tree.

        Node-valued structural fields adopt their children (first parent wins)
        and are remembered in order for tags missing from CHILD_FIELDS.
        """
        if name in NON_STRUCTURAL_KEYS and structural:
            raise ValueError(f"{name!r} is reserved and cannot be a structural field")
        self._fields[name] = value
        if not structural:
            return
        children = [value] if isinstance(value, Node) else (
            [v for v in value if isinstance(v, Node)] if isinstance(value, (list, tuple)) else []
        )
        if not children:
            return
        for child in children:
            if child.parent is None and child is not self:
                child.parent = self
        if name not in self._dynamic_children:
            self._dynamic_children = (*self._dynamic_children, name)

    @property
    def child_fields(self) -> tuple[str, ...]:
        """
        Ordered child-holding field names for this node's tag.

        Known tags list their ESTree fields first; node-valued fields the table
        does not name (decorators, import attributes, ...) follow in input order.
        """
        known = CHILD_FIELDS.get(self.type)
        if known is None:
            return self._dynamic_children
        return known + tuple(f for f in self._dynamic_children if f not in known)

    def iter_children(self) -> Iterator[Node]:
        """Yield direct structural children in field then index order."""
        for field_name in self.child_fields:
            value = self._fields.get(field_name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, (list, tuple)):
                for item in value:
                    if isinstance(item, Node):
                        yield item

    def ancestors(self) -> Iterator[Node]:
        seen = {id(self)}
        current = self.parent
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            yield current
            current = current.parent

    @classmethod
    def from_estree(cls, data: Mapping[str, Any]) -> Node:
        """
        Build a Node graph from an ESTree-shaped mapping.

        A mapping object reachable through several fields becomes a single
        Node, so aliasing in the input survives into the graph. Comments
        listed on the Program are converted but kept out of the child fields.
        """
        return _EstreeBuilder().build(data)


class _EstreeBuilder:
    """Converts nested mappings to Nodes, one Node per distinct mapping object."""

    def __init__(self) -> None:
        self._built: dict[int, Node] = {}

    def build(self, data: Mapping[str, Any]) -> Node:
        root = self._node(data)
        comments = data.get("comments")
        if isinstance(comments, list):
            root.set(
                "comments",
                [self._node(c) for c in comments if self._is_node_mapping(c)],
                structural=False,
            )
        return root

    @staticmethod
    def _is_node_mapping(value: Any) -> bool:
        return isinstance(value, Mapping) and isinstance(value.get("type"), str)

    @staticmethod
    def _range_of(data: Mapping[str, Any]) -> tuple[int, int] | None:
        rng = data.get("range")
        if isinstance(rng, (list, tuple)) and len(rng) == 2:
            return (int(rng[0]), int(rng[1]))
        start, end = data.get("start"), data.get("end")
        if isinstance(start, int) and isinstance(end, int):
            return (start, end)
        return None

    def _node(self, data: Mapping[str, Any]) -> Node:
        """
        Build the subtree under ``data`` without recursion.

        Shells are created in document pre-order first, then filled in that
        same order, so the first structural parent in document order adopts
        a shared child.
        """
        existing = self._built.get(id(data))
        if existing is not None:
            return existing
        order: list[Mapping[str, Any]] = []
        pending: list[Mapping[str, Any]] = [data]
        while pending:
            current = pending.pop()
            if id(current) in self._built:
                continue
            type_tag = current.get("type")
            if not isinstance(type_tag, str):
                raise ValueError(
                    f"ESTree node without a string 'type' (keys: {sorted(map(str, current))[:8]})")
            self._built[id(current)] = Node(type_tag, self._range_of(current))
            order.append(current)
            nested: list[Mapping[str, Any]] = []
            for field_name, value in current.items():
                if field_name in NON_STRUCTURAL_KEYS:
                    continue
                if self._is_node_mapping(value):
                    nested.append(value)
                elif isinstance(value, list):
                    nested.extend(v for v in value if self._is_node_mapping(v))
            pending.extend(reversed(nested))

        for current in order:
            self._fill(self._built[id(current)], current)
        return self._built[id(data)]

    def _fill(self, node: Node, data: Mapping[str, Any]) -> None:
        for field_name, value in data.items():
            if field_name in NON_STRUCTURAL_KEYS:
                continue
            if self._is_node_mapping(value):
                node.set(field_name, self._built[id(value)])
            elif isinstance(value, list) and any(self._is_node_mapping(v) for v in value):
                node.set(
                    field_name,
                    [self._built[id(v)] if self._is_node_mapping(v) else v for v in value],
                )
            else:
                node.set(field_name, value)
