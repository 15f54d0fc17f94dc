"""Typed context payloads for FixPlan. Single source of truth for plan params."""

from typing import TypedDict

from vertex_lint.domain.nodes import Node


class InsertTextContext(TypedDict):
    """Context for a plain insertion at an offset taken from a node range."""

    offset: int
    text: str


class ReplaceRangeContext(TypedDict):
    """Context for replacing a node's whole range."""

    target: Node
    text: str


class WrapNodeContext(TypedDict):
    """Context for wrapping an identifier reference in a call."""

    target: Node
    callee: str


class TypeAnnotationContext(TypedDict):
    """Context for annotating a function parameter. container is the owning function."""

    target: Node
    annotation: str
    container: Node | None


class AddImportContext(TypedDict):
    """Context for extending an existing import after its anchor specifier."""

    anchor: Node
    names: list[str]
    wrap_in_braces: bool


class CreateImportContext(TypedDict):
    """Context for a brand-new import statement at the top of the program."""

    program: Node
    names: list[str]
    module: str
    type_only: bool


# Union of all plan params for FixPlan.params
PlanParams = (
    InsertTextContext
    | ReplaceRangeContext
    | WrapNodeContext
    | TypeAnnotationContext
    | AddImportContext
    | CreateImportContext
)
