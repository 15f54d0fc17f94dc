from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from vertex_lint.domain.nodes import Node
from vertex_lint.domain.transformation_contexts import (
    AddImportContext,
    CreateImportContext,
    InsertTextContext,
    PlanParams,
    ReplaceRangeContext,
    TypeAnnotationContext,
    WrapNodeContext,
)


@dataclass(frozen=True, order=True)
class TextRange:
    """Half-open [start, end) offsets into the original source text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid range [{self.start}, {self.end})")

    @classmethod
    def of(cls, node: Node) -> "TextRange":
        return cls(node.range[0], node.range[1])

    @classmethod
    def point(cls, offset: int) -> "TextRange":
        return cls(offset, offset)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: "TextRange") -> bool:
        """
        True when the two ranges cannot both be applied.

        Touching ranges do not overlap. Two insertions at the same offset
        do, since their relative order would be ambiguous.
        """
        if self.is_empty and other.is_empty:
            return self.start == other.start
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class TextEdit:
    """Replace ``range`` with ``text``. An empty range is an insertion."""

    range: TextRange
    text: str

    @classmethod
    def insert(cls, offset: int, text: str) -> "TextEdit":
        return cls(TextRange.point(offset), text)

    @classmethod
    def replace(cls, node: Node, text: str) -> "TextEdit":
        return cls(TextRange.of(node), text)


@dataclass(frozen=True)
class Fix:
    """
    Ordered, mutually non-overlapping edits realizing one correction.

    Construction sorts nothing: callers hand edits already ordered by start
    and an ill-formed sequence raises ValueError.
    """

    edits: tuple[TextEdit, ...]

    def __post_init__(self) -> None:
        if not self.edits:
            raise ValueError("A Fix needs at least one edit")
        for previous, current in zip(self.edits, self.edits[1:]):
            if current.range.start < previous.range.start:
                raise ValueError("Fix edits must be sorted by start offset")
            if previous.range.overlaps(current.range):
                raise ValueError(
                    f"Fix edits overlap: {previous.range} and {current.range}")

    @classmethod
    def from_edits(cls, edits: Iterable[TextEdit]) -> "Fix":
        """Sort edits by start offset and validate them."""
        ordered = sorted(edits, key=lambda e: (e.range.start, e.range.end))
        return cls(tuple(ordered))

    @property
    def range(self) -> TextRange:
        """Smallest range covering every edit."""
        return TextRange(self.edits[0].range.start, max(e.range.end for e in self.edits))

    def overlaps(self, other: "Fix") -> bool:
        return any(a.range.overlaps(b.range) for a in self.edits for b in other.edits)

    def apply(self, source: str) -> str:
        """Return source with this fix applied."""
        out = source
        for edit in reversed(self.edits):
            out = out[: edit.range.start] + edit.text + out[edit.range.end:]
        return out


@dataclass(frozen=True)
class Diagnostic:
    """One reported violation, optionally paired with a Fix. Immutable once created."""

    rule_id: str
    message_id: str
    target_range: TextRange
    data: Mapping[str, object] = field(default_factory=dict)
    fix: Fix | None = None
    message: str = ""

    def __post_init__(self) -> None:
        # JUSTIFICATION: frozen dataclass; the mapping is copied once into a read-only view.
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @classmethod
    def from_node(
        cls,
        *,
        rule_id: str,
        message_id: str,
        node: Node,
        data: Mapping[str, object] | None = None,
        fix: Fix | None = None,
    ) -> "Diagnostic":
        """Build a Diagnostic anchored on a node's range."""
        return cls(
            rule_id=rule_id,
            message_id=message_id,
            target_range=TextRange.of(node),
            data=dict(data or {}),
            fix=fix,
        )

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    def to_dict(self) -> dict[str, object]:
        """Plain-data form for hosts that serialize results."""
        result: dict[str, object] = {
            "ruleId": self.rule_id,
            "messageId": self.message_id,
            "message": self.message,
            "range": [self.target_range.start, self.target_range.end],
            "data": dict(self.data),
        }
        if self.fix is not None:
            result["fix"] = [
                {"range": [e.range.start, e.range.end], "text": e.text} for e in self.fix.edits
            ]
        return result


class PlanType(Enum):
    """Structural edit decisions the Fix Synthesizer knows how to realize."""
    INSERT_TEXT = "insert_text"
    REPLACE_RANGE = "replace_range"
    WRAP_NODE = "wrap_node"
    ADD_TYPE_ANNOTATION = "add_type_annotation"
    ADD_NAMED_IMPORT = "add_named_import"
    CREATE_IMPORT = "create_import"


@dataclass(frozen=True)
class FixPlan:
    """
    Pure data describing one edit decision.

    Detectors return plans instead of raw offsets; the Fix Synthesizer turns
    them into TextEdits and checks their preconditions.
    """
    plan_type: PlanType
    params: PlanParams

    @classmethod
    def insert_text(cls, offset: int, text: str) -> "FixPlan":
        p: InsertTextContext = {"offset": offset, "text": text}
        return cls(plan_type=PlanType.INSERT_TEXT, params=p)

    @classmethod
    def replace_range(cls, target: Node, text: str) -> "FixPlan":
        p: ReplaceRangeContext = {"target": target, "text": text}
        return cls(plan_type=PlanType.REPLACE_RANGE, params=p)

    @classmethod
    def wrap_node(cls, target: Node, callee: str) -> "FixPlan":
        """Wrap an identifier reference in a call: ``X`` becomes ``callee(X)``."""
        p: WrapNodeContext = {"target": target, "callee": callee}
        return cls(plan_type=PlanType.WRAP_NODE, params=p)

    @classmethod
    def add_type_annotation(
        cls, target: Node, annotation: str, container: Node | None = None
    ) -> "FixPlan":
        """Annotate a parameter; ``container`` is the function owning it."""
        p: TypeAnnotationContext = {
            "target": target,
            "annotation": annotation,
            "container": container,
        }
        return cls(plan_type=PlanType.ADD_TYPE_ANNOTATION, params=p)

    @classmethod
    def add_named_import(cls, anchor: Node, names: list[str], wrap_in_braces: bool) -> "FixPlan":
        """Append names after an existing specifier (``, a`` or ``, { a }``)."""
        p: AddImportContext = {
            "anchor": anchor,
            "names": list(names),
            "wrap_in_braces": wrap_in_braces,
        }
        return cls(plan_type=PlanType.ADD_NAMED_IMPORT, params=p)

    @classmethod
    def create_import(
        cls, program: Node, names: list[str], module: str, type_only: bool = False
    ) -> "FixPlan":
        p: CreateImportContext = {
            "program": program,
            "names": list(names),
            "module": module,
            "type_only": type_only,
        }
        return cls(plan_type=PlanType.CREATE_IMPORT, params=p)
