"""Detector contract and the per-file context detectors are built with."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Literal, Protocol

from vertex_lint.domain.entities import Diagnostic, FixPlan
from vertex_lint.domain.fix_synthesizer import FixSynthesizer
from vertex_lint.domain.nodes import Node

__all__ = [
    "BaseDetector",
    "Detector",
    "FileContext",
]


@dataclass(frozen=True)
class FileContext:
    """Everything a detector may know about the file under analysis."""

    filename: str
    program: Node
    comments: tuple[Node, ...] = ()
    options: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # JUSTIFICATION: frozen dataclass; options are copied once into a read-only view.
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))
        object.__setattr__(self, "comments", tuple(self.comments))

    @classmethod
    def for_program(
        cls, filename: str, program: Node, options: Mapping[str, object] | None = None
    ) -> "FileContext":
        """Context whose comments are the ones attached to the Program at ingestion."""
        comments = program.get("comments") or []
        return cls(
            filename=filename,
            program=program,
            comments=tuple(c for c in comments if isinstance(c, Node)),
            options=dict(options or {}),
        )


# -----------------------------------------------------------------------------
# Detectors are built once per file. The engine calls ``visit_<tag lowercased>``
# for each node of that tag during its single walk, then ``leave_program`` once
# at end of file. Both return diagnostics; neither needs to catch errors, since
# the engine isolates every call.
# -----------------------------------------------------------------------------


class Detector(Protocol):
    """What the engine relies on. Visit methods are discovered by name."""

    rule_id: str
    description: str
    message_ids: tuple[str, ...]

    def leave_program(self, program: Node) -> list[Diagnostic]:
        """End-of-file aggregation."""
        ...


class BaseDetector:
    """Shared plumbing: option access and Diagnostic construction with optional fix."""

    rule_id: ClassVar[str] = ""
    description: ClassVar[str] = ""
    message_ids: ClassVar[tuple[str, ...]] = ()
    fix_type: ClassVar[Literal["code", "none"]] = "none"

    def __init__(self, context: FileContext) -> None:
        self.context = context
        self._synthesizer = FixSynthesizer()

    def leave_program(self, program: Node) -> list[Diagnostic]:
        return []

    def report(
        self,
        message_id: str,
        node: Node,
        data: Mapping[str, object] | None = None,
        plans: Iterable[FixPlan] | None = None,
    ) -> Diagnostic:
        """Diagnostic on node; plans that cannot be realized safely leave it without a fix."""
        fix = self._synthesizer.synthesize(plans) if plans is not None else None
        return Diagnostic.from_node(
            rule_id=self.rule_id,
            message_id=message_id,
            node=node,
            data=data,
            fix=fix,
        )

    def option_str(self, key: str, default: str) -> str:
        raw = self.context.options.get(key)
        return raw if isinstance(raw, str) and raw else default

    def option_list(self, key: str) -> list[str]:
        """String list option; anything else reads as empty."""
        raw = self.context.options.get(key, [])
        if isinstance(raw, (list, tuple)):
            return [str(x) for x in raw if isinstance(x, str)]
        return []
