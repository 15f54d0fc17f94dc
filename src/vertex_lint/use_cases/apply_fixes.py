"""Use Case: apply diagnostic fixes to source text."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from vertex_lint.domain.entities import Diagnostic, Fix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixResult:
    """Outcome of one application pass."""

    text: str
    applied: int
    skipped: int

    @property
    def changed(self) -> bool:
        return self.applied > 0


class FixApplier:
    """Applies fixes to text. The core never writes files; callers persist the result."""

    @staticmethod
    def select(diagnostics: Iterable[Diagnostic]) -> tuple[list[Fix], int]:
        """
        Fixes that can be applied together, in start order, and how many were skipped.

        A fix overlapping one already accepted is skipped; a later pass picks
        it up once the first one is in the text.
        """
        fixes = sorted(
            (d.fix for d in diagnostics if d.fix is not None),
            key=lambda f: (f.range.start, f.range.end),
        )
        accepted: list[Fix] = []
        skipped = 0
        for fix in fixes:
            if any(fix.overlaps(other) for other in accepted):
                skipped += 1
                continue
            accepted.append(fix)
        return accepted, skipped

    @staticmethod
    def apply(source: str, diagnostics: Iterable[Diagnostic]) -> FixResult:
        accepted, skipped = FixApplier.select(diagnostics)
        if len(source) < max((f.range.end for f in accepted), default=0):
            raise ValueError("Fix ranges fall outside the source text")
        edits = sorted(
            (edit for fix in accepted for edit in fix.edits),
            key=lambda e: (e.range.start, e.range.end),
        )
        text = source
        for edit in reversed(edits):
            text = text[: edit.range.start] + edit.text + text[edit.range.end:]
        return FixResult(text=text, applied=len(accepted), skipped=skipped)

    @staticmethod
    def apply_until_stable(
        source: str,
        analyze: Callable[[str], list[Diagnostic]],
        max_passes: int = 10,
    ) -> FixResult:
        """
        Re-analyze and re-apply until no fix applies or max_passes is reached.

        ``analyze`` parses and lints the current text; parsing is the caller's job.
        """
        text = source
        applied_total = 0
        skipped = 0
        for pass_number in range(1, max_passes + 1):
            result = FixApplier.apply(text, analyze(text))
            applied_total += result.applied
            skipped = result.skipped
            text = result.text
            logger.debug("Fix pass %d: %d applied, %d skipped", pass_number,
                         result.applied, result.skipped)
            if not result.changed:
                break
        return FixResult(text=text, applied=applied_total, skipped=skipped)
