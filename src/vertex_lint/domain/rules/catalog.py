"""The detectors this package ships, in registration order."""

from vertex_lint.domain.rules import BaseDetector
from vertex_lint.domain.rules.boolean_naming import BooleanNamingDetector
from vertex_lint.domain.rules.empty_catch import EmptyCatchDetector
from vertex_lint.domain.rules.form_config import InlineFormConfigDetector
from vertex_lint.domain.rules.icon_rules import (
    MemoizedExportDetector,
    SingleSvgPerFileDetector,
    SvgCurrentColorDetector,
    SvgPropsTypeDetector,
)
from vertex_lint.domain.rules.jsx_props import InlineFunctionDetector, InlineObjectDetector
from vertex_lint.domain.rules.nested_ternary import NestedTernaryDetector
from vertex_lint.domain.rules.one_component import OneComponentPerFileDetector
from vertex_lint.domain.rules.response_data import ResponseDataReturnDetector


class DetectorCatalog:
    """Lookup of detector classes by rule id."""

    ALL: tuple[type[BaseDetector], ...] = (
        NestedTernaryDetector,
        EmptyCatchDetector,
        OneComponentPerFileDetector,
        SingleSvgPerFileDetector,
        SvgCurrentColorDetector,
        MemoizedExportDetector,
        SvgPropsTypeDetector,
        BooleanNamingDetector,
        ResponseDataReturnDetector,
        InlineObjectDetector,
        InlineFunctionDetector,
        InlineFormConfigDetector,
    )

    @staticmethod
    def rule_ids() -> list[str]:
        return [cls.rule_id for cls in DetectorCatalog.ALL]

    @staticmethod
    def select(rule_ids: list[str] | None = None) -> list[type[BaseDetector]]:
        """Detector classes for rule_ids (all when None). Unknown ids raise ValueError."""
        if rule_ids is None:
            return list(DetectorCatalog.ALL)
        by_id = {cls.rule_id: cls for cls in DetectorCatalog.ALL}
        unknown = [r for r in rule_ids if r not in by_id]
        if unknown:
            raise ValueError(f"Unknown rule id(s): {', '.join(unknown)}")
        return [by_id[r] for r in rule_ids]
