"""Unit tests for BooleanNamingDetector (boolean-naming-convention)."""

import pytest

from tests.estree_builders import const, ident, literal, node, program
from vertex_lint.domain.rules.boolean_naming import BooleanNamingDetector
from vertex_lint.use_cases.lint_file import LintEngine


def _lint(name: str, init: dict, **options: object) -> list:
    tree = program([const(ident(name, [6, 6 + len(name)]), init)])
    return LintEngine([BooleanNamingDetector]).lint(
        tree, options={"boolean-naming-convention": options})


def _negation() -> dict:
    return node("UnaryExpression", None, operator="!", prefix=True, argument=ident("ready"))


class TestBooleanNamingDetector:
    @pytest.mark.parametrize(
        "name",
        ["isOpen", "hasItems", "shouldRender", "canEdit", "showModal", "is2FA", "has_value",
         "open", "visible", "loading"],
    )
    def test_predicate_names_pass(self, name: str) -> None:
        assert _lint(name, literal(True)) == []

    @pytest.mark.parametrize("name", ["active", "island", "flag", "canary"])
    def test_other_names_are_reported(self, name: str) -> None:
        diagnostics = _lint(name, literal(False))
        assert len(diagnostics) == 1
        assert diagnostics[0].message_id == "booleanNaming"
        assert diagnostics[0].data["name"] == name
        assert (diagnostics[0].target_range.start, diagnostics[0].target_range.end) == (
            6, 6 + len(name))

    def test_negation_counts_as_boolean(self) -> None:
        assert len(_lint("done", _negation())) == 1
        assert _lint("isDone", _negation()) == []

    def test_non_boolean_initializers_are_ignored(self) -> None:
        assert _lint("count", literal(0)) == []
        assert _lint("label", literal("yes")) == []
        assert _lint("active", ident("flag")) == []

    def test_allowed_names_extend_defaults(self) -> None:
        assert len(_lint("customAllowed", literal(True))) == 1
        assert _lint("customAllowed", literal(True), allowed_names=["customAllowed"]) == []
        assert _lint("open", literal(True), allowed_names=["customAllowed"]) == []

    def test_allowed_prefixes_extend_defaults(self) -> None:
        assert _lint("needsSave", literal(True), allowed_prefixes=["needs"]) == []
        assert _lint("isSaved", literal(True), allowed_prefixes=["needs"]) == []

    def test_destructured_binding_is_ignored(self) -> None:
        pattern = node("ObjectPattern", None, properties=[])
        tree = program([const(pattern, literal(True))])
        assert LintEngine([BooleanNamingDetector]).lint(tree) == []
