"""Tests for LintEngine: single walk, isolation of detector failures, messages."""

import logging

import pytest

from tests.estree_builders import conditional, const, expr_stmt, ident, literal, node, program
from vertex_lint.domain.config import ConfigurationLoader
from vertex_lint.domain.nodes import Node
from vertex_lint.domain.rules import BaseDetector
from vertex_lint.domain.rules.boolean_naming import BooleanNamingDetector
from vertex_lint.domain.rules.nested_ternary import NestedTernaryDetector
from vertex_lint.use_cases.lint_file import LintEngine


def _nested_ternary(rng: list[int] | None = None) -> dict:
    inner = conditional(ident("b"), literal("x"), literal("y"), rng or [4, 15])
    return conditional(ident("a"), inner, literal("z"), [0, 22])


class ExplodingDetector(BaseDetector):
    rule_id = "exploding"
    message_ids = ("boom",)

    def visit_identifier(self, node: Node) -> list:
        raise RuntimeError("boom")


class UnbuildableDetector(BaseDetector):
    rule_id = "unbuildable"

    def __init__(self, context) -> None:
        raise RuntimeError("cannot build")


class RecordingDetector(BaseDetector):
    """Reports every Identifier, then one end-of-file diagnostic on the Program."""

    rule_id = "recording"
    message_ids = ("seen", "done")

    def visit_identifier(self, node: Node) -> list:
        return [self.report("seen", node, {"name": node.name})]

    def leave_program(self, program: Node) -> list:
        return [self.report("done", program)]


class TestLintEngine:
    def test_failing_detector_does_not_stop_others(self, caplog: pytest.LogCaptureFixture) -> None:
        engine = LintEngine([ExplodingDetector, NestedTernaryDetector])

        with caplog.at_level(logging.WARNING):
            diagnostics = engine.lint(program([expr_stmt(_nested_ternary())]), "src/App.tsx")

        assert [d.rule_id for d in diagnostics] == ["no-nested-ternary"]
        assert "Detector exploding failed" in caplog.text

    def test_detector_that_cannot_be_built_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        engine = LintEngine([UnbuildableDetector, NestedTernaryDetector])

        with caplog.at_level(logging.WARNING):
            diagnostics = engine.lint(program([expr_stmt(_nested_ternary())]), "src/App.tsx")

        assert len(diagnostics) == 1
        assert "unbuildable could not be built for src/App.tsx" in caplog.text

    def test_visits_in_document_order_then_end_of_file(self) -> None:
        tree = program([expr_stmt(ident("first", [0, 5])), expr_stmt(ident("second", [6, 12]))],
                       [0, 12])
        diagnostics = LintEngine([RecordingDetector]).lint(tree)

        assert [d.message_id for d in diagnostics] == ["seen", "seen", "done"]
        assert [d.data.get("name") for d in diagnostics[:2]] == ["first", "second"]

    def test_detectors_run_in_registration_order_per_node(self) -> None:
        tree = program([expr_stmt(_nested_ternary())], [0, 22])
        diagnostics = LintEngine([RecordingDetector, NestedTernaryDetector]).lint(tree)
        rule_ids = [d.rule_id for d in diagnostics]

        # The inner ternary is reached before its identifiers.
        assert rule_ids.index("no-nested-ternary") < rule_ids.index("recording")
        assert rule_ids[-1] == "recording"

    def test_unknown_node_types_are_still_traversed(self) -> None:
        wrapped = node("TSAsExpression", None, expression=_nested_ternary(),
                       typeAnnotation=node("TSAnyKeyword", None))
        diagnostics = LintEngine([NestedTernaryDetector]).lint(program([expr_stmt(wrapped)]))
        assert len(diagnostics) == 1

    def test_accepts_prebuilt_program_node(self) -> None:
        tree = Node.from_estree(program([expr_stmt(_nested_ternary())]))
        assert len(LintEngine([NestedTernaryDetector]).lint(tree)) == 1

    def test_messages_are_rendered_from_registry(self) -> None:
        registry = {
            "boolean-naming-convention": {
                "messages": {"booleanNaming": "Boolean '{{name}}' should read as a predicate."}
            }
        }
        engine = LintEngine([BooleanNamingDetector], registry=registry)
        diagnostics = engine.lint(program([const(ident("active", [6, 12]), literal(True))]))

        assert diagnostics[0].message == "Boolean 'active' should read as a predicate."

    def test_message_falls_back_to_message_id(self) -> None:
        diagnostics = LintEngine([NestedTernaryDetector]).lint(
            program([expr_stmt(_nested_ternary())]))
        assert diagnostics[0].message == "noNestedTernary"

    def test_configured_options_reach_detectors(self) -> None:
        loader = ConfigurationLoader(
            {"boolean-naming-convention": {"allowed_names": ["active"]}})
        tree = program([const(ident("active", [6, 12]), literal(True))])

        assert LintEngine([BooleanNamingDetector], config_loader=loader).lint(tree) == []

    def test_call_options_override_configuration(self) -> None:
        loader = ConfigurationLoader({"service_path_marker": "app/api/"})
        engine = LintEngine([BooleanNamingDetector], config_loader=loader)
        tree = program([const(ident("flag", [6, 10]), literal(True))])

        assert len(engine.lint(tree)) == 1
        options = {"boolean-naming-convention": {"allowed_names": ["flag"]}}
        assert engine.lint(tree, options=options) == []

    def test_detectors_are_fresh_per_file(self) -> None:
        engine = LintEngine([NestedTernaryDetector, RecordingDetector])
        first = engine.lint(program([expr_stmt(ident("a", [0, 1]))], [0, 1]))
        second = engine.lint(program([expr_stmt(ident("b", [0, 1]))], [0, 1]))
        assert len(first) == len(second) == 2

    def test_defaults_to_every_shipped_detector(self) -> None:
        assert len(LintEngine().detector_classes) == 12
