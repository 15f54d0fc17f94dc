"""Use Case: run every detector over one file's syntax tree in a single walk."""

import dataclasses
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from vertex_lint.domain.config import ConfigurationLoader
from vertex_lint.domain.entities import Diagnostic
from vertex_lint.domain.nodes import Node
from vertex_lint.domain.registry_types import RuleRegistryEntry
from vertex_lint.domain.rule_msgs import RuleMsgBuilder
from vertex_lint.domain.rules import BaseDetector, FileContext
from vertex_lint.domain.rules.catalog import DetectorCatalog
from vertex_lint.domain.walker import TreeWalker

logger = logging.getLogger(__name__)

Handler = tuple[BaseDetector, Callable[[Node], Any]]


class LintEngine:
    """
    Orchestrates detectors for one file at a time.

    Detectors are built fresh per file. The tree is walked once; each node
    goes to every detector with a ``visit_<tag>`` method for its tag, in
    registration order, then every detector's ``leave_program`` runs. Each
    detector call is isolated: a failure is logged and yields nothing, and
    the run continues.
    """

    def __init__(
        self,
        detector_classes: Sequence[type[BaseDetector]] | None = None,
        config_loader: ConfigurationLoader | None = None,
        registry: Mapping[str, RuleRegistryEntry] | None = None,
    ) -> None:
        self.detector_classes = list(
            detector_classes if detector_classes is not None else DetectorCatalog.ALL)
        self.config_loader = config_loader or ConfigurationLoader({})
        self.registry: Mapping[str, RuleRegistryEntry] = registry or {}

    def lint(
        self,
        tree: Node | Mapping[str, Any],
        filename: str = "<input>",
        options: Mapping[str, Mapping[str, object]] | None = None,
    ) -> list[Diagnostic]:
        """
        Diagnostics for one file, in walk order, then end-of-file aggregations.

        ``tree`` is an ESTree mapping or an already built Program node.
        ``options`` maps rule id to options layered over the configuration.
        """
        program = tree if isinstance(tree, Node) else Node.from_estree(tree)
        detectors = self._build_detectors(program, filename, options or {})
        diagnostics: list[Diagnostic] = []
        handlers: dict[str, list[Handler]] = {}

        def visit(node: Node) -> None:
            tag_handlers = handlers.get(node.type)
            if tag_handlers is None:
                tag_handlers = self._handlers_for(detectors, node.type)
                handlers[node.type] = tag_handlers
            for detector, method in tag_handlers:
                diagnostics.extend(self._run_isolated(detector.rule_id, method, node))

        TreeWalker.walk(program, visit)
        for detector in detectors:
            diagnostics.extend(
                self._run_isolated(detector.rule_id, detector.leave_program, program))
        return [self._with_message(d) for d in diagnostics]

    def _build_detectors(
        self,
        program: Node,
        filename: str,
        options: Mapping[str, Mapping[str, object]],
    ) -> list[BaseDetector]:
        detectors: list[BaseDetector] = []
        for cls in self.detector_classes:
            rule_options = self.config_loader.rule_options(cls.rule_id)
            rule_options.update(options.get(cls.rule_id) or {})
            context = FileContext.for_program(filename, program, rule_options)
            try:
                detectors.append(cls(context))
            except Exception:
                logger.warning("Detector %s could not be built for %s; skipped",
                               cls.rule_id, filename, exc_info=True)
        return detectors

    @staticmethod
    def _handlers_for(detectors: Sequence[BaseDetector], node_type: str) -> list[Handler]:
        method_name = f"visit_{node_type.lower()}"
        found: list[Handler] = []
        for detector in detectors:
            method = getattr(detector, method_name, None)
            if callable(method):
                found.append((detector, method))
        return found

    @staticmethod
    def _run_isolated(rule_id: str, call: Callable[[Node], Any], node: Node) -> list[Diagnostic]:
        """Run one detector callback; a failure is logged and reported as no diagnostics."""
        try:
            result = call(node)
        except Exception:
            logger.warning("Detector %s failed on %r; continuing", rule_id, node, exc_info=True)
            return []
        if not result:
            return []
        return [d for d in result if isinstance(d, Diagnostic)]

    def _with_message(self, diagnostic: Diagnostic) -> Diagnostic:
        message = RuleMsgBuilder.build_message(
            self.registry, diagnostic.rule_id, diagnostic.message_id, diagnostic.data)
        return dataclasses.replace(diagnostic, message=message)
