"""Import shape analysis and the import-update decision table."""

from dataclasses import dataclass
from enum import Enum

from vertex_lint.domain.entities import FixPlan
from vertex_lint.domain.nodes import Node, NodeType


class ImportStyle(Enum):
    """How a module is currently imported in a file."""
    NAMESPACE = "NAMESPACE"
    DEFAULT_ONLY = "DEFAULT_ONLY"
    NAMED_ONLY = "NAMED_ONLY"
    MIXED = "MIXED"
    NONE = "NONE"


class ImportUpdateStrategy(Enum):
    """Closed set of ways to make a symbol available before a fix references it."""
    NO_UPDATE = "NO_UPDATE"
    USE_NAMESPACE = "USE_NAMESPACE"
    ADD_TO_NAMED = "ADD_TO_NAMED"
    ADD_NAMED_TO_DEFAULT = "ADD_NAMED_TO_DEFAULT"
    CREATE_NEW_IMPORT = "CREATE_NEW_IMPORT"


@dataclass(frozen=True)
class ImportTarget:
    """A symbol a fix needs in scope: ``name`` exported by ``module``."""

    module: str
    name: str
    type_only: bool = False


@dataclass(frozen=True)
class ImportAnalysis:
    """Read-only snapshot of how ``module`` is imported. Recomputed per file."""

    module: str
    style: ImportStyle
    has_default_import: bool = False
    has_named_imports: bool = False
    has_namespace_import: bool = False
    target_local_name: str | None = None
    namespace_name: str | None = None
    default_name: str | None = None
    import_node: Node | None = None
    default_specifier: Node | None = None
    last_named_specifier: Node | None = None

    @property
    def has_target_binding(self) -> bool:
        return self.target_local_name is not None

    @classmethod
    def empty(cls, module: str) -> "ImportAnalysis":
        return cls(module=module, style=ImportStyle.NONE)


@dataclass(frozen=True)
class ImportStrategy:
    """Decision for one target: how to reference it and which edit, if any, to make."""

    update: ImportUpdateStrategy
    reference: str
    target: ImportTarget

    @property
    def needs_import(self) -> bool:
        return self.update not in (ImportUpdateStrategy.NO_UPDATE, ImportUpdateStrategy.USE_NAMESPACE)


class ImportAnalyzer:
    """Builds ImportAnalysis snapshots from a Program node."""

    @staticmethod
    def _imported_name(specifier: Node) -> str | None:
        imported = specifier.get("imported")
        if imported is None:
            return None
        if imported.type == NodeType.IDENTIFIER:
            return str(imported.name)
        if imported.type == NodeType.LITERAL and isinstance(imported.get("value"), str):
            return str(imported.value)
        return None

    @staticmethod
    def find_import(program: Node, module: str, allow_type_only: bool = True) -> Node | None:
        """First ImportDeclaration of ``module``; type-only imports skipped unless allowed."""
        for statement in program.get("body") or []:
            if statement.type != NodeType.IMPORT_DECLARATION:
                continue
            source = statement.get("source")
            if source is None or source.get("value") != module:
                continue
            if not allow_type_only and statement.get("importKind") == "type":
                continue
            return statement
        return None

    @staticmethod
    def analyze(program: Node, target: ImportTarget) -> ImportAnalysis:
        """Describe how target.module is imported. Failures read as 'not imported'."""
        try:
            declaration = ImportAnalyzer.find_import(
                program, target.module, allow_type_only=target.type_only)
            if declaration is None:
                return ImportAnalysis.empty(target.module)

            default_spec: Node | None = None
            last_named: Node | None = None
            namespace_name: str | None = None
            target_local: str | None = None
            for specifier in declaration.get("specifiers") or []:
                if specifier.type == NodeType.IMPORT_DEFAULT_SPECIFIER:
                    default_spec = specifier
                elif specifier.type == NodeType.IMPORT_NAMESPACE_SPECIFIER:
                    namespace_name = str(specifier.local.name)
                elif specifier.type == NodeType.IMPORT_SPECIFIER:
                    last_named = specifier
                    # A value target cannot come through `import { type X }`.
                    if specifier.get("importKind") == "type" and not target.type_only:
                        continue
                    if ImportAnalyzer._imported_name(specifier) == target.name:
                        target_local = str(specifier.local.name)

            has_default = default_spec is not None
            has_named = last_named is not None
            has_namespace = namespace_name is not None
            if has_namespace:
                style = ImportStyle.NAMESPACE
            elif has_default and has_named:
                style = ImportStyle.MIXED
            elif has_default:
                style = ImportStyle.DEFAULT_ONLY
            elif has_named:
                style = ImportStyle.NAMED_ONLY
            else:
                style = ImportStyle.NONE

            return ImportAnalysis(
                module=target.module,
                style=style,
                has_default_import=has_default,
                has_named_imports=has_named,
                has_namespace_import=has_namespace,
                target_local_name=target_local,
                namespace_name=namespace_name,
                default_name=str(default_spec.local.name) if default_spec is not None else None,
                import_node=declaration,
                default_specifier=default_spec,
                last_named_specifier=last_named,
            )
        except Exception:
            return ImportAnalysis.empty(target.module)


class ImportStrategySelector:
    """
    Pure decision table from an ImportAnalysis to exactly one strategy.

    Every ImportStyle maps to one strategy; none needs human input.
    """

    @staticmethod
    def select(analysis: ImportAnalysis, target: ImportTarget) -> ImportStrategy:
        if analysis.has_target_binding:
            return ImportStrategy(
                ImportUpdateStrategy.NO_UPDATE, str(analysis.target_local_name), target)
        if analysis.style == ImportStyle.NAMESPACE:
            return ImportStrategy(
                ImportUpdateStrategy.USE_NAMESPACE,
                f"{analysis.namespace_name}.{target.name}",
                target,
            )
        if analysis.style == ImportStyle.DEFAULT_ONLY:
            return ImportStrategy(ImportUpdateStrategy.ADD_NAMED_TO_DEFAULT, target.name, target)
        if analysis.style in (ImportStyle.NAMED_ONLY, ImportStyle.MIXED):
            return ImportStrategy(ImportUpdateStrategy.ADD_TO_NAMED, target.name, target)
        return ImportStrategy(ImportUpdateStrategy.CREATE_NEW_IMPORT, target.name, target)

    @staticmethod
    def plans_for(
        strategy: ImportStrategy, analysis: ImportAnalysis, program: Node
    ) -> list[FixPlan] | None:
        """
        The single FixPlan realizing a strategy ([] when no edit is needed).

        None means the analysis lacks the anchor the strategy requires.
        """
        update = strategy.update
        name = strategy.target.name
        if not strategy.needs_import:
            return []
        if update == ImportUpdateStrategy.ADD_TO_NAMED:
            if analysis.last_named_specifier is None:
                return None
            return [FixPlan.add_named_import(analysis.last_named_specifier, [name], wrap_in_braces=False)]
        if update == ImportUpdateStrategy.ADD_NAMED_TO_DEFAULT:
            anchor = analysis.default_specifier
            if anchor is None or not ImportStrategySelector._default_is_last_clause(analysis):
                return None
            return [FixPlan.add_named_import(anchor, [name], wrap_in_braces=True)]
        return [
            FixPlan.create_import(
                program, [name], strategy.target.module, type_only=strategy.target.type_only)
        ]

    @staticmethod
    def resolve(program: Node, target: ImportTarget) -> tuple[ImportStrategy, list[FixPlan] | None]:
        """Analyze, select and plan in one call."""
        analysis = ImportAnalyzer.analyze(program, target)
        strategy = ImportStrategySelector.select(analysis, target)
        return strategy, ImportStrategySelector.plans_for(strategy, analysis, program)

    @staticmethod
    def _default_is_last_clause(analysis: ImportAnalysis) -> bool:
        """
        True when only `` from `` separates the default specifier from the source.

        ``import React, {} from 'react'`` has no named specifier nodes but does
        have a brace list; appending ``, { name }`` there would not parse. Any
        gap wider than a single-spaced `` from `` (which an empty list always
        makes) reads as unsafe, as do missing ranges.
        """
        default = analysis.default_specifier
        declaration = analysis.import_node
        source = declaration.get("source") if declaration is not None else None
        if default is None or source is None:
            return False
        if default.end <= default.start or source.end <= source.start:
            return False
        return 0 < source.start - default.end <= len(" from ")
