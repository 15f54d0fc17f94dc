from typing import Any, Optional, cast

from vertex_lint.domain.config import ConfigurationLoader
from vertex_lint.infrastructure.config_file_loader import ConfigFileLoader
from vertex_lint.infrastructure.services.rule_registry import RuleRegistryService
from vertex_lint.use_cases.apply_fixes import FixApplier
from vertex_lint.use_cases.lint_file import LintEngine


class VertexLintContainer:
    """Dependency Injection Container for the linter core."""

    _instance: Optional["VertexLintContainer"] = None

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_dict)

    def _register_defaults(self, config_dict: dict[str, object] | None) -> None:
        """Register default implementations."""
        if config_dict is None:
            config_dict = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config_dict)
        self.register_singleton("ConfigurationLoader", config_loader)

        registry_service = RuleRegistryService()
        self.register_singleton("RuleRegistryService", registry_service)

        self.register_singleton(
            "LintEngine",
            LintEngine(config_loader=config_loader, registry=registry_service.get_registry()),
        )
        self.register_singleton("FixApplier", FixApplier())

    @classmethod
    def instance(cls) -> "VertexLintContainer":
        """Process-wide container built from the nearest pyproject.toml."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    # JUSTIFICATION: DI Container must handle any type of service
    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    # JUSTIFICATION: DI Container must return any type of service
    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_rule_registry(self) -> RuleRegistryService:
        return cast(RuleRegistryService, self.get("RuleRegistryService"))

    def get_lint_engine(self) -> LintEngine:
        """Return the engine wired with configuration and message registry."""
        return cast(LintEngine, self.get("LintEngine"))

    def get_fix_applier(self) -> FixApplier:
        return cast(FixApplier, self.get("FixApplier"))
