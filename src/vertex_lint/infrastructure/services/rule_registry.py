"""RuleRegistryService: loads the rule registry and answers descriptions and message templates."""

from pathlib import Path
from typing import cast

import yaml

from vertex_lint.domain.registry_types import RuleRegistryEntry


class RuleRegistryService:
    """Loads rule_registry.yaml once per instance."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
                )
        else:
            self._registry = {}

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry for use by domain/use_cases."""
        return dict(self._registry)

    def get_entry(self, rule_id: str) -> RuleRegistryEntry | None:
        entry = self._registry.get(rule_id)
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        return None

    def get_fixable_rules(self) -> list[str]:
        """Rule ids whose registry entry is marked fixable."""
        return sorted(rule_id for rule_id, entry in self._registry.items()
                      if isinstance(entry, dict) and entry.get("fixable"))

    def get_description(self, rule_id: str) -> str:
        entry = self.get_entry(rule_id)
        if entry and entry.get("description"):
            return str(entry["description"])
        return rule_id

    def get_message_template(self, rule_id: str, message_id: str) -> str | None:
        entry = self.get_entry(rule_id)
        messages = entry.get("messages") if entry else None
        if isinstance(messages, dict):
            template = messages.get(message_id)
            return str(template) if template is not None else None
        return None
