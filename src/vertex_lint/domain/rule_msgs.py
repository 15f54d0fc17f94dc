"""Pure message rendering from a registry dict. No I/O or infrastructure imports."""

import re
from collections.abc import Mapping
from typing import cast

from vertex_lint.domain.registry_types import RuleRegistryEntry

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class RuleMsgBuilder:
    """Looks up message templates by rule id and fills ``{{key}}`` placeholders."""

    @staticmethod
    def get_entry(
        registry: Mapping[str, RuleRegistryEntry], rule_id: str
    ) -> RuleRegistryEntry | None:
        entry = registry.get(rule_id)
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        return None

    @staticmethod
    def render(template: str, data: Mapping[str, object]) -> str:
        """Substitute ``{{key}}`` with ``data[key]``; unknown keys are left as written."""

        def _sub(match: re.Match[str]) -> str:
            key = match.group(1)
            return str(data[key]) if key in data else match.group(0)

        return _PLACEHOLDER.sub(_sub, template)

    @staticmethod
    def build_message(
        registry: Mapping[str, RuleRegistryEntry],
        rule_id: str,
        message_id: str,
        data: Mapping[str, object],
    ) -> str:
        """Rendered message for (rule_id, message_id); the bare message id when no template exists."""
        entry = RuleMsgBuilder.get_entry(registry, rule_id)
        messages = entry.get("messages") if entry else None
        template = messages.get(message_id) if isinstance(messages, dict) else None
        if not isinstance(template, str):
            return message_id
        return RuleMsgBuilder.render(template, data)
