"""Configuration for lint runs. Immutable value object created by Infrastructure."""

import logging
from collections.abc import Iterable

# Top-level settings forwarded into the options of the rules that read them.
GLOBAL_RULE_SETTINGS: dict[str, tuple[str, ...]] = {
    "service_path_marker": ("no-response-data-return",),
    "memo_module": ("memoized-export",),
    "ignore_comment_marker": ("no-empty-catch",),
}

LIST_OPTIONS = frozenset({"allowed_names", "allowed_prefixes", "hook_names"})


class ConfigurationLoader:
    """
    Immutable configuration for lint settings.

    Created from the ``[tool.vertex-lint]`` table. Domain does not read the
    filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict) at the composition root.
    """

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        self._config: dict[str, object] = dict(config_dict or {})
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about settings that will be ignored. Never raises."""
        for key in GLOBAL_RULE_SETTINGS:
            if key in config and not isinstance(config[key], str):
                logging.warning("Configuration Warning: '%s' must be a string; using the default.", key)
        marker = config.get("ignore_comment_marker")
        if isinstance(marker, str) and "*/" in marker:
            logging.warning(
                "Configuration Warning: 'ignore_comment_marker' contains '*/'; empty catch fixes are disabled.")
        for key, value in config.items():
            if key in GLOBAL_RULE_SETTINGS:
                continue
            if not isinstance(value, dict):
                logging.warning(
                    "Configuration Warning: '%s' is not a rule table and is ignored.", key)
                continue
            for option, option_value in value.items():
                if option in LIST_OPTIONS and not self._is_str_list(option_value):
                    logging.warning(
                        "Configuration Warning: '%s.%s' must be a list of strings.", key, option)

    @staticmethod
    def _is_str_list(value: object) -> bool:
        return isinstance(value, list) and all(isinstance(x, str) for x in value)

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def service_path_marker(self) -> str | None:
        return self._str_setting("service_path_marker")

    @property
    def memo_module(self) -> str | None:
        return self._str_setting("memo_module")

    @property
    def ignore_comment_marker(self) -> str | None:
        return self._str_setting("ignore_comment_marker")

    @property
    def configured_rules(self) -> list[str]:
        """Rule ids that have their own option table."""
        return [k for k, v in self._config.items() if isinstance(v, dict)]

    def _str_setting(self, key: str) -> str | None:
        raw = self._config.get(key)
        return raw if isinstance(raw, str) and raw else None

    def rule_options(self, rule_id: str) -> dict[str, object]:
        """
        Options for one rule: its own table plus any top-level setting it reads.

        A setting inside the rule's table wins over the top-level one.
        """
        options: dict[str, object] = {}
        for key, rule_ids in GLOBAL_RULE_SETTINGS.items():
            value = self._str_setting(key)
            if value is not None and rule_id in rule_ids:
                options[key] = value
        table = self._config.get(rule_id)
        if isinstance(table, dict):
            options.update({str(k): v for k, v in table.items()})
        return options

    def options_for(self, rule_ids: Iterable[str]) -> dict[str, dict[str, object]]:
        return {rule_id: self.rule_options(rule_id) for rule_id in rule_ids}
