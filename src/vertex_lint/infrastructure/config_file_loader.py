"""Load [tool.vertex-lint] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

TOOL_SECTION = "vertex-lint"


class ConfigFileLoader:
    """Finds the nearest pyproject.toml walking up from a start directory."""

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Return the [tool.vertex-lint] table, or {} when there is none."""
        current_path = (start or Path.cwd()).resolve()
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.exists():
                return ConfigFileLoader.load_file(config_file)
            if current_path.parent == current_path:
                return {}
            current_path = current_path.parent

    @staticmethod
    def load_file(config_file: Path) -> dict[str, object]:
        try:
            with config_file.open("rb") as f:
                data = toml_lib.load(f)
        except (OSError, toml_lib.TOMLDecodeError):
            logging.warning("Configuration Warning: could not read %s; using defaults.",
                            config_file, exc_info=True)
            return {}
        tool_section = data.get("tool", {}) or {}
        section = tool_section.get(TOOL_SECTION, {}) or {}
        return section if isinstance(section, dict) else {}
