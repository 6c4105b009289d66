"""Load packaged defaults and project overrides. Infrastructure I/O only."""

import logging
import tomllib
from pathlib import Path

import yaml

from dutchie_style.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).resolve().parent / "resources" / "default.yml"
PROJECT_CONFIG_NAME = ".dutchie-style.yml"
PYPROJECT_SECTION = "dutchie-style"


class ConfigFileLoader:
    """
    Loads configuration mappings from disk. No top-level functions.

    Project overrides come from, in order of preference: an explicit file,
    the nearest ``.dutchie-style.yml`` walking up from ``start``, or the
    ``[tool.dutchie-style]`` table of the nearest ``pyproject.toml``.
    """

    @staticmethod
    def load_defaults() -> dict[str, object]:
        return ConfigFileLoader.load_yaml(DEFAULTS_PATH)

    @staticmethod
    def load_yaml(path: Path) -> dict[str, object]:
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
        except OSError as exc:
            raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping at the top level")
        return data

    @staticmethod
    def load_pyproject(path: Path) -> dict[str, object]:
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc
        section = data.get("tool", {}).get(PYPROJECT_SECTION, {})
        if not isinstance(section, dict):
            raise ConfigurationError(f"[tool.{PYPROJECT_SECTION}] in {path} must be a table")
        return section

    @staticmethod
    def load_overrides(explicit_path: str | None = None, start: Path | None = None) -> dict[str, object]:
        """Return project overrides, or {} when the project has none."""
        if explicit_path is not None:
            return ConfigFileLoader.load_yaml(Path(explicit_path))
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / PROJECT_CONFIG_NAME
            if config_file.is_file():
                logger.debug("Using configuration from %s", config_file)
                return ConfigFileLoader.load_yaml(config_file)
            pyproject = directory / "pyproject.toml"
            if pyproject.is_file():
                section = ConfigFileLoader.load_pyproject(pyproject)
                if section:
                    logger.debug("Using [tool.%s] from %s", PYPROJECT_SECTION, pyproject)
                    return section
        return {}
