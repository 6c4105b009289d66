from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, cast

from dutchie_style.domain.config import ConfigurationLoader
from dutchie_style.domain.rules.registry import RuleRegistry
from dutchie_style.infrastructure.config_file_loader import ConfigFileLoader
from dutchie_style.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from dutchie_style.infrastructure.gateways.ruby_parser_gateway import RubyParserGateway
from dutchie_style.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from dutchie_style.interface.reporters import JsonReporter, TextReporter
from dutchie_style.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from dutchie_style.domain.protocols import (
        FileSystemProtocol,
        FixerGatewayProtocol,
        ParserGatewayProtocol,
        TelemetryPort,
    )
    from dutchie_style.interface.reporters import LintReporter


class DutchieStyleContainer:
    """Dependency Injection Container for dutchie-style."""

    _instance: Optional["DutchieStyleContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        telemetry = ProjectTelemetry("DUTCHIE-STYLE", "magenta")
        self.register_singleton("TelemetryPort", telemetry)
        self.register_singleton("RubyParserGateway", RubyParserGateway())
        self.register_singleton("TextFixerGateway", TextFixerGateway())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("RuleRegistry", RuleRegistry())
        self.register_singleton("TextReporter", TextReporter())
        self.register_singleton("JsonReporter", JsonReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    @staticmethod
    def load_configuration(config_path: str | None = None) -> ConfigurationLoader:
        """Build the configuration from packaged defaults and project overrides."""
        return ConfigurationLoader(
            defaults=ConfigFileLoader.load_defaults(),
            overrides=ConfigFileLoader.load_overrides(config_path),
            base_dir=str(Path.cwd()),
        )

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_parser_gateway(self) -> "ParserGatewayProtocol":
        """Return the Ruby parser gateway."""
        return cast("ParserGatewayProtocol", self.get("RubyParserGateway"))

    def get_fixer_gateway(self) -> "FixerGatewayProtocol":
        """Return the text fixer gateway."""
        return cast("FixerGatewayProtocol", self.get("TextFixerGateway"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_rule_registry(self) -> RuleRegistry:
        """Return the rule registry."""
        return cast(RuleRegistry, self.get("RuleRegistry"))

    def get_reporters(self) -> dict[str, "LintReporter"]:
        """Return the reporters keyed by output format."""
        return {"text": self.get("TextReporter"), "json": self.get("JsonReporter")}

    @classmethod
    def get_instance(cls) -> "DutchieStyleContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = DutchieStyleContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
