"""Use Case: Lint Files - discover Ruby files, run the enabled rules, collect offenses."""

import logging
from collections.abc import Sequence

from dutchie_style.domain.config import ConfigurationLoader
from dutchie_style.domain.entities import FileReport, LintResult
from dutchie_style.domain.errors import RubySyntaxError
from dutchie_style.domain.protocols import FileSystemProtocol, ParserGatewayProtocol, TelemetryPort
from dutchie_style.domain.rules import InspectionContext
from dutchie_style.domain.rules.registry import RuleRegistry
from dutchie_style.use_cases.inspect_source import InspectSourceUseCase

logger = logging.getLogger(__name__)


class LintFilesUseCase:
    """Orchestrate a read-only lint run over files and directories."""

    def __init__(
        self,
        parser_gateway: ParserGatewayProtocol,
        filesystem: FileSystemProtocol,
        registry: RuleRegistry,
        config_loader: ConfigurationLoader,
        telemetry: TelemetryPort,
    ) -> None:
        self.parser_gateway = parser_gateway
        self.filesystem = filesystem
        self.registry = registry
        self.config_loader = config_loader
        self.telemetry = telemetry

    def target_files(self, paths: Sequence[str]) -> list[str]:
        files = self.filesystem.discover_ruby_files(paths)
        return [f for f in files if not self.config_loader.excluded(f)]

    def execute(self, paths: Sequence[str]) -> LintResult:
        files = self.target_files(paths)
        self.telemetry.step(f"Inspecting {len(files)} file(s)")
        result = LintResult()
        for file_path in files:
            result.files.append(self.lint_file(file_path))
        return result

    def lint_file(self, file_path: str) -> FileReport:
        rules = self.registry.for_file(self.config_loader, file_path)
        if not rules:
            logger.debug("No enabled rules apply to %s", file_path)
            return FileReport(file_path=file_path)
        source = self.filesystem.read_text(file_path)
        try:
            root = self.parser_gateway.parse(source, file_path)
        except RubySyntaxError as exc:
            self.telemetry.warning(str(exc))
            return FileReport(file_path=file_path, failure=str(exc))
        report = InspectSourceUseCase(rules).execute(root, InspectionContext.for_file(file_path, source))
        for error in report.errors:
            self.telemetry.error(f"{error.rule} failed at {error.location}: {error.detail}")
        return FileReport(
            file_path=file_path,
            offenses=list(report.offenses),
            errors=list(report.errors),
        )
