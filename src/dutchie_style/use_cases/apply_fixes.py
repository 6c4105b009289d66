"""Use Case: Apply Fixes - auto-correct offenses in place."""

import logging
from collections.abc import Sequence

from dutchie_style.domain.config import ConfigurationLoader
from dutchie_style.domain.entities import FileReport, InspectionReport, LintResult
from dutchie_style.domain.errors import InfiniteCorrectionLoopError, RubySyntaxError
from dutchie_style.domain.protocols import (
    FileSystemProtocol,
    FixerGatewayProtocol,
    ParserGatewayProtocol,
    TelemetryPort,
)
from dutchie_style.domain.rules import Checkable, InspectionContext
from dutchie_style.domain.rules.registry import RuleRegistry
from dutchie_style.use_cases.inspect_source import InspectSourceUseCase
from dutchie_style.use_cases.lint_files import LintFilesUseCase

logger = logging.getLogger(__name__)


class ApplyFixesUseCase:
    """
    Correct every file until the rules stop producing edits.

    Each pass re-parses the corrected text, so a correction that only
    becomes possible after another one (nested calls) is still applied.
    A file is written only when every pass parsed cleanly.
    """

    def __init__(
        self,
        parser_gateway: ParserGatewayProtocol,
        fixer_gateway: FixerGatewayProtocol,
        filesystem: FileSystemProtocol,
        registry: RuleRegistry,
        config_loader: ConfigurationLoader,
        telemetry: TelemetryPort,
    ) -> None:
        self.parser_gateway = parser_gateway
        self.fixer_gateway = fixer_gateway
        self.filesystem = filesystem
        self.registry = registry
        self.config_loader = config_loader
        self.telemetry = telemetry

    def execute(self, paths: Sequence[str]) -> LintResult:
        """Apply fixes to all files under ``paths``; return what was found and corrected."""
        lint = LintFilesUseCase(
            parser_gateway=self.parser_gateway,
            filesystem=self.filesystem,
            registry=self.registry,
            config_loader=self.config_loader,
            telemetry=self.telemetry,
        )
        files = lint.target_files(paths)
        self.telemetry.step(f"Correcting {len(files)} file(s)")
        result = LintResult()
        for file_path in files:
            rules = self.registry.for_file(self.config_loader, file_path)
            if not rules:
                result.files.append(FileReport(file_path=file_path))
                continue
            result.files.append(self._fix_file(file_path, rules))

        modified = sum(1 for f in result.files if f.modified)
        self.telemetry.step(
            f"Fix run complete. Files repaired: {modified}, offenses corrected: {result.corrected_count}"
        )
        return result

    def _fix_file(self, file_path: str, rules: list[Checkable]) -> FileReport:
        original = self.filesystem.read_text(file_path)
        try:
            first, corrected_source = self.correct_source(original, file_path, rules)
        except (RubySyntaxError, InfiniteCorrectionLoopError) as exc:
            self.telemetry.warning(str(exc))
            return FileReport(file_path=file_path, failure=str(exc))

        report = FileReport(
            file_path=file_path,
            offenses=list(first.offenses),
            errors=list(first.errors),
            corrected=[o for o in first.offenses if o.correctable],
        )
        if corrected_source != original:
            self.filesystem.write_text(file_path, corrected_source)
            report.modified = True
            self.telemetry.step(f"Auto-corrected: {file_path}")
        return report

    def correct_source(
        self, source: str, file_path: str, rules: Sequence[Checkable]
    ) -> tuple[InspectionReport, str]:
        """
        Run correction passes over ``source``.

        Returns the first pass's report (offenses located in the original
        text) and the fully corrected text.

        Raises:
            RubySyntaxError: the original or a corrected text does not parse.
            InfiniteCorrectionLoopError: passes revisit a text or never settle.
        """
        inspector = InspectSourceUseCase(rules)
        max_passes = self.config_loader.max_fix_passes
        seen = {source}
        current = source
        first: InspectionReport | None = None
        # the final pass only confirms that nothing is left to correct
        for pass_number in range(max_passes + 1):
            root = self.parser_gateway.parse(current, file_path)
            report = inspector.execute(root, InspectionContext.for_file(file_path, current))
            if first is None:
                first = report
            edits = report.edits
            if not edits:
                return first, current
            if pass_number == max_passes:
                break
            current = self.fixer_gateway.apply_edits(current, edits)
            logger.debug("Applied %d edit(s) to %s", len(edits), file_path)
            if current in seen:
                raise InfiniteCorrectionLoopError(file_path, len(seen))
            seen.add(current)
        raise InfiniteCorrectionLoopError(file_path, max_passes)
