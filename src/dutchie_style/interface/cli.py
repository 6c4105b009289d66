"""CLI entry points for dutchie-style - Thin Controller using Typer."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import typer

from dutchie_style.domain.config import ConfigurationLoader
from dutchie_style.domain.errors import ConfigurationError
from dutchie_style.domain.protocols import (
    FileSystemProtocol,
    FixerGatewayProtocol,
    ParserGatewayProtocol,
    TelemetryPort,
)
from dutchie_style.domain.rules.registry import RuleRegistry
from dutchie_style.interface.reporters import LintReporter
from dutchie_style.use_cases.apply_fixes import ApplyFixesUseCase
from dutchie_style.use_cases.lint_files import LintFilesUseCase

EXIT_CLEAN = 0
EXIT_OFFENSES = 1
EXIT_CONFIG_ERROR = 2

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    telemetry: TelemetryPort
    parser_gateway: ParserGatewayProtocol
    fixer_gateway: FixerGatewayProtocol
    filesystem: FileSystemProtocol
    registry: RuleRegistry
    reporters: dict[str, LintReporter]
    config_factory: Callable[[str | None], ConfigurationLoader]


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def resolve_target_paths(paths: list[Path] | None) -> list[str]:
        """Explicit paths as given, else the current directory."""
        if not paths:
            return ["."]
        return [str(p) for p in paths]

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        package_logger = logging.getLogger("dutchie_style")
        package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            package_logger.addHandler(handler)

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="dutchie-style",
            help="dutchie-style: LaunchDarkly default and migration safety checks for Ruby code. "
            "Run 'dutchie-style check' to report; 'dutchie-style fix' to auto-correct.",
            add_completion=False,
        )

        def _load_config(config: Path | None) -> ConfigurationLoader:
            try:
                return deps.config_factory(str(config) if config else None)
            except ConfigurationError as exc:
                typer.secho(f"Configuration error: {exc}", fg="red", err=True)
                raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

        def _reporter(output_format: str) -> LintReporter:
            reporter = deps.reporters.get(output_format)
            if reporter is None:
                choices = ", ".join(sorted(deps.reporters))
                typer.secho(f"Unknown format {output_format!r}; choose one of: {choices}", fg="red", err=True)
                raise typer.Exit(code=EXIT_CONFIG_ERROR)
            return reporter

        @app.command()
        def check(
            paths: list[Path] | None = typer.Argument(None, help="Files or directories to inspect (default: .)"),  # noqa: B008
            output_format: str = typer.Option("text", "--format", "-f", help="Report format: text or json"),
            config: Path | None = typer.Option(None, "--config", "-c", help="YAML configuration file"),  # noqa: B008
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        ) -> None:
            """Report offenses without changing any file."""
            CLIAppFactory.configure_logging(verbose)
            reporter = _reporter(output_format)
            config_loader = _load_config(config)
            deps.telemetry.handshake()
            use_case = LintFilesUseCase(
                parser_gateway=deps.parser_gateway,
                filesystem=deps.filesystem,
                registry=deps.registry,
                config_loader=config_loader,
                telemetry=deps.telemetry,
            )
            result = use_case.execute(CLIAppFactory.resolve_target_paths(paths))
            typer.echo(reporter.render(result))
            if result.has_violations() or result.failed_files:
                raise typer.Exit(code=EXIT_OFFENSES)

        @app.command()
        def fix(
            paths: list[Path] | None = typer.Argument(None, help="Files or directories to correct (default: .)"),  # noqa: B008
            output_format: str = typer.Option("text", "--format", "-f", help="Report format: text or json"),
            config: Path | None = typer.Option(None, "--config", "-c", help="YAML configuration file"),  # noqa: B008
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        ) -> None:
            """Auto-correct offenses in place, then report what could not be corrected."""
            CLIAppFactory.configure_logging(verbose)
            reporter = _reporter(output_format)
            config_loader = _load_config(config)
            deps.telemetry.handshake()
            use_case = ApplyFixesUseCase(
                parser_gateway=deps.parser_gateway,
                fixer_gateway=deps.fixer_gateway,
                filesystem=deps.filesystem,
                registry=deps.registry,
                config_loader=config_loader,
                telemetry=deps.telemetry,
            )
            result = use_case.execute(CLIAppFactory.resolve_target_paths(paths))
            typer.echo(reporter.render(result))
            if result.has_violations() or result.failed_files:
                raise typer.Exit(code=EXIT_OFFENSES)

        @app.command()
        def rules(
            config: Path | None = typer.Option(None, "--config", "-c", help="YAML configuration file"),  # noqa: B008
        ) -> None:
            """List the known rules and whether they are enabled."""
            config_loader = _load_config(config)
            for rule in deps.registry:
                state = "enabled" if config_loader.is_rule_enabled(rule.name) else "disabled"
                typer.echo(f"{rule.name} ({state}): {rule.description}")

        return app
