"""Terminal telemetry: progress lines on stderr, mirrored to the logging tree."""

import logging

import typer

from dutchie_style.domain.protocols import TelemetryPort

logger = logging.getLogger("dutchie_style")


class ProjectTelemetry(TelemetryPort):
    """TelemetryPort that writes to stderr so stdout stays machine readable."""

    def __init__(self, project_name: str, color: str = "blue", quiet: bool = False) -> None:
        self.project_name = project_name
        self.color = color
        self.quiet = quiet

    def handshake(self) -> None:
        if not self.quiet:
            typer.secho(f"[{self.project_name}] online", fg=self.color, bold=True, err=True)

    def step(self, message: str) -> None:
        logger.info(message)
        if not self.quiet:
            typer.secho(f"[{self.project_name}] {message}", fg=self.color, err=True)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)
