"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from dutchie_style.infrastructure.di.container import DutchieStyleContainer
from dutchie_style.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = DutchieStyleContainer.get_instance()

    deps = CLIDependencies(
        telemetry=container.get_telemetry_port(),
        parser_gateway=container.get_parser_gateway(),
        fixer_gateway=container.get_fixer_gateway(),
        filesystem=container.get_filesystem_gateway(),
        registry=container.get_rule_registry(),
        reporters=container.get_reporters(),
        config_factory=container.load_configuration,
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
