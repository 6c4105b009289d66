"""Pytest configuration.

Run pytest from this project's root; pythonpath in pyproject.toml puts
src/ and the project root on sys.path so tests import dutchie_style and
tests.node_factory.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """The CLI attaches a stderr handler; drop it so it never outlives a CliRunner stream."""
    package_logger = logging.getLogger("dutchie_style")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    for handler in package_logger.handlers:
        if handler not in handlers:
            package_logger.removeHandler(handler)
    package_logger.setLevel(level)
