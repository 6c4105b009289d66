from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from dutchie_style.domain.entities import TextEdit
    from dutchie_style.domain.nodes import SyntaxNode


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class ParserGatewayProtocol(Protocol):
    """Turns Ruby source text into a SyntaxNode tree."""

    def parse(self, source: str, file_path: str = "(string)") -> "SyntaxNode":
        """Parse ``source``; raise RubySyntaxError if it is not valid Ruby."""
        ...


class FixerGatewayProtocol(Protocol):
    """Applies text edits produced by rules."""

    def apply_edits(self, source: str, edits: Sequence["TextEdit"]) -> str:
        """Return ``source`` with every insertion spliced in."""
        ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def discover_ruby_files(self, paths: Sequence[str]) -> list[str]:
        """Expand files and directories into a sorted list of Ruby source files."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read a text file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...
