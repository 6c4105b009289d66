"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from collections.abc import Sequence
from pathlib import Path

from dutchie_style.domain.protocols import FileSystemProtocol

RUBY_SUFFIXES = (".rb", ".rake", ".gemspec", ".ru")
RUBY_FILENAMES = ("Gemfile", "Rakefile", "Guardfile")


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def discover_ruby_files(self, paths: Sequence[str]) -> list[str]:
        """Expand files and directories into a sorted, de-duplicated list of Ruby files."""
        found: set[str] = set()
        for path in paths:
            path_obj = Path(path)
            if path_obj.is_dir():
                found.update(
                    str(p)
                    for p in path_obj.rglob("*")
                    if p.is_file() and self.is_ruby_file(p)
                    and not any(part.startswith(".") for part in p.relative_to(path_obj).parts)
                )
            elif path_obj.is_file():
                # An explicitly named file is inspected whatever its name
                found.add(str(path_obj))
        return sorted(found)

    @staticmethod
    def is_ruby_file(path: Path) -> bool:
        return path.suffix in RUBY_SUFFIXES or path.name in RUBY_FILENAMES

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read a text file, keeping its line endings."""
        with open(path, encoding=encoding, newline="") as f:
            return f.read()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file, keeping its line endings."""
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)
