"""Unit tests for FileSystemGateway."""

from pathlib import Path

from dutchie_style.infrastructure.gateways.filesystem_gateway import FileSystemGateway


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestDiscoverRubyFiles:

    def test_directory_expands_to_ruby_files(self, tmp_path: Path) -> None:
        _touch(tmp_path / "app" / "models" / "menu.rb")
        _touch(tmp_path / "lib" / "tasks" / "flags.rake")
        _touch(tmp_path / "Gemfile")
        _touch(tmp_path / "README.md")

        found = FileSystemGateway().discover_ruby_files([str(tmp_path)])

        assert found == sorted([
            str(tmp_path / "Gemfile"),
            str(tmp_path / "app" / "models" / "menu.rb"),
            str(tmp_path / "lib" / "tasks" / "flags.rake"),
        ])

    def test_hidden_directories_are_skipped(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".git" / "hooks" / "x.rb")
        _touch(tmp_path / "app.rb")
        assert FileSystemGateway().discover_ruby_files([str(tmp_path)]) == [str(tmp_path / "app.rb")]

    def test_explicit_file_is_kept_whatever_its_name(self, tmp_path: Path) -> None:
        script = _touch(tmp_path / "bin" / "console")
        assert FileSystemGateway().discover_ruby_files([str(script)]) == [str(script)]

    def test_duplicates_and_missing_paths(self, tmp_path: Path) -> None:
        ruby = _touch(tmp_path / "a.rb")
        found = FileSystemGateway().discover_ruby_files([str(ruby), str(tmp_path), str(tmp_path / "nope")])
        assert found == [str(ruby)]


class TestReadWrite:

    def test_line_endings_survive_round_trip(self, tmp_path: Path) -> None:
        gateway = FileSystemGateway()
        target = tmp_path / "win.rb"
        gateway.write_text(str(target), "flag(x)\r\nputs 1\r\n")
        assert gateway.read_text(str(target)) == "flag(x)\r\nputs 1\r\n"
        assert target.read_bytes() == b"flag(x)\r\nputs 1\r\n"
