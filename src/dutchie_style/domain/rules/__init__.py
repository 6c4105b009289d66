"""Domain models for rules and offenses."""

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Protocol

from dutchie_style.domain.entities import TextEdit
from dutchie_style.domain.nodes import SyntaxNode

__all__ = [
    "Checkable",
    "InspectionContext",
    "Offense",
]


@dataclass(frozen=True)
class InspectionContext:
    """
    Per-file facts a rule may consult. Rules never keep state between files.

    ``file_path`` is the path as displayed in reports; ``absolute_path`` is
    the resolved location used for directory-based exemptions.
    """

    file_path: str
    source: str = ""
    absolute_path: str | None = None

    @classmethod
    def for_file(cls, file_path: str, source: str) -> "InspectionContext":
        return cls(file_path=file_path, source=source, absolute_path=str(Path(file_path).resolve()))

    @property
    def in_spec_directory(self) -> bool:
        """True when the file lives under a ``spec/`` directory."""
        return "spec/" in PurePath(self.absolute_path or self.file_path).as_posix()


@dataclass(frozen=True)
class Offense:
    """A rule violation tied to a node, with the insertions that correct it (if any)."""

    rule: str
    message: str
    location: str
    node: SyntaxNode
    edits: tuple[TextEdit, ...] = ()

    @property
    def correctable(self) -> bool:
        return bool(self.edits)

    @property
    def line(self) -> int:
        return self.node.expression.line

    @property
    def column(self) -> int:
        """1-based column of the offending node."""
        return self.node.expression.column + 1

    @classmethod
    def from_node(
        cls,
        *,
        rule: str,
        message: str,
        node: SyntaxNode,
        context: InspectionContext,
        edits: tuple[TextEdit, ...] = (),
    ) -> "Offense":
        """Build an Offense with location derived from node. Prefer over manual location=."""
        location = f"{context.file_path}:{node.expression.line}:{node.expression.column + 1}"
        return cls(rule=rule, message=message, location=location, node=node, edits=edits)


class Checkable(Protocol):
    """A stateless rule: given a node of one of its kinds, return offenses."""

    name: str
    description: str
    node_types: tuple[str, ...]

    def check(self, node: SyntaxNode, context: InspectionContext) -> list[Offense]:
        """Interrogate one node. A node the rule does not recognise yields []."""
        ...
