from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from dutchie_style.domain.nodes import SourceRange, SyntaxNode

if TYPE_CHECKING:
    from dutchie_style.domain.rules import Offense

Anchor = Union[SyntaxNode, SourceRange]


@dataclass(frozen=True)
class TextEdit:
    """
    Pure data structure describing a single text insertion.

    Rules return these instead of touching the source; the fixer gateway
    interprets them and splices the text into the file. Edits only ever
    insert, so two edits anchored on distinct nodes never conflict.
    """

    position: int
    content: str

    @staticmethod
    def _range_of(anchor: Anchor) -> SourceRange:
        return anchor.expression if isinstance(anchor, SyntaxNode) else anchor

    @classmethod
    def insert_after(cls, anchor: Anchor, content: str) -> "TextEdit":
        """Insert ``content`` immediately after the end of a node or range."""
        return cls(position=cls._range_of(anchor).end_pos, content=content)

    @classmethod
    def insert_before(cls, anchor: Anchor, content: str) -> "TextEdit":
        """Insert ``content`` immediately before the start of a node or range."""
        return cls(position=cls._range_of(anchor).begin_pos, content=content)


@dataclass(frozen=True)
class InspectionError:
    """A rule raised while inspecting one node; the rest of the file was still inspected."""

    rule: str
    location: str
    detail: str


@dataclass(frozen=True)
class InspectionReport:
    """Everything found in one pass over one file."""

    file_path: str
    offenses: tuple["Offense", ...] = ()
    errors: tuple[InspectionError, ...] = ()

    @property
    def edits(self) -> list[TextEdit]:
        return [edit for offense in self.offenses for edit in offense.edits]


@dataclass
class FileReport:
    """Outcome for one file of a check or fix run."""

    file_path: str
    offenses: list["Offense"] = field(default_factory=list)
    errors: list[InspectionError] = field(default_factory=list)
    corrected: list["Offense"] = field(default_factory=list)
    failure: str | None = None
    modified: bool = False

    @property
    def remaining(self) -> list["Offense"]:
        corrected_ids = {id(o) for o in self.corrected}
        return [o for o in self.offenses if id(o) not in corrected_ids]


@dataclass
class LintResult:
    """Aggregate result of a check or fix run."""

    files: list[FileReport] = field(default_factory=list)

    @property
    def offense_count(self) -> int:
        return sum(len(f.offenses) for f in self.files)

    @property
    def corrected_count(self) -> int:
        return sum(len(f.corrected) for f in self.files)

    @property
    def remaining_count(self) -> int:
        return sum(len(f.remaining) for f in self.files)

    @property
    def failed_files(self) -> list[FileReport]:
        return [f for f in self.files if f.failure is not None]

    def has_violations(self) -> bool:
        return self.remaining_count > 0
