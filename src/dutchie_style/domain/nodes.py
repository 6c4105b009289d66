"""Syntax tree model shared by the parser gateway, the matchers and the rules."""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Union

Child = Union["SyntaxNode", str, None]


@dataclass(frozen=True)
class SourceRange:
    """Half-open byte range into the UTF-8 encoded source."""

    begin_pos: int
    end_pos: int
    line: int = 1
    column: int = 0

    @property
    def size(self) -> int:
        return self.end_pos - self.begin_pos

    @property
    def begin(self) -> "SourceRange":
        """Zero-length range at the start of this range."""
        return replace(self, end_pos=self.begin_pos)

    @property
    def end(self) -> "SourceRange":
        """Zero-length range at the end of this range."""
        return replace(self, begin_pos=self.end_pos)

    def adjust(self, begin_pos: int = 0, end_pos: int = 0) -> "SourceRange":
        """Return a copy with both boundaries shifted by the given amounts."""
        return replace(
            self,
            begin_pos=self.begin_pos + begin_pos,
            end_pos=self.end_pos + end_pos,
        )


@dataclass(frozen=True)
class SyntaxNode:
    """
    Immutable tagged-variant node.

    Kinds and child layouts follow the parser-gem vocabulary:

    - ``send``  (receiver | None, method_name, *arguments)
    - ``block`` (send, args, body | None)
    - ``const`` (scope | None, name)
    - ``sym`` / ``str`` (value)
    - ``hash``  (*pairs)
    - ``pair``  (key, value)
    """

    type: str
    children: tuple[Child, ...] = ()
    expression: SourceRange = field(default_factory=lambda: SourceRange(0, 0))
    source: str = ""

    def __repr__(self) -> str:
        inner = " ".join(repr(c) for c in self.children)
        return f"({self.type}{' ' + inner if inner else ''})"

    # -- send -----------------------------------------------------------------

    @property
    def receiver(self) -> "SyntaxNode | None":
        child = self.children[0] if self.children else None
        return child if isinstance(child, SyntaxNode) else None

    @property
    def method_name(self) -> str | None:
        if self.type not in ("send", "csend") or len(self.children) < 2:
            return None
        name = self.children[1]
        return name if isinstance(name, str) else None

    @property
    def arguments(self) -> tuple["SyntaxNode", ...]:
        if self.type not in ("send", "csend"):
            return ()
        return tuple(c for c in self.children[2:] if isinstance(c, SyntaxNode))

    # -- block ----------------------------------------------------------------

    @property
    def send_node(self) -> "SyntaxNode | None":
        if self.type != "block":
            return None
        return self.receiver

    @property
    def body(self) -> "SyntaxNode | None":
        if self.type != "block" or len(self.children) < 3:
            return None
        child = self.children[2]
        return child if isinstance(child, SyntaxNode) else None

    # -- hash / pair ----------------------------------------------------------

    @property
    def is_hash(self) -> bool:
        return self.type == "hash"

    @property
    def braced(self) -> bool:
        """True for a hash literal written with braces, False for bare keyword arguments."""
        return self.is_hash and self.source.startswith("{")

    @property
    def pairs(self) -> tuple["SyntaxNode", ...]:
        return tuple(c for c in self.children if isinstance(c, SyntaxNode) and c.type == "pair")

    @property
    def key(self) -> "SyntaxNode | None":
        if self.type != "pair":
            return None
        return self.receiver

    @property
    def value(self) -> Child:
        if self.type == "pair":
            return self.children[1] if len(self.children) > 1 else None
        return self.children[0] if self.children else None

    def is_sym_named(self, name: str) -> bool:
        return self.type == "sym" and self.value == name

    # -- traversal ------------------------------------------------------------

    def child_nodes(self) -> tuple["SyntaxNode", ...]:
        return tuple(c for c in self.children if isinstance(c, SyntaxNode))

    def each_node(self) -> Iterator["SyntaxNode"]:
        """Yield this node and every descendant node, depth first, in source order."""
        stack: list[SyntaxNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.child_nodes()))
