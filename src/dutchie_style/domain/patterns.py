"""
Structural pattern matching over SyntaxNode trees.

A pattern is plain data:

- ``(kind, *child_patterns)`` matches a node of that kind whose children
  match the child patterns positionally.
- a ``str`` or ``None`` matches a child equal to it (method names, constant
  names, an absent receiver).
- ``ANY`` matches anything, ``CAPTURE`` matches anything and captures it.
- ``REST`` / ``CAPTURE_REST`` as the last child pattern match zero or more
  remaining children; the latter captures them as a tuple.
- ``AnyOf(*patterns)`` tries alternatives in order.
- ``Where(predicate)`` applies a boolean predicate to the child.

``match`` returns the captures in pattern order, or ``None`` on a miss.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dutchie_style.domain.nodes import Child, SyntaxNode


class _Marker:
    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name


ANY = _Marker("ANY")
CAPTURE = _Marker("CAPTURE")
REST = _Marker("REST")
CAPTURE_REST = _Marker("CAPTURE_REST")


@dataclass(frozen=True)
class AnyOf:
    alternatives: tuple[Any, ...]

    def __init__(self, *alternatives: Any) -> None:
        object.__setattr__(self, "alternatives", alternatives)


@dataclass(frozen=True)
class Where:
    predicate: Callable[[Child], bool]


def match(pattern: Any, node: Child) -> list[Any] | None:
    """Match ``node`` against ``pattern``; return the captures or None."""
    captures: list[Any] = []
    if _match_into(pattern, node, captures):
        return captures
    return None


def _match_into(pattern: Any, node: Child, captures: list[Any]) -> bool:
    if pattern is ANY:
        return True
    if pattern is CAPTURE:
        captures.append(node)
        return True
    if isinstance(pattern, AnyOf):
        for alternative in pattern.alternatives:
            attempt: list[Any] = []
            if _match_into(alternative, node, attempt):
                captures.extend(attempt)
                return True
        return False
    if isinstance(pattern, Where):
        return bool(pattern.predicate(node))
    if isinstance(pattern, tuple):
        if not isinstance(node, SyntaxNode) or not pattern or node.type != pattern[0]:
            return False
        return _match_children(pattern[1:], node.children, captures)
    return node == pattern


def _match_children(patterns: tuple[Any, ...], children: tuple[Child, ...], captures: list[Any]) -> bool:
    for index, child_pattern in enumerate(patterns):
        if child_pattern is REST:
            return index == len(patterns) - 1
        if child_pattern is CAPTURE_REST:
            if index != len(patterns) - 1:
                return False
            captures.append(tuple(children[index:]))
            return True
        if index >= len(children):
            return False
        if not _match_into(child_pattern, children[index], captures):
            return False
    return len(patterns) == len(children)
