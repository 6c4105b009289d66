"""Insertions that give a non-compliant flag lookup its missing default."""

from collections.abc import Sequence

from dutchie_style.domain.entities import TextEdit
from dutchie_style.domain.errors import MatchContractError
from dutchie_style.domain.nodes import SyntaxNode

DEFAULT_VALUE = "false"


def positional_default_edit(flag_key: SyntaxNode) -> TextEdit:
    """``flag("key")`` -> ``flag("key", false)``"""
    return TextEdit.insert_after(flag_key, f", {DEFAULT_VALUE}")


def default_kwarg_edit(flag_key: SyntaxNode, tail: Sequence[SyntaxNode]) -> TextEdit:
    """Add ``default: false`` to the call, inside its trailing keyword mapping if it has one."""
    if not tail:
        return TextEdit.insert_after(flag_key, f", default: {DEFAULT_VALUE}")
    last = tail[-1]
    if not last.is_hash:
        return TextEdit.insert_after(last, f", default: {DEFAULT_VALUE}")
    members = last.child_nodes()
    if members:
        return TextEdit.insert_after(members[-1], f", default: {DEFAULT_VALUE}")
    # empty braced mapping: "{}" -> "{default: false}"
    closing_brace = last.expression.end.adjust(begin_pos=-1)
    return TextEdit.insert_before(closing_brace, f"default: {DEFAULT_VALUE}")


def variation_edit(flag_key: SyntaxNode, tail: Sequence[SyntaxNode]) -> TextEdit:
    """Supply whichever of (context, default) is missing from a variation call."""
    if not tail:
        return TextEdit.insert_after(flag_key, f", nil, {DEFAULT_VALUE}")
    if len(tail) == 1:
        return TextEdit.insert_after(tail[0], f", {DEFAULT_VALUE}")
    raise MatchContractError("variation call already has a context and a default")
