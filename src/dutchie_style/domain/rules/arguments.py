"""Classify the arguments that follow a flag key."""

from collections.abc import Sequence
from enum import Enum

from dutchie_style.domain.errors import MatchContractError
from dutchie_style.domain.nodes import SyntaxNode
from dutchie_style.domain.rules.matchers import CallFamily


class ArgumentShape(Enum):
    NO_TAIL_ARGS = "no-tail-args"
    POSITIONAL_DEFAULT = "positional-default-present"
    KEYWORD_DEFAULT = "keyword-default-present"
    KEYWORD_DEFAULT_ABSENT = "keyword-default-absent-other-keywords-present"


KEYWORD_DEFAULT_FAMILIES = frozenset({
    CallFamily.CONTEXT_FLAG,
    CallFamily.DISPENSARY_FLAG,
    CallFamily.ENTERPRISE_FLAG,
})
PREDICATE_FAMILIES = frozenset({CallFamily.ON, CallFamily.OFF})
VARIATION_FAMILIES = frozenset({CallFamily.VARIATION, CallFamily.MOCK_VARIATION})


def has_default_kwarg(tail: Sequence[SyntaxNode]) -> bool:
    """True if any keyword mapping in ``tail`` has a ``default`` key, wherever it sits."""
    return any(
        pair.key is not None and pair.key.is_sym_named("default")
        for arg in tail
        if arg.is_hash
        for pair in arg.pairs
    )


def has_positional_default(tail: Sequence[SyntaxNode]) -> bool:
    """True if any argument is a plain value. Its value is not inspected."""
    return any(not arg.is_hash for arg in tail)


def classify(tail: Sequence[SyntaxNode]) -> ArgumentShape:
    if not tail:
        return ArgumentShape.NO_TAIL_ARGS
    if has_default_kwarg(tail):
        return ArgumentShape.KEYWORD_DEFAULT
    if has_positional_default(tail):
        return ArgumentShape.POSITIONAL_DEFAULT
    return ArgumentShape.KEYWORD_DEFAULT_ABSENT


def is_compliant(family: CallFamily, tail: Sequence[SyntaxNode]) -> bool:
    """Whether a call of ``family`` with these trailing arguments already has a default."""
    if family is CallFamily.FLAG:
        return classify(tail) is not ArgumentShape.NO_TAIL_ARGS
    if family in KEYWORD_DEFAULT_FAMILIES:
        return classify(tail) is ArgumentShape.KEYWORD_DEFAULT
    if family in PREDICATE_FAMILIES:
        return classify(tail) in (ArgumentShape.KEYWORD_DEFAULT, ArgumentShape.POSITIONAL_DEFAULT)
    if family in VARIATION_FAMILIES:
        # (context, default) must both be present; values are not inspected
        return len(tail) >= 2
    raise MatchContractError(f"Unknown call family: {family}")
