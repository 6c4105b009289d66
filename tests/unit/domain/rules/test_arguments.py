"""Unit tests for trailing argument classification."""

import unittest

from dutchie_style.domain.errors import MatchContractError
from dutchie_style.domain.rules.arguments import (
    ArgumentShape,
    classify,
    has_default_kwarg,
    has_positional_default,
    is_compliant,
)
from dutchie_style.domain.rules.matchers import CallFamily
from tests.node_factory import kwargs, literal, node, pair, send, string, sym


def _default(value: str = "false"):
    return pair(sym("default"), literal(value))


def _other(name: str = "dispensary"):
    return pair(sym(name), send(None, name))


class TestClassify(unittest.TestCase):
    """Test classify() precedence."""

    def test_empty_tail(self) -> None:
        self.assertIs(classify(()), ArgumentShape.NO_TAIL_ARGS)

    def test_keyword_default(self) -> None:
        self.assertIs(classify((kwargs(_default()),)), ArgumentShape.KEYWORD_DEFAULT)

    def test_keyword_default_among_other_keys(self) -> None:
        tail = (kwargs(_other(), _default("true"), _other("user")),)
        self.assertIs(classify(tail), ArgumentShape.KEYWORD_DEFAULT)

    def test_keyword_default_wins_over_positional(self) -> None:
        tail = (literal("true"), kwargs(_default()))
        self.assertIs(classify(tail), ArgumentShape.KEYWORD_DEFAULT)

    def test_positional_value(self) -> None:
        self.assertIs(classify((literal("true"),)), ArgumentShape.POSITIONAL_DEFAULT)

    def test_only_other_keywords(self) -> None:
        self.assertIs(classify((kwargs(_other()),)), ArgumentShape.KEYWORD_DEFAULT_ABSENT)

    def test_string_default_key_is_not_a_default_keyword(self) -> None:
        """Only the symbol key ``default:`` counts."""
        tail = (kwargs(pair(string("default"), literal("false"))),)
        self.assertIs(classify(tail), ArgumentShape.KEYWORD_DEFAULT_ABSENT)

    def test_double_splat_is_not_a_default(self) -> None:
        tail = (kwargs(node("kwsplat", send(None, "options"))),)
        self.assertFalse(has_default_kwarg(tail))
        self.assertFalse(has_positional_default(tail))


class TestIsCompliant(unittest.TestCase):
    """Test is_compliant() per call family."""

    def test_flag_needs_any_second_argument(self) -> None:
        self.assertFalse(is_compliant(CallFamily.FLAG, ()))
        self.assertTrue(is_compliant(CallFamily.FLAG, (literal("false"),)))
        self.assertTrue(is_compliant(CallFamily.FLAG, (kwargs(_other()),)))

    def test_keyword_families_need_default_keyword(self) -> None:
        for family in (CallFamily.CONTEXT_FLAG, CallFamily.DISPENSARY_FLAG, CallFamily.ENTERPRISE_FLAG):
            with self.subTest(family=family):
                self.assertFalse(is_compliant(family, ()))
                self.assertFalse(is_compliant(family, (kwargs(_other()),)))
                self.assertFalse(is_compliant(family, (literal("false"),)))
                self.assertTrue(is_compliant(family, (kwargs(_other(), _default()),)))

    def test_predicates_accept_positional_or_keyword_default(self) -> None:
        for family in (CallFamily.ON, CallFamily.OFF):
            with self.subTest(family=family):
                self.assertFalse(is_compliant(family, ()))
                self.assertFalse(is_compliant(family, (kwargs(_other()),)))
                self.assertTrue(is_compliant(family, (literal("true"),)))
                self.assertTrue(is_compliant(family, (kwargs(_default()),)))

    def test_variation_needs_context_and_default(self) -> None:
        for family in (CallFamily.VARIATION, CallFamily.MOCK_VARIATION):
            with self.subTest(family=family):
                self.assertFalse(is_compliant(family, ()))
                self.assertFalse(is_compliant(family, (send(None, "user"),)))
                self.assertTrue(is_compliant(family, (send(None, "user"), literal("nil"))))

    def test_unknown_family_raises(self) -> None:
        with self.assertRaises(MatchContractError):
            is_compliant("flag", ())
