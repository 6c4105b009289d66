"""Call-shape matchers for feature flag lookups and migration safety bypasses."""

from dataclasses import dataclass
from enum import Enum

from dutchie_style.domain.errors import MatchContractError
from dutchie_style.domain.nodes import Child, SyntaxNode
from dutchie_style.domain.patterns import ANY, CAPTURE, CAPTURE_REST, REST, Where, match


class CallFamily(Enum):
    """The recognised flag lookup call families."""

    FLAG = "flag"
    CONTEXT_FLAG = "context_flag"
    DISPENSARY_FLAG = "dispensary_flag"
    ENTERPRISE_FLAG = "enterprise_flag"
    ON = "on?"
    OFF = "off?"
    VARIATION = "variation"
    MOCK_VARIATION = "mock_variation"


@dataclass(frozen=True)
class CallMatch:
    """Captures of a matched flag lookup: the flag key and every argument after it."""

    family: CallFamily
    flag_key: SyntaxNode
    tail: tuple[SyntaxNode, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.flag_key, SyntaxNode):
            raise MatchContractError(f"{self.family.value} match captured no flag key")
        if not all(isinstance(arg, SyntaxNode) for arg in self.tail):
            raise MatchContractError(f"{self.family.value} match captured a non-node argument")


FEATURE_FLAGS = ("const", None, "DutchieFeatureFlags")
MENU_CONNECTOR = ("const", None, "MenuConnector")

BARE_LD_CLIENT = ("send", None, "ld_client")
MENU_CONNECTOR_LAUNCHDARKLY = (
    "send",
    ("const", MENU_CONNECTOR, "App"),
    "[]",
    ("sym", "launchdarkly"),
)
LD_CLIENT_ACCESSOR = ("send", ANY, "ld_client")


def is_bare_ld_client(node: Child) -> bool:
    """``ld_client``"""
    return match(BARE_LD_CLIENT, node) is not None


def is_menu_connector_launchdarkly(node: Child) -> bool:
    """``MenuConnector::App[:launchdarkly]``"""
    return match(MENU_CONNECTOR_LAUNCHDARKLY, node) is not None


def is_ld_client_accessor(node: Child) -> bool:
    """``anything.ld_client``"""
    return match(LD_CLIENT_ACCESSOR, node) is not None


def is_launchdarkly_client(node: Child) -> bool:
    return (
        is_bare_ld_client(node)
        or is_menu_connector_launchdarkly(node)
        or is_ld_client_accessor(node)
    )


def _feature_flags_call(method: str) -> tuple:
    return ("send", FEATURE_FLAGS, method, CAPTURE, CAPTURE_REST)


CALL_PATTERNS = {
    CallFamily.FLAG: _feature_flags_call("flag"),
    CallFamily.CONTEXT_FLAG: _feature_flags_call("context_flag"),
    CallFamily.DISPENSARY_FLAG: _feature_flags_call("dispensary_flag"),
    CallFamily.ENTERPRISE_FLAG: _feature_flags_call("enterprise_flag"),
    CallFamily.ON: _feature_flags_call("on?"),
    CallFamily.OFF: _feature_flags_call("off?"),
    CallFamily.VARIATION: (
        "send", Where(is_launchdarkly_client), "variation", CAPTURE, CAPTURE_REST,
    ),
    CallFamily.MOCK_VARIATION: (
        "send", ("const", MENU_CONNECTOR, "MockLaunchDarkly"), "variation", CAPTURE, CAPTURE_REST,
    ),
}

SAFETY_ASSURED_BLOCK = ("block", ("send", None, "safety_assured"), REST)


def match_flag_call(node: SyntaxNode) -> CallMatch | None:
    """Return the captures of the one family ``node`` belongs to, or None."""
    if node.type != "send":
        return None
    # Method names differ between families, so at most one pattern matches.
    for family, pattern in CALL_PATTERNS.items():
        captures = match(pattern, node)
        if captures is not None:
            flag_key, tail = captures
            return CallMatch(family=family, flag_key=flag_key, tail=tuple(tail))
    return None


def is_safety_assured_block(node: SyntaxNode) -> bool:
    """``safety_assured do ... end`` / ``safety_assured { ... }``, whatever the body."""
    return match(SAFETY_ASSURED_BLOCK, node) is not None
