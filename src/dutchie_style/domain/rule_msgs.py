"""Offense messages. Immutable; keyed by call family."""

from types import MappingProxyType

from dutchie_style.domain.rules.matchers import CallFamily

_DEFAULT_KWARG = "DutchieFeatureFlags.{method} must have a default: parameter"
_VARIATION = "LaunchDarkly variation must have a default value as 3rd parameter"

FLAG_MESSAGES = MappingProxyType({
    CallFamily.FLAG: "DutchieFeatureFlags.flag must have a default value as 2nd parameter",
    CallFamily.CONTEXT_FLAG: _DEFAULT_KWARG.format(method="context_flag"),
    CallFamily.DISPENSARY_FLAG: _DEFAULT_KWARG.format(method="dispensary_flag"),
    CallFamily.ENTERPRISE_FLAG: _DEFAULT_KWARG.format(method="enterprise_flag"),
    CallFamily.ON: "DutchieFeatureFlags.on? should have a default: parameter",
    CallFamily.OFF: "DutchieFeatureFlags.off? should have a default: parameter",
    CallFamily.VARIATION: _VARIATION,
    CallFamily.MOCK_VARIATION: _VARIATION,
})

SAFETY_ASSURED_MESSAGE = (
    "Avoid `safety_assured` in migrations. It bypasses strong_migrations safety checks. "
    "Ensure this operation is truly safe, consider safer alternatives, and document why "
    "safety_assured is necessary."
)
