"""LaunchDarkly flag defaults rule (Dutchie/LaunchDarklyDefaults)."""

from dutchie_style.domain.entities import TextEdit
from dutchie_style.domain.nodes import SyntaxNode
from dutchie_style.domain.rule_msgs import FLAG_MESSAGES
from dutchie_style.domain.rules import Checkable, InspectionContext, Offense
from dutchie_style.domain.rules.arguments import (
    KEYWORD_DEFAULT_FAMILIES,
    PREDICATE_FAMILIES,
    is_compliant,
)
from dutchie_style.domain.rules.corrections import (
    default_kwarg_edit,
    positional_default_edit,
    variation_edit,
)
from dutchie_style.domain.rules.matchers import CallFamily, CallMatch, match_flag_call


class LaunchDarklyDefaultsRule(Checkable):
    """
    Every feature flag lookup must carry a fallback value so that a
    LaunchDarkly outage degrades to a known answer instead of an error.

    Covers the ``DutchieFeatureFlags`` helpers (``flag``, ``context_flag``,
    ``dispensary_flag``, ``enterprise_flag``, ``on?``, ``off?``) and direct
    client calls (``ld_client.variation``,
    ``MenuConnector::App[:launchdarkly].variation``,
    ``MenuConnector::MockLaunchDarkly.variation``). Every offense is
    auto-correctable with a ``false`` default.
    """

    name: str = "Dutchie/LaunchDarklyDefaults"
    description: str = "Ensures LaunchDarkly feature flag lookups pass a default value."
    node_types: tuple[str, ...] = ("send",)

    def check(self, node: SyntaxNode, context: InspectionContext) -> list[Offense]:
        """Check one send node. Returns at most one offense."""
        call = match_flag_call(node)
        if call is None:
            return []
        # Mock client calls are expected in test code
        if call.family is CallFamily.MOCK_VARIATION and context.in_spec_directory:
            return []
        if is_compliant(call.family, call.tail):
            return []
        return [
            Offense.from_node(
                rule=self.name,
                message=FLAG_MESSAGES[call.family],
                node=node,
                context=context,
                edits=(self._correction(call),),
            )
        ]

    def _correction(self, call: CallMatch) -> TextEdit:
        if call.family is CallFamily.FLAG:
            return positional_default_edit(call.flag_key)
        if call.family in KEYWORD_DEFAULT_FAMILIES or call.family in PREDICATE_FAMILIES:
            return default_kwarg_edit(call.flag_key, call.tail)
        return variation_edit(call.flag_key, call.tail)
