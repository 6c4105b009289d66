"""Migration safety bypass rule (Dutchie/MigrationSafetyAssured)."""

from dutchie_style.domain.nodes import SyntaxNode
from dutchie_style.domain.rule_msgs import SAFETY_ASSURED_MESSAGE
from dutchie_style.domain.rules import Checkable, InspectionContext, Offense
from dutchie_style.domain.rules.matchers import is_safety_assured_block


class MigrationSafetyAssuredRule(Checkable):
    """
    Flags every ``safety_assured`` block.

    The block bypasses strong_migrations safety checks. There is no
    correction and no file-based exemption, test files included.
    """

    name: str = "Dutchie/MigrationSafetyAssured"
    description: str = "Flags safety_assured blocks that bypass strong_migrations checks."
    node_types: tuple[str, ...] = ("block",)

    def check(self, node: SyntaxNode, context: InspectionContext) -> list[Offense]:
        if not is_safety_assured_block(node):
            return []
        return [
            Offense.from_node(
                rule=self.name,
                message=SAFETY_ASSURED_MESSAGE,
                node=node,
                context=context,
            )
        ]
