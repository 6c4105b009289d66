"""Use Case: Inspect one parsed file with a set of rules."""

import logging
from collections import defaultdict
from collections.abc import Sequence

from dutchie_style.domain.entities import InspectionError, InspectionReport
from dutchie_style.domain.nodes import SyntaxNode
from dutchie_style.domain.rules import Checkable, InspectionContext, Offense

logger = logging.getLogger(__name__)


class InspectSourceUseCase:
    """
    Walk a tree once and hand each node to the rules interested in its kind.

    A rule that raises on one node is logged and recorded as an
    InspectionError; the walk carries on with the remaining rules and nodes.
    """

    def __init__(self, rules: Sequence[Checkable]) -> None:
        self._rules_by_type: dict[str, list[Checkable]] = defaultdict(list)
        for rule in rules:
            for node_type in rule.node_types:
                self._rules_by_type[node_type].append(rule)

    def execute(self, root: SyntaxNode, context: InspectionContext) -> InspectionReport:
        offenses: list[Offense] = []
        errors: list[InspectionError] = []
        for node in root.each_node():
            for rule in self._rules_by_type.get(node.type, ()):
                try:
                    offenses.extend(rule.check(node, context))
                except Exception as exc:
                    location = f"{context.file_path}:{node.expression.line}:{node.expression.column + 1}"
                    logger.exception("An error occurred while %s was inspecting %s", rule.name, location)
                    errors.append(InspectionError(rule=rule.name, location=location, detail=repr(exc)))
        offenses.sort(key=lambda o: (o.node.expression.begin_pos, o.rule))
        return InspectionReport(
            file_path=context.file_path,
            offenses=tuple(offenses),
            errors=tuple(errors),
        )
