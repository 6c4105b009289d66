"""The set of rules dutchie-style knows about."""

from dutchie_style.domain.config import ConfigurationLoader
from dutchie_style.domain.rules import Checkable
from dutchie_style.domain.rules.launchdarkly_defaults import LaunchDarklyDefaultsRule
from dutchie_style.domain.rules.migration_safety_assured import MigrationSafetyAssuredRule


class RuleRegistry:
    """Ordered collection of rule instances, looked up by name."""

    def __init__(self, rules: list[Checkable] | None = None) -> None:
        if rules is None:
            rules = [LaunchDarklyDefaultsRule(), MigrationSafetyAssuredRule()]
        self._rules: dict[str, Checkable] = {rule.name: rule for rule in rules}

    def __iter__(self):
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def get(self, name: str) -> Checkable | None:
        return self._rules.get(name)

    def names(self) -> list[str]:
        return list(self._rules)

    def for_file(self, config: ConfigurationLoader, path: str) -> list[Checkable]:
        """Rules enabled by ``config`` whose Include/Exclude patterns admit ``path``."""
        return [rule for rule in self._rules.values() if config.rule_applies_to(rule.name, path)]
