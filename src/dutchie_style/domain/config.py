"""Configuration model: which rules run, on which files."""

import logging
from collections.abc import Iterable, Mapping
from fnmatch import fnmatch
from pathlib import PurePath

from dutchie_style.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

ALL_RULES = "AllCops"
DEFAULT_MAX_FIX_PASSES = 10


class ConfigurationLoader:
    """
    Resolved configuration, keyed the RuboCop way.

    ``AllCops`` holds global settings (``Exclude``, ``MaxFixPasses``); every
    other top-level key is a rule name mapping to ``Enabled``, ``Include``,
    ``Exclude`` and ``Description``. Project settings are merged per rule
    over the packaged defaults. Globs match paths relative to ``base_dir``
    when one is given.
    """

    def __init__(
        self,
        defaults: Mapping[str, object] | None = None,
        overrides: Mapping[str, object] | None = None,
        base_dir: str | None = None,
    ) -> None:
        self._base_dir = PurePath(base_dir) if base_dir else None
        self._config: dict[str, dict[str, object]] = {}
        self._merge(defaults or {}, warn_unknown=False)
        self._merge(overrides or {}, warn_unknown=True)
        self._validate()

    def _merge(self, source: Mapping[str, object], warn_unknown: bool) -> None:
        for section, values in source.items():
            if not isinstance(values, Mapping):
                raise ConfigurationError(f"Configuration for {section!r} must be a mapping")
            if warn_unknown and section != ALL_RULES and section not in self._config:
                logger.warning("Unknown rule %r in configuration; ignoring it", section)
                continue
            self._config.setdefault(section, {}).update(values)

    def _validate(self) -> None:
        """Fail at load time, not halfway through a run."""
        _check_passes(self._config.get(ALL_RULES, {}).get("MaxFixPasses", DEFAULT_MAX_FIX_PASSES))
        for values in self._config.values():
            for key in ("Include", "Exclude"):
                _check_patterns(values.get(key))

    @property
    def config(self) -> dict[str, dict[str, object]]:
        return self._config

    @property
    def rule_names(self) -> list[str]:
        return [name for name in self._config if name != ALL_RULES]

    def rule_config(self, name: str) -> dict[str, object]:
        return dict(self._config.get(name, {}))

    @property
    def max_fix_passes(self) -> int:
        return _check_passes(self._config.get(ALL_RULES, {}).get("MaxFixPasses", DEFAULT_MAX_FIX_PASSES))

    def is_rule_enabled(self, name: str) -> bool:
        return bool(self._config.get(name, {}).get("Enabled", True))

    def excluded(self, path: str) -> bool:
        """True when ``path`` matches a global ``AllCops.Exclude`` pattern."""
        return _matches_any(self._relative(path), self._config.get(ALL_RULES, {}).get("Exclude"))

    def rule_applies_to(self, name: str, path: str) -> bool:
        """Enabled, included and not excluded for ``path``."""
        if not self.is_rule_enabled(name):
            return False
        rule = self._config.get(name, {})
        relative = self._relative(path)
        include = rule.get("Include")
        if include and not _matches_any(relative, include):
            return False
        return not _matches_any(relative, rule.get("Exclude"))

    def _relative(self, path: str) -> str:
        pure = PurePath(path)
        if self._base_dir is not None and pure.is_absolute() and pure.is_relative_to(self._base_dir):
            return pure.relative_to(self._base_dir).as_posix()
        return pure.as_posix()


def _check_passes(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"AllCops.MaxFixPasses must be a positive integer, got {value!r}")
    return value


def _check_patterns(patterns: object) -> None:
    if patterns is None:
        return
    if isinstance(patterns, str) or not isinstance(patterns, Iterable):
        raise ConfigurationError(f"Expected a list of glob patterns, got {patterns!r}")


def _matches_any(path: str, patterns: object) -> bool:
    if not patterns:
        return False
    _check_patterns(patterns)
    return any(_glob_match(path, str(pattern)) for pattern in patterns)


def _glob_match(path: str, pattern: str) -> bool:
    # fnmatch's "*" already crosses "/", so "**/" only needs to also match nothing.
    candidates = {pattern, pattern.replace("**/", "")}
    return any(fnmatch(path, candidate) for candidate in candidates)
