"""Unit tests for LaunchDarklyDefaultsRule (Dutchie/LaunchDarklyDefaults)."""

import unittest

from dutchie_style.domain.nodes import SourceRange
from dutchie_style.domain.rules import InspectionContext
from dutchie_style.domain.rules.launchdarkly_defaults import LaunchDarklyDefaultsRule
from tests.node_factory import (
    feature_flags,
    kwargs,
    ld_client,
    literal,
    menu_connector,
    pair,
    send,
    string,
    sym,
)


class TestLaunchDarklyDefaultsRule(unittest.TestCase):
    """Test LaunchDarklyDefaultsRule detection and corrections."""

    def setUp(self) -> None:
        self.rule = LaunchDarklyDefaultsRule()
        self.context = InspectionContext(file_path="app/models/menu.rb")

    def test_rule_identity(self) -> None:
        self.assertEqual(self.rule.name, "Dutchie/LaunchDarklyDefaults")
        self.assertEqual(self.rule.node_types, ("send",))

    def test_flag_without_default(self) -> None:
        """flag("key") gets one correctable offense at the call."""
        call = feature_flags("flag", string("my.flag"), loc=SourceRange(10, 45, line=3, column=4))
        offenses = self.rule.check(call, self.context)

        self.assertEqual(len(offenses), 1)
        offense = offenses[0]
        self.assertEqual(offense.rule, "Dutchie/LaunchDarklyDefaults")
        self.assertEqual(offense.message, "DutchieFeatureFlags.flag must have a default value as 2nd parameter")
        self.assertEqual(offense.location, "app/models/menu.rb:3:5")
        self.assertIs(offense.node, call)
        self.assertTrue(offense.correctable)
        self.assertEqual(offense.edits[0].content, ", false")

    def test_flag_with_positional_default_is_clean(self) -> None:
        call = feature_flags("flag", string("my.flag"), literal("true"))
        self.assertEqual(self.rule.check(call, self.context), [])

    def test_keyword_family_messages(self) -> None:
        for method in ("context_flag", "dispensary_flag", "enterprise_flag"):
            with self.subTest(method=method):
                offenses = self.rule.check(feature_flags(method, string("my.flag")), self.context)
                self.assertEqual(offenses[0].message, f"DutchieFeatureFlags.{method} must have a default: parameter")
                self.assertEqual(offenses[0].edits[0].content, ", default: false")

    def test_keyword_family_with_default_is_clean(self) -> None:
        options = kwargs(pair(sym("dispensary"), send(None, "d")), pair(sym("default"), literal("false")))
        call = feature_flags("dispensary_flag", string("my.flag"), options)
        self.assertEqual(self.rule.check(call, self.context), [])

    def test_keyword_family_with_other_keywords_only(self) -> None:
        options = kwargs(pair(sym("dispensary"), send(None, "d")))
        offenses = self.rule.check(feature_flags("dispensary_flag", string("my.flag"), options), self.context)
        self.assertEqual(len(offenses), 1)

    def test_predicate_messages_use_should(self) -> None:
        for method in ("on?", "off?"):
            with self.subTest(method=method):
                offenses = self.rule.check(feature_flags(method, string("my.flag")), self.context)
                self.assertEqual(offenses[0].message, f"DutchieFeatureFlags.{method} should have a default: parameter")

    def test_predicate_with_positional_value_is_clean(self) -> None:
        call = feature_flags("on?", string("my.flag"), send(None, "user"))
        self.assertEqual(self.rule.check(call, self.context), [])

    def test_variation_without_default(self) -> None:
        call = send(ld_client(), "variation", string("my.flag"), send(None, "context"))
        offenses = self.rule.check(call, self.context)
        self.assertEqual(offenses[0].message, "LaunchDarkly variation must have a default value as 3rd parameter")
        self.assertEqual(offenses[0].edits[0].content, ", false")

    def test_variation_with_context_and_default_is_clean(self) -> None:
        call = send(ld_client(), "variation", string("my.flag"), send(None, "context"), literal("false"))
        self.assertEqual(self.rule.check(call, self.context), [])

    def test_mock_variation_outside_spec_is_flagged(self) -> None:
        call = send(menu_connector("MockLaunchDarkly"), "variation", string("my.flag"))
        offenses = self.rule.check(call, self.context)
        self.assertEqual(len(offenses), 1)
        self.assertEqual(offenses[0].edits[0].content, ", nil, false")

    def test_mock_variation_under_spec_is_exempt(self) -> None:
        call = send(menu_connector("MockLaunchDarkly"), "variation", string("my.flag"))
        context = InspectionContext(file_path="spec/models/menu_spec.rb")
        self.assertEqual(self.rule.check(call, context), [])

    def test_real_client_under_spec_is_still_flagged(self) -> None:
        call = send(ld_client(), "variation", string("my.flag"))
        context = InspectionContext(file_path="spec/models/menu_spec.rb")
        self.assertEqual(len(self.rule.check(call, context)), 1)

    def test_unrelated_send_is_ignored(self) -> None:
        self.assertEqual(self.rule.check(send(None, "puts", string("hello")), self.context), [])
