"""Tests for ordered text substitution (tmi_cli.engine.substitution)."""

from __future__ import annotations

import pytest

from tmi_cli.config import LegacyTokens, ProjectParams
from tmi_cli.engine.naming import derive_case_forms
from tmi_cli.engine.substitution import (
    SubstitutionRule,
    apply_rules,
    build_project_rules,
    find_rule_conflicts,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def acme_rules():
    params = ProjectParams(name="Acme", bundle_id="com.acme.app")
    return build_project_rules(derive_case_forms("Acme"), params, LegacyTokens())


# ---------------------------------------------------------------------------
# SubstitutionRule / apply_rules
# ---------------------------------------------------------------------------


class TestApplyRules:
    def test_empty_rule_set_is_identity(self):
        text = "com.tmi.app\nTMI tmi-rn-base\n"
        assert apply_rules(text, ()) == text

    def test_replaces_every_occurrence(self):
        rule = SubstitutionRule("foo", "bar")
        assert apply_rules("foo foo foo", [rule]) == "bar bar bar"

    def test_rule_without_match_is_noop(self):
        rule = SubstitutionRule("absent", "present")
        assert apply_rules("nothing here", [rule]) == "nothing here"

    def test_empty_pattern_is_noop(self):
        assert SubstitutionRule("", "x").apply("abc") == "abc"

    def test_later_rule_sees_earlier_output(self):
        rules = (SubstitutionRule("a", "b"), SubstitutionRule("b", "c"))
        assert apply_rules("a", rules) == "c"

    def test_order_matters(self):
        forward = (SubstitutionRule("com.tmi.app", "com.x.app"), SubstitutionRule("tmi", "y"))
        reverse = tuple(reversed(forward))
        assert apply_rules("com.tmi.app", forward) == "com.x.app"
        assert apply_rules("com.tmi.app", reverse) == "com.y.app"


# ---------------------------------------------------------------------------
# build_project_rules
# ---------------------------------------------------------------------------


class TestBuildProjectRules:
    def test_order_most_specific_first(self, acme_rules):
        assert [rule.pattern for rule in acme_rules] == [
            "com.tmi.app",
            "tmi-rn-base",
            "TMI",
        ]

    def test_replacements(self, acme_rules):
        assert [rule.replacement for rule in acme_rules] == [
            "com.acme.app",
            "acme",
            "Acme",
        ]

    def test_namespaced_identifier_replaced_before_generic_token(self, acme_rules):
        text = 'applicationId "com.tmi.app"\n"name": "tmi-rn-base"\nTMI\n'
        result = apply_rules(text, acme_rules)
        assert result == 'applicationId "com.acme.app"\n"name": "acme"\nAcme\n'

    def test_multi_word_name_uses_kebab_and_default_bundle(self):
        params = ProjectParams(name="MyAwesomeApp")
        rules = build_project_rules(
            derive_case_forms("MyAwesomeApp"), params, LegacyTokens()
        )
        result = apply_rules("tmi-rn-base TMI com.tmi.app", rules)
        assert result == "my-awesome-app MyAwesomeApp com.myawesomeapp"

    def test_bare_lowercase_token_left_alone(self, acme_rules):
        assert apply_rules("APP_SCHEME=tmi\n", acme_rules) == "APP_SCHEME=tmi\n"

    def test_name_containing_lowercase_token(self):
        params = ProjectParams(name="tmi-shop")
        rules = build_project_rules(derive_case_forms("tmi-shop"), params, LegacyTokens())
        text = '"name": "tmi-rn-base"\npackage com.tmi.app;\nmoduleName = @"TMI";\n'
        assert apply_rules(text, rules) == (
            '"name": "tmi-shop"\npackage com.tmishop;\nmoduleName = @"TmiShop";\n'
        )
        assert find_rule_conflicts(rules) == []

    def test_bundle_id_containing_lowercase_token(self):
        params = ProjectParams(name="Acme", bundle_id="com.utmist.app")
        rules = build_project_rules(derive_case_forms("Acme"), params, LegacyTokens())
        assert apply_rules("package com.tmi.app;\n", rules) == "package com.utmist.app;\n"
        assert find_rule_conflicts(rules) == []

    def test_custom_bundle_id(self):
        params = ProjectParams(name="Acme", bundle_id="io.acme.mobile")
        rules = build_project_rules(derive_case_forms("Acme"), params, LegacyTokens())
        assert apply_rules("package com.tmi.app;", rules) == "package io.acme.mobile;"


# ---------------------------------------------------------------------------
# find_rule_conflicts
# ---------------------------------------------------------------------------


class TestFindRuleConflicts:
    def test_no_conflicts_for_plain_name(self, acme_rules):
        assert find_rule_conflicts(acme_rules) == []

    def test_bundle_id_containing_legacy_name(self):
        params = ProjectParams(name="Acme", bundle_id="com.TMIcorp.app")
        rules = build_project_rules(derive_case_forms("Acme"), params, LegacyTokens())
        assert find_rule_conflicts(rules) == [(rules[0], rules[2])]

    def test_identity_rule_is_not_a_conflict(self):
        rules = (SubstitutionRule("a", "xa"), SubstitutionRule("a", "a"))
        assert find_rule_conflicts(rules) == []
