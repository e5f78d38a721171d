"""Unit tests for rule registration and individual rules."""

import logging

import pytest

from enterprise_groovy.config import Configuration
from enterprise_groovy.core.enforcement import EnforcementEngine
from enterprise_groovy.core.enforcement.rules import BaseRule, Diagnostic, RuleRegistry
from enterprise_groovy.core.enforcement.rules.compile_mode import MethodDynamicCompileRule
from enterprise_groovy.core.enforcement.rules.dynamic_typing import DefFieldRule, DefMethodRule
from enterprise_groovy.core.enforcement.rules.extensions import MethodExtensionLimitRule
from enterprise_groovy.model import ClassNode, FieldNode, MethodNode, ParameterNode

from tests.fixtures import compile_dynamic, compile_static, create_def_heavy_class, create_unit

ALL_ON = Configuration(
    disable_dynamic_compile=True,
    limit_extensions=True,
    allowed_extensions=("A",),
    dynamic_typing_allowed=False,
)


class TestRuleRegistry:
    """Tests for RuleRegistry."""

    def test_walk_order(self):
        """Test that rule IDs are listed in walk order."""
        assert RuleRegistry.list_rule_ids() == [
            "DYNAMIC_COMPILE_CLASS",
            "EXTENSION_LIMIT_CLASS",
            "DEF_FIELD",
            "DEF_METHOD",
            "DYNAMIC_COMPILE_METHOD",
            "EXTENSION_LIMIT_METHOD",
            "DEF_PARAMETER",
        ]

    def test_summary(self):
        """Test rule IDs grouped by scope."""
        summary = RuleRegistry.summary()
        assert list(summary) == ["class", "field", "method", "parameter"]
        assert summary["method"] == [
            "DEF_METHOD",
            "DYNAMIC_COMPILE_METHOD",
            "EXTENSION_LIMIT_METHOD",
        ]

    def test_engine_lists_available_rules(self):
        engine = EnforcementEngine(Configuration())
        assert engine.list_available_rules() == RuleRegistry.summary()
        assert engine.active_rule_ids() == []

    def test_instantiate_all_defaults(self):
        """Test that no rule applies under the default configuration."""
        rules = RuleRegistry.instantiate_all(Configuration())
        assert set(rules) == {"class", "field", "method", "parameter"}
        assert all(not r for r in rules.values())

    def test_instantiate_all_gating(self):
        """Test that each flag enables its own rules only."""
        rules = RuleRegistry.instantiate_all(Configuration(limit_extensions=True))
        ids = [r.rule_id for scope_rules in rules.values() for r in scope_rules]
        assert ids == ["EXTENSION_LIMIT_CLASS", "EXTENSION_LIMIT_METHOD"]

    def test_instantiate_all_skip(self):
        rules = RuleRegistry.instantiate_all(ALL_ON, skip_rules=["DEF_METHOD"])
        assert [r.rule_id for r in rules["method"]] == [
            "DYNAMIC_COMPILE_METHOD",
            "EXTENSION_LIMIT_METHOD",
        ]

    def test_unknown_scope_rejected(self):
        """Test that registering a rule with an unknown scope fails."""

        class BadRule(BaseRule):
            rule_id = "BAD_SCOPE"
            scope = "package"

            def check(self, node, owner):
                return []

        with pytest.raises(ValueError, match="unknown scope"):
            RuleRegistry.register(BadRule)
        assert "BAD_SCOPE" not in RuleRegistry.list_rule_ids()


class TestDiagnostic:
    """Tests for Diagnostic."""

    def test_node_kind_and_name(self):
        diagnostic = Diagnostic(message="m", node=ParameterNode("x", dynamically_typed=True))
        assert diagnostic.node_kind == "parameter"
        assert diagnostic.node_name == "x"

    def test_to_dict_includes_metadata(self):
        diagnostic = Diagnostic(
            message="m",
            node=ClassNode("com.acme.Foo"),
            rule_id="EXTENSION_LIMIT_CLASS",
            owner="com.acme.Foo",
            unit="Foo.groovy",
            metadata={"rejected": ["C"]},
        )
        assert diagnostic.to_dict() == {
            "unit": "Foo.groovy",
            "owner": "com.acme.Foo",
            "node_kind": "class",
            "node_name": "com.acme.Foo",
            "rule_id": "EXTENSION_LIMIT_CLASS",
            "message": "m",
            "rejected": ["C"],
        }


class TestRuleChecks:
    """Tests for rules run directly against nodes."""

    owner = ClassNode("com.acme.Foo")

    def test_def_field(self):
        rule = DefFieldRule(ALL_ON)
        assert rule.check(FieldNode("typed"), self.owner) == []
        [diagnostic] = rule.check(FieldNode("untyped", dynamically_typed=True), self.owner)
        assert diagnostic.owner == "com.acme.Foo"
        assert diagnostic.rule_id == "DEF_FIELD"

    def test_def_method(self):
        rule = DefMethodRule(ALL_ON)
        assert rule.check(MethodNode("typed"), self.owner) == []
        assert len(rule.check(MethodNode("untyped", dynamic_return_type=True), self.owner)) == 1

    def test_dynamic_compile_method_whitelisted_owner(self):
        """Test that the owner's whitelist entry exempts its methods."""
        config = Configuration(disable_dynamic_compile=True, class_whitelist=("acme",))
        rule = MethodDynamicCompileRule(config)
        method = MethodNode("run", annotations=[compile_dynamic()])
        assert rule.check(method, self.owner) == []

    def test_extension_limit_reports_rejected(self):
        rule = MethodExtensionLimitRule(ALL_ON)
        method = MethodNode("run", annotations=[compile_static(extensions=["A", "X", "Y"])])
        [diagnostic] = rule.check(method, self.owner)
        assert diagnostic.message == "Compile Static extensions are limited to: [A]"
        assert diagnostic.metadata == {"rejected": ["X", "Y"]}


class TestRuleFailure:
    """Tests for rules that raise during a walk."""

    def test_failure_is_recorded(self, monkeypatch, caplog):
        """Test that a raising rule is logged and the walk continues."""

        def broken(self, node, owner):
            raise RuntimeError("boom")

        monkeypatch.setattr(DefFieldRule, "check", broken)

        engine = EnforcementEngine(Configuration(dynamic_typing_allowed=False))
        with caplog.at_level(logging.WARNING):
            result = engine.execute(create_unit([create_def_heavy_class()]))

        assert result.rules_failed == ["DEF_FIELD"]
        assert [d.rule_id for d in result.diagnostics] == [
            "DEF_METHOD",
            "DEF_PARAMETER",
            "DEF_PARAMETER",
        ]
        assert "DEF_FIELD failed" in caplog.text
