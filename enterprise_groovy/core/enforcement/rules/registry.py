"""Rule registry for rule discovery and instantiation.

Provides decorator-based registration of rule classes.
"""

from typing import Dict, List, Optional, Type, TYPE_CHECKING

from .base import SCOPES, scope_index

if TYPE_CHECKING:
    from .base import BaseRule
    from ....config import Configuration


class RuleRegistry:
    """Registry for enforcement rules.

    Provides:
    - Decorator-based registration: @RuleRegistry.register
    - Rule listing in walk order
    - Instantiation with a Configuration, in walk order
    """

    _rules: Dict[str, Type["BaseRule"]] = {}

    @classmethod
    def register(cls, rule_class: Type["BaseRule"]) -> Type["BaseRule"]:
        """Register a rule class.

        Use as decorator:
            @RuleRegistry.register
            class MyRule(BaseRule):
                rule_id = "MY_RULE"
                scope = "method"
                ...

        Raises
        ------
        ValueError
            If the rule declares an unknown scope
        """
        if scope_index(rule_class.scope) is None:
            raise ValueError(
                f"Rule {rule_class.rule_id} has unknown scope '{rule_class.scope}'"
            )
        cls._rules[rule_class.rule_id] = rule_class
        return rule_class

    @classmethod
    def list_rule_ids(cls) -> List[str]:
        """Get all registered rule IDs in walk order."""
        return [r.rule_id for r in cls._sorted()]

    @classmethod
    def _sorted(cls) -> List[Type["BaseRule"]]:
        return sorted(
            cls._rules.values(), key=lambda r: (scope_index(r.scope), r.order)
        )

    @classmethod
    def instantiate_all(
        cls,
        config: "Configuration",
        skip_rules: Optional[List[str]] = None,
    ) -> Dict[str, List["BaseRule"]]:
        """Instantiate all applicable rules, grouped by scope.

        Parameters
        ----------
        config : Configuration
            Enforcement configuration
        skip_rules : List[str], optional
            Rule IDs to skip

        Returns
        -------
        Dict[str, List[BaseRule]]
            Scope to rules in check order. Every scope is present.
        """
        skip_rules = skip_rules or []

        rules: Dict[str, List["BaseRule"]] = {scope: [] for scope in SCOPES}
        for rule_class in cls._sorted():
            if rule_class.rule_id in skip_rules:
                continue
            rule = rule_class(config=config)
            if not rule.is_applicable():
                continue
            rules[rule_class.scope].append(rule)

        return rules

    @classmethod
    def summary(cls) -> Dict[str, List[str]]:
        """Get rule IDs grouped by scope, in check order."""
        summary: Dict[str, List[str]] = {}
        for rule_class in cls._sorted():
            summary.setdefault(rule_class.scope, []).append(rule_class.rule_id)
        return summary
