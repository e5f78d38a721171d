"""Dynamic typing (``def``) rules.

Rules:
- DEF_FIELD: Dynamically typed field
- DEF_METHOD: Dynamically typed method return
- DEF_PARAMETER: Dynamically typed method parameter

All three only run when ``defAllowed`` is false.
"""

from typing import List, TYPE_CHECKING

from .base import BaseRule, Diagnostic
from .registry import RuleRegistry

if TYPE_CHECKING:
    from ....model import ClassNode, FieldNode, MethodNode, ParameterNode


class DynamicTypingRule(BaseRule):
    description = "def is not allowed"

    def is_applicable(self) -> bool:
        return not self.config.dynamic_typing_allowed


@RuleRegistry.register
class DefFieldRule(DynamicTypingRule):
    """Flag fields declared with def."""

    rule_id = "DEF_FIELD"
    scope = "field"
    order = 10

    def check(self, node: "FieldNode", owner: "ClassNode") -> List[Diagnostic]:
        if node.dynamically_typed:
            return [self.create_diagnostic(node, owner, "def is not allowed for variables.")]
        return []


@RuleRegistry.register
class DefMethodRule(DynamicTypingRule):
    """Flag methods declared with a def return type."""

    rule_id = "DEF_METHOD"
    scope = "method"
    order = 10

    def check(self, node: "MethodNode", owner: "ClassNode") -> List[Diagnostic]:
        if node.dynamic_return_type:
            return [self.create_diagnostic(node, owner, "def is not allowed for methods.")]
        return []


@RuleRegistry.register
class DefParameterRule(DynamicTypingRule):
    """Flag untyped method parameters."""

    rule_id = "DEF_PARAMETER"
    scope = "parameter"
    order = 10

    def check(self, node: "ParameterNode", owner: "ClassNode") -> List[Diagnostic]:
        if node.dynamically_typed:
            return [
                self.create_diagnostic(
                    node, owner, "Dynamically typed parameters are not allowed."
                )
            ]
        return []
