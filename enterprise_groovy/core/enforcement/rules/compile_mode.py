"""Dynamic compilation rules.

Rules:
- DYNAMIC_COMPILE_CLASS: Class opts out of static compilation
- DYNAMIC_COMPILE_METHOD: Method opts out of static compilation

Opting out means carrying CompileDynamic or CompileStatic(TypeCheckingMode.SKIP).
Both rules only run when ``disableDynamicCompile`` is set.
"""

from typing import List, TYPE_CHECKING

from ....model.nodes import DYNAMIC_ANNOTATIONS
from ..inspector import has_any, has_skip_mode
from ..whitelist import is_whitelisted
from .base import BaseRule, Diagnostic
from .registry import RuleRegistry

if TYPE_CHECKING:
    from ....model import ClassNode


class DynamicCompileRule(BaseRule):
    """Shared check for class and method opt-outs."""

    description = "Dynamic compilation is disabled"
    message = "Dynamic Compilation is not allowed."

    def is_applicable(self) -> bool:
        return self.config.disable_dynamic_compile

    def check(self, node, owner: "ClassNode") -> List[Diagnostic]:
        if is_whitelisted(owner.name, self.config.class_whitelist):
            return []

        if has_any(node, DYNAMIC_ANNOTATIONS) or has_skip_mode(node):
            return [self.create_diagnostic(node, owner, self.message)]
        return []


@RuleRegistry.register
class ClassDynamicCompileRule(DynamicCompileRule):
    """Flag classes annotated CompileDynamic or CompileStatic(SKIP)."""

    rule_id = "DYNAMIC_COMPILE_CLASS"
    scope = "class"
    order = 10
    message = "Dynamic Compilation is not allowed for this class."


@RuleRegistry.register
class MethodDynamicCompileRule(DynamicCompileRule):
    """Flag methods annotated CompileDynamic or CompileStatic(SKIP)."""

    rule_id = "DYNAMIC_COMPILE_METHOD"
    scope = "method"
    order = 20
    message = "Dynamic Compilation is not allowed for this method."
