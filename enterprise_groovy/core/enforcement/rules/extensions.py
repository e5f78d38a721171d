"""Type-checking extension rules.

Rules:
- EXTENSION_LIMIT_CLASS: Class marker lists an extension that is not allowed
- EXTENSION_LIMIT_METHOD: Method marker lists an extension that is not allowed

Both rules only run when ``limitCompileStaticExtensions`` is set.
"""

from typing import List, TYPE_CHECKING

from ..inspector import disallowed_extensions
from .base import BaseRule, Diagnostic
from .registry import RuleRegistry

if TYPE_CHECKING:
    from ....model import ClassNode


class ExtensionLimitRule(BaseRule):
    """Shared check for class and method extension lists."""

    description = "Compile Static extensions are limited"

    def is_applicable(self) -> bool:
        return self.config.limit_extensions

    def check(self, node, owner: "ClassNode") -> List[Diagnostic]:
        rejected = disallowed_extensions(node, frozenset(self.config.allowed_extensions))
        if not rejected:
            return []

        return [
            self.create_diagnostic(
                node,
                owner,
                "Compile Static extensions are limited to: "
                f"{self.config.format_allowed_extensions()}",
                rejected=rejected,
            )
        ]


@RuleRegistry.register
class ClassExtensionLimitRule(ExtensionLimitRule):
    rule_id = "EXTENSION_LIMIT_CLASS"
    scope = "class"
    order = 20


@RuleRegistry.register
class MethodExtensionLimitRule(ExtensionLimitRule):
    rule_id = "EXTENSION_LIMIT_METHOD"
    scope = "method"
    order = 30
