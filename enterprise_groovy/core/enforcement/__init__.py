"""Static compilation enforcement.

This module attaches ``CompileStatic`` to non-exempt classes and runs
rule-based checks over classes, fields, methods and parameters, driven by the
resolved conventions.

Example Usage
-------------
Basic run:

    >>> from enterprise_groovy.config import Configuration
    >>> from enterprise_groovy.core.enforcement import EnforcementEngine
    >>> engine = EnforcementEngine(Configuration(dynamic_typing_allowed=False))
    >>> result = engine.execute(unit)
    >>> print(f"{result.n_diagnostics} diagnostics")

With the process-wide configuration (resolved from the environment):

    >>> engine = EnforcementEngine()
    >>> result = engine.execute_many(units)

Export results:

    >>> from enterprise_groovy.core.enforcement import export_all
    >>> export_all(result, Path("out/enforcement/"), config=engine.config)
"""

__version__ = "0.1.0"

# Inspection
from .inspector import (
    AnnotatedNode,
    disallowed_extensions,
    find_marker,
    has_any,
    has_skip_mode,
    violates_extension_limit,
)
from .whitelist import is_whitelisted

# Engine
from .engine import (
    EnforcementEngine,
    EnforcementResult,
)

# Rules
from .rules.base import BaseRule, Diagnostic
from .rules.registry import RuleRegistry

# Export
from .export import (
    export_json,
    export_csv,
    export_markdown,
    export_provenance,
    export_all,
)

__all__ = [
    # Version
    "__version__",
    # Inspection
    "AnnotatedNode",
    "disallowed_extensions",
    "find_marker",
    "has_any",
    "has_skip_mode",
    "violates_extension_limit",
    "is_whitelisted",
    # Engine
    "EnforcementEngine",
    "EnforcementResult",
    # Rules
    "BaseRule",
    "Diagnostic",
    "RuleRegistry",
    # Export
    "export_json",
    "export_csv",
    "export_markdown",
    "export_provenance",
    "export_all",
]
