"""Enterprise Groovy: configuration-driven static compilation policy.

This package provides tools for:
- Attaching a ``CompileStatic`` marker to every non-exempt class of a
  compilation unit
- Enforcing conventions on top of static compilation (no ``def``, no
  dynamic compilation, limited type-checking extensions)
- Resolving the enforcement conventions once per process from override
  properties, a conventions file, or built-in defaults

The engine consumes an already-built node tree and returns the diagnostics
the host compiler should report.

Example usage:
    >>> from enterprise_groovy.config import Configuration
    >>> from enterprise_groovy.core.enforcement import EnforcementEngine
    >>> from enterprise_groovy.io import load_units
    >>>
    >>> units = load_units("tree.yaml")
    >>> engine = EnforcementEngine(Configuration(dynamic_typing_allowed=False))
    >>> result = engine.execute_many(units)
    >>> for diagnostic in result.diagnostics:
    ...     print(diagnostic.message)
"""

__version__ = "0.1.0"
