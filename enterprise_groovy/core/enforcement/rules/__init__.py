"""Rule implementations for the enforcement engine.

This package contains enforcement rules organized by concern:
- compile_mode: Dynamic compilation opt-outs
- extensions: Type-checking extension limits
- dynamic_typing: def on fields, method returns and parameters
"""

from .base import SCOPES, BaseRule, Diagnostic
from .registry import RuleRegistry

# Import rule modules to trigger registration
from . import compile_mode
from . import extensions
from . import dynamic_typing

__all__ = [
    "SCOPES",
    "BaseRule",
    "Diagnostic",
    "RuleRegistry",
]
