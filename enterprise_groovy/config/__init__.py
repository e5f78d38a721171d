"""Enforcement configuration.

Configuration is resolved once per process from override properties, a
conventions source, or built-in defaults.

Example
-------
>>> from enterprise_groovy.config import resolve_configuration
>>> config = resolve_configuration({
...     "enterprise.groovy.conventions": "conventions: {defAllowed: false}",
... })
>>> config.dynamic_typing_allowed
False
>>> config.enforcement_active
True
"""

from .conventions import (
    CONVENTION_KEYS,
    Configuration,
    ConventionsError,
    ConventionsParseResult,
    load_conventions,
    parse_conventions,
)
from .resolver import (
    CONSOLE_PROPERTY,
    CONVENTIONS_PROPERTY,
    DEF_ALLOWED_PROPERTY,
    DISABLE_DYNAMIC_COMPILE_PROPERTY,
    DISABLE_PROPERTY,
    KNOWN_PROPERTIES,
    ConfigurationResolver,
    get_configuration,
    get_resolver,
    properties_from_environment,
    reset_configuration,
    resolve_configuration,
    resolve_conventions_source,
)

__all__ = [
    # Model
    "CONVENTION_KEYS",
    "Configuration",
    "ConventionsError",
    "ConventionsParseResult",
    "load_conventions",
    "parse_conventions",
    # Resolution
    "CONSOLE_PROPERTY",
    "CONVENTIONS_PROPERTY",
    "DEF_ALLOWED_PROPERTY",
    "DISABLE_DYNAMIC_COMPILE_PROPERTY",
    "DISABLE_PROPERTY",
    "KNOWN_PROPERTIES",
    "ConfigurationResolver",
    "get_configuration",
    "get_resolver",
    "properties_from_environment",
    "reset_configuration",
    "resolve_configuration",
    "resolve_conventions_source",
]
