"""Layered resolution of the enforcement Configuration.

Resolution order (first present source wins):

1. Console override: ``enterprise.groovy.console`` is set. The disable,
   disableDynamicCompile and defAllowed properties are read individually and
   script whitelisting is turned off.
2. Conventions source: ``enterprise.groovy.conventions`` names a file or
   holds inline YAML.
3. Built-in defaults.

A broken conventions source is logged and replaced by the defaults; resolution
never raises.
"""

import logging
import os
import threading
from typing import Callable, Dict, Mapping, Optional

import yaml

from .conventions import (
    Configuration,
    ConventionsError,
    ConventionsParseResult,
    load_conventions,
    parse_conventions,
)

logger = logging.getLogger(__name__)

PROPERTY_PREFIX = "enterprise.groovy."
CONSOLE_PROPERTY = PROPERTY_PREFIX + "console"
DISABLE_PROPERTY = PROPERTY_PREFIX + "disable"
DISABLE_DYNAMIC_COMPILE_PROPERTY = PROPERTY_PREFIX + "disableDynamicCompile"
DEF_ALLOWED_PROPERTY = PROPERTY_PREFIX + "defAllowed"
CONVENTIONS_PROPERTY = PROPERTY_PREFIX + "conventions"

KNOWN_PROPERTIES = (
    CONSOLE_PROPERTY,
    DISABLE_PROPERTY,
    DISABLE_DYNAMIC_COMPILE_PROPERTY,
    DEF_ALLOWED_PROPERTY,
    CONVENTIONS_PROPERTY,
)


def env_name(property_name: str) -> str:
    """Environment variable carrying a property, e.g. ENTERPRISE_GROOVY_CONSOLE."""
    return property_name.replace(".", "_").upper()


def properties_from_environment(
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Collect the known properties from environment variables."""
    environ = os.environ if environ is None else environ
    properties = {}
    for name in KNOWN_PROPERTIES:
        value = environ.get(env_name(name))
        if value is not None:
            properties[name] = value
    return properties


def _flag(properties: Mapping[str, str], name: str, default: bool) -> bool:
    value = properties.get(name)
    if value is None:
        return default
    return str(value).strip().lower() == "true"


def resolve_console(properties: Mapping[str, str]) -> Configuration:
    """Configuration for an interactive console session."""
    return Configuration(
        global_disable=_flag(properties, DISABLE_PROPERTY, False),
        script_whitelist_enabled=False,
        disable_dynamic_compile=_flag(
            properties, DISABLE_DYNAMIC_COMPILE_PROPERTY, False
        ),
        dynamic_typing_allowed=_flag(properties, DEF_ALLOWED_PROPERTY, True),
        source="console",
    )


def resolve_conventions_source(source: str) -> ConventionsParseResult:
    """Parse a conventions source, falling back to defaults on any error."""
    try:
        parsed = parse_conventions(load_conventions(source))
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ConventionsError) as e:
        logger.warning(
            f"Conventions can't be parsed, falling back to defaults: {e}"
        )
        return ConventionsParseResult(configuration=Configuration.default())

    if parsed.ignored:
        logger.warning(f"Ignoring unknown conventions: {', '.join(parsed.ignored)}")
    logger.debug(f"Recognized conventions: {', '.join(parsed.recognized) or 'none'}")
    return parsed


def resolve_configuration(properties: Optional[Mapping[str, str]] = None) -> Configuration:
    """Resolve the Configuration from override properties.

    Parameters
    ----------
    properties : Mapping[str, str], optional
        Property name to value (see ``KNOWN_PROPERTIES``). Read from the
        environment when None.

    Returns
    -------
    Configuration
        Resolved configuration
    """
    if properties is None:
        properties = properties_from_environment()

    if properties.get(CONSOLE_PROPERTY):
        config = resolve_console(properties)
    elif properties.get(CONVENTIONS_PROPERTY):
        config = resolve_conventions_source(properties[CONVENTIONS_PROPERTY]).configuration
    else:
        config = Configuration.default()

    logger.info(f"Enforcement configuration resolved from {config.source}")
    return config


class ConfigurationResolver:
    """Resolves the Configuration at most once.

    Parameters
    ----------
    properties_factory : Callable[[], Mapping[str, str]], optional
        Supplies the override properties on first use. Defaults to the
        environment.

    Example
    -------
    >>> resolver = ConfigurationResolver(lambda: {"enterprise.groovy.console": "true"})
    >>> resolver.get().script_whitelist_enabled
    False
    """

    def __init__(
        self,
        properties_factory: Optional[Callable[[], Mapping[str, str]]] = None,
    ):
        self._properties_factory = properties_factory or properties_from_environment
        self._config: Optional[Configuration] = None
        self._lock = threading.Lock()

    @property
    def resolved(self) -> bool:
        return self._config is not None

    def get(self) -> Configuration:
        """Return the cached Configuration, resolving it on first call."""
        config = self._config
        if config is not None:
            return config

        with self._lock:
            if self._config is None:
                self._config = resolve_configuration(self._properties_factory())
            return self._config

    def reset(self) -> None:
        """Drop the cached Configuration so the next get() resolves again."""
        with self._lock:
            self._config = None


_default_resolver = ConfigurationResolver()


def get_resolver() -> ConfigurationResolver:
    """Process-wide resolver."""
    return _default_resolver


def get_configuration() -> Configuration:
    """Process-wide Configuration, resolved lazily from the environment."""
    return _default_resolver.get()


def reset_configuration() -> None:
    """Forget the process-wide Configuration (new run)."""
    _default_resolver.reset()
