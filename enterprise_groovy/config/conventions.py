"""Configuration model for enforcement conventions.

Provides:
- Configuration: Immutable snapshot of enforcement settings
- ConventionsParseResult: Configuration plus recognized/ignored keys
- parse_conventions: Build a Configuration from a loosely-typed mapping
- load_conventions: Read a conventions file or inline YAML document

Example conventions file:
```yaml
conventions:
  disable: false
  whiteListScripts: true
  disableDynamicCompile: true
  dynamicCompileWhiteList:
    - com.acme.legacy
  compileStaticExtensions:
    - org.acme.SqlExtension
  limitCompileStaticExtensions: true
  defAllowed: false
  skipDefaultPackage: false
```
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml


class ConventionsError(ValueError):
    """Raised when a conventions mapping has the wrong shape."""


@dataclass(frozen=True)
class Configuration:
    """Enforcement settings, resolved once and read-only thereafter.

    Attributes
    ----------
    global_disable : bool
        Skip the whole engine
    script_whitelist_enabled : bool
        Skip compilation units that have no target directory (scripts)
    disable_dynamic_compile : bool
        CompileDynamic and CompileStatic(SKIP) are errors
    class_whitelist : Tuple[str, ...]
        Substrings of fully-qualified class names exempt from everything
    allowed_extensions : Tuple[str, ...]
        Type-checking extensions attached to the marker and allowed when
        ``limit_extensions`` is set
    limit_extensions : bool
        Marker extension lists must be a subset of ``allowed_extensions``
    dynamic_typing_allowed : bool
        When False, dynamically typed fields, returns and parameters are errors
    skip_default_package : bool
        Exempt classes declared in the default (empty) package
    source : str
        Which layer produced this snapshot (defaults, console, conventions)
    """

    global_disable: bool = False
    script_whitelist_enabled: bool = True
    disable_dynamic_compile: bool = False
    class_whitelist: Tuple[str, ...] = ()
    allowed_extensions: Tuple[str, ...] = ()
    limit_extensions: bool = False
    dynamic_typing_allowed: bool = True
    skip_default_package: bool = False
    source: str = field(default="defaults", compare=False)

    @property
    def enforcement_active(self) -> bool:
        """True if any enforcement flag requires checks to run."""
        return (
            self.disable_dynamic_compile
            or self.limit_extensions
            or not self.dynamic_typing_allowed
        )

    def format_allowed_extensions(self) -> str:
        """Render the allowed extensions as ``[A, B]``."""
        return "[" + ", ".join(self.allowed_extensions) + "]"

    @classmethod
    def default(cls) -> "Configuration":
        """Built-in defaults: permissive, marker attachment only."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["class_whitelist"] = list(self.class_whitelist)
        data["allowed_extensions"] = list(self.allowed_extensions)
        data["enforcement_active"] = self.enforcement_active
        return data


# Conventions key -> (Configuration field, kind)
CONVENTION_KEYS: Dict[str, Tuple[str, str]] = {
    "disable": ("global_disable", "bool"),
    "whiteListScripts": ("script_whitelist_enabled", "bool"),
    "disableDynamicCompile": ("disable_dynamic_compile", "bool"),
    "dynamicCompileWhiteList": ("class_whitelist", "list"),
    "compileStaticExtensions": ("allowed_extensions", "list"),
    "limitCompileStaticExtensions": ("limit_extensions", "bool"),
    "defAllowed": ("dynamic_typing_allowed", "bool"),
    "skipDefaultPackage": ("skip_default_package", "bool"),
}


@dataclass
class ConventionsParseResult:
    """Result of parsing a conventions mapping.

    Attributes
    ----------
    configuration : Configuration
        Parsed configuration, defaults applied per missing key
    recognized : List[str]
        Keys that mapped onto a configuration field
    ignored : List[str]
        Keys that were present but are not conventions
    """

    configuration: Configuration
    recognized: List[str] = field(default_factory=list)
    ignored: List[str] = field(default_factory=list)


def _coerce(key: str, kind: str, value: Any) -> Union[bool, Tuple[str, ...]]:
    if kind == "bool":
        if not isinstance(value, bool):
            raise ConventionsError(
                f"Convention '{key}' must be a boolean, got {type(value).__name__}"
            )
        return value

    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)):
        raise ConventionsError(
            f"Convention '{key}' must be a list of strings, got {type(value).__name__}"
        )
    for item in value:
        if not isinstance(item, str):
            raise ConventionsError(
                f"Convention '{key}' must only contain strings, got {item!r}"
            )
    return tuple(value)


def parse_conventions(data: Mapping[str, Any]) -> ConventionsParseResult:
    """Build a Configuration from a conventions mapping.

    Missing keys (or keys set to null) fall back individually to the
    built-in defaults. Unknown keys are reported as ignored.

    Parameters
    ----------
    data : Mapping[str, Any]
        The ``conventions`` block of a conventions document

    Returns
    -------
    ConventionsParseResult
        Configuration with recognized and ignored keys

    Raises
    ------
    ConventionsError
        If ``data`` is not a mapping or a value has the wrong type
    """
    if not isinstance(data, Mapping):
        raise ConventionsError(
            f"Conventions must be a mapping, got {type(data).__name__}"
        )

    values: Dict[str, Any] = {}
    recognized = []
    ignored = []

    for key, value in data.items():
        if key not in CONVENTION_KEYS:
            ignored.append(str(key))
            continue
        recognized.append(key)
        if value is None:
            continue
        field_name, kind = CONVENTION_KEYS[key]
        values[field_name] = _coerce(key, kind, value)

    return ConventionsParseResult(
        configuration=Configuration(source="conventions", **values),
        recognized=recognized,
        ignored=ignored,
    )


def load_conventions(source: Union[str, Path]) -> Dict[str, Any]:
    """Load the conventions block from a file path or inline YAML content.

    A value that names an existing file is read from disk; anything else is
    parsed as YAML text. The ``conventions`` key is unwrapped when present,
    otherwise the document root is used.

    Raises
    ------
    OSError
        If the file cannot be read
    UnicodeDecodeError
        If the file is not UTF-8
    yaml.YAMLError
        If the YAML is malformed
    ConventionsError
        If the document is not a mapping
    """
    text: Optional[str] = None
    path = Path(source)
    try:
        is_file = path.is_file()
    except (OSError, ValueError):
        # Inline content too long (or with NUL bytes) to be a path
        is_file = False

    if is_file:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    else:
        text = str(source)

    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConventionsError(
            f"Conventions document must be a mapping, got {type(data).__name__}"
        )

    if "conventions" in data:
        block = data["conventions"]
        if block is None:
            return {}
        if not isinstance(block, dict):
            raise ConventionsError("'conventions' block must be a mapping")
        return block
    return data
