"""Node tree descriptor loading.

Builds CompilationUnit trees from YAML or JSON documents so the engine can be
driven from files. The document may be a mapping with a ``units`` list, a
list of units, or a single unit mapping.

Example descriptor:
```yaml
units:
  - name: Foo.groovy
    target_directory: build/classes
    classes:
      - name: com.acme.Foo
        annotations:
          - name: CompileStatic
            members:
              extensions: [A, C]
        fields:
          - {name: bar, dynamically_typed: true}
        methods:
          - name: run
            parameters:
              - {name: x, dynamically_typed: true}
```
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..model.nodes import (
    Annotation,
    AnnotationArgument,
    ClassNode,
    CompilationUnit,
    FieldNode,
    MethodNode,
    ParameterNode,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Short names accepted in descriptors
ANNOTATION_ALIASES = {
    "CompileStatic": "groovy.transform.CompileStatic",
    "CompileDynamic": "groovy.transform.CompileDynamic",
}


class TreeFormatError(ValueError):
    """Raised when a tree descriptor is malformed."""


def _require_mapping(data: Any, where: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise TreeFormatError(f"{where}: expected a mapping, got {type(data).__name__}")
    return data


def _require_name(data: Dict[str, Any], where: str) -> str:
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise TreeFormatError(f"{where}: missing 'name'")
    return name


def _require_flag(data: Dict[str, Any], key: str, where: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TreeFormatError(
            f"{where}.{key}: expected true or false, got {value!r}"
        )
    return value


def _parse_argument(value: Any) -> AnnotationArgument:
    if value is None:
        return AnnotationArgument.absent()
    if isinstance(value, (list, tuple)):
        return AnnotationArgument.list_of(value)
    return AnnotationArgument.single(value)


def parse_annotation(data: Any, where: str = "annotation") -> Annotation:
    """Parse an annotation from a name string or a mapping."""
    if isinstance(data, str):
        return Annotation(name=ANNOTATION_ALIASES.get(data, data))

    data = _require_mapping(data, where)
    name = _require_name(data, where)
    members = _require_mapping(data.get("members") or {}, f"{where}.members")
    return Annotation(
        name=ANNOTATION_ALIASES.get(name, name),
        members={str(k): _parse_argument(v) for k, v in members.items()},
    )


def _parse_annotations(data: Dict[str, Any], where: str) -> List[Annotation]:
    items = data.get("annotations") or []
    if not isinstance(items, list):
        raise TreeFormatError(f"{where}.annotations: expected a list")
    return [parse_annotation(a, f"{where}.annotations[{i}]") for i, a in enumerate(items)]


def _list_of(data: Dict[str, Any], key: str, where: str) -> List[Any]:
    items = data.get(key) or []
    if not isinstance(items, list):
        raise TreeFormatError(f"{where}.{key}: expected a list")
    return items


def parse_class(data: Any, where: str = "class") -> ClassNode:
    """Parse a class with its fields and methods."""
    data = _require_mapping(data, where)
    name = _require_name(data, where)
    where = f"{where} {name}"

    fields = []
    for i, f_data in enumerate(_list_of(data, "fields", where)):
        f_where = f"{where}.fields[{i}]"
        f_data = _require_mapping(f_data, f_where)
        fields.append(
            FieldNode(
                name=_require_name(f_data, f_where),
                dynamically_typed=_require_flag(f_data, "dynamically_typed", f_where),
                annotations=_parse_annotations(f_data, f_where),
            )
        )

    methods = []
    for i, m_data in enumerate(_list_of(data, "methods", where)):
        m_where = f"{where}.methods[{i}]"
        m_data = _require_mapping(m_data, m_where)
        parameters = []
        for j, p_data in enumerate(_list_of(m_data, "parameters", m_where)):
            p_where = f"{m_where}.parameters[{j}]"
            p_data = _require_mapping(p_data, p_where)
            parameters.append(
                ParameterNode(
                    name=_require_name(p_data, p_where),
                    dynamically_typed=_require_flag(p_data, "dynamically_typed", p_where),
                )
            )
        methods.append(
            MethodNode(
                name=_require_name(m_data, m_where),
                dynamic_return_type=_require_flag(m_data, "dynamic_return_type", m_where),
                annotations=_parse_annotations(m_data, m_where),
                parameters=parameters,
            )
        )

    package = data.get("package")
    return ClassNode(
        name=name,
        annotations=_parse_annotations(data, where),
        fields=fields,
        methods=methods,
        package=str(package) if package is not None else None,
    )


def parse_unit(data: Any, where: str = "unit") -> CompilationUnit:
    """Parse a compilation unit with its classes."""
    data = _require_mapping(data, where)
    target = data.get("target_directory")
    return CompilationUnit(
        name=str(data.get("name", "")),
        target_directory=str(target) if target else None,
        classes=[
            parse_class(c, f"{where}.classes[{i}]")
            for i, c in enumerate(_list_of(data, "classes", where))
        ],
    )


def parse_units(data: Any) -> List[CompilationUnit]:
    """Parse a descriptor document into compilation units."""
    if isinstance(data, list):
        items = data
    elif isinstance(data, dict) and "units" in data:
        items = data["units"] or []
        if not isinstance(items, list):
            raise TreeFormatError("units: expected a list")
    elif isinstance(data, dict):
        items = [data]
    else:
        raise TreeFormatError(
            f"Tree descriptor must be a mapping or a list, got {type(data).__name__}"
        )

    return [parse_unit(u, f"units[{i}]") for i, u in enumerate(items)]


def load_units(path: PathLike) -> List[CompilationUnit]:
    """Load compilation units from a YAML or JSON descriptor file.

    Parameters
    ----------
    path : PathLike
        Descriptor file (``.json`` is read as JSON, anything else as YAML)

    Returns
    -------
    List[CompilationUnit]
        Units in document order

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    TreeFormatError
        If the document cannot be parsed or has the wrong shape
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tree descriptor not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise TreeFormatError(f"Can't parse {path}: {e}") from e

    units = parse_units(data)
    logger.info(
        f"Loaded {len(units)} units ({sum(len(u.classes) for u in units)} classes) from {path}"
    )
    return units
