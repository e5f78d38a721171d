"""Pure queries over the annotations of a class or method.

Both ClassNode and MethodNode satisfy ``AnnotatedNode``, so each predicate is
written once for the two node kinds.
"""

from typing import Collection, Iterable, List, Optional, Protocol

from ...model.nodes import (
    COMPILE_STATIC,
    EXTENSIONS_MEMBER,
    MODE_MEMBER,
    SKIP_MODE,
    Annotation,
    ArgumentKind,
)


class AnnotatedNode(Protocol):
    """Anything with a name and a list of annotations."""

    name: str
    annotations: List[Annotation]


def has_any(node: AnnotatedNode, names: Collection[str]) -> bool:
    """True if any annotation on the node has a name in ``names``."""
    return any(a.name in names for a in node.annotations)


def find_marker(node: AnnotatedNode) -> Optional[Annotation]:
    """First CompileStatic annotation on the node, if any."""
    for annotation in node.annotations:
        if annotation.name == COMPILE_STATIC:
            return annotation
    return None


def _mode_literal(value: str) -> str:
    # TypeCheckingMode.SKIP and SKIP are the same literal
    return value.rsplit(".", 1)[-1]


def has_skip_mode(node: AnnotatedNode) -> bool:
    """True if the node carries ``CompileStatic(TypeCheckingMode.SKIP)``.

    A missing marker or a marker without a mode argument is not skip mode.
    """
    marker = find_marker(node)
    if marker is None:
        return False

    mode = marker.member(MODE_MEMBER)
    if mode.kind is ArgumentKind.VALUE:
        return _mode_literal(mode.value) == SKIP_MODE
    return False


def disallowed_extensions(node: AnnotatedNode, allowed: Collection[str]) -> List[str]:
    """Extensions declared by the node's CompileStatic markers but not allowed."""
    found = []
    for annotation in node.annotations:
        if annotation.name != COMPILE_STATIC:
            continue
        extensions = annotation.member(EXTENSIONS_MEMBER)
        if extensions.kind is not ArgumentKind.LIST:
            continue
        found.extend(e for e in extensions.items if e not in allowed)
    return found


def violates_extension_limit(node: AnnotatedNode, allowed: Iterable[str]) -> bool:
    """True if a CompileStatic marker on the node lists an extension outside ``allowed``.

    A marker without an extension list never violates.
    """
    return bool(disallowed_extensions(node, frozenset(allowed)))
