"""Node tree consumed by the enforcement engine.

Provides:
- ArgumentKind / AnnotationArgument: Tagged annotation member values
- Annotation: Annotation name plus member map
- CompilationUnit, ClassNode, FieldNode, MethodNode, ParameterNode

The tree is built by the host (or by ``enterprise_groovy.io.tree``) and is
only mutated by marker attachment.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

COMPILE_STATIC = "groovy.transform.CompileStatic"
COMPILE_DYNAMIC = "groovy.transform.CompileDynamic"

EXTENSIONS_MEMBER = "extensions"
MODE_MEMBER = "value"
SKIP_MODE = "SKIP"

# Either of these on a class means the class has already chosen its mode
EXCLUDED_ANNOTATIONS = frozenset({COMPILE_STATIC, COMPILE_DYNAMIC})
DYNAMIC_ANNOTATIONS = frozenset({COMPILE_DYNAMIC})


class ArgumentKind(Enum):
    """Shapes an annotation member value can take."""

    ABSENT = "absent"
    VALUE = "value"  # Single enum-like value (e.g. TypeCheckingMode.SKIP)
    LIST = "list"  # List of strings (e.g. extensions)


@dataclass(frozen=True)
class AnnotationArgument:
    """Tagged annotation member value.

    Attributes
    ----------
    kind : ArgumentKind
        Which shape the value has
    value : str, optional
        Set when kind is VALUE
    items : Tuple[str, ...]
        Set when kind is LIST
    """

    kind: ArgumentKind = ArgumentKind.ABSENT
    value: Optional[str] = None
    items: Tuple[str, ...] = ()

    @classmethod
    def absent(cls) -> "AnnotationArgument":
        return cls()

    @classmethod
    def single(cls, value: str) -> "AnnotationArgument":
        return cls(kind=ArgumentKind.VALUE, value=str(value))

    @classmethod
    def list_of(cls, items: Iterable[str]) -> "AnnotationArgument":
        return cls(kind=ArgumentKind.LIST, items=tuple(str(i) for i in items))

    def to_dict(self):
        """Convert to a plain value (None, str or list)."""
        if self.kind is ArgumentKind.VALUE:
            return self.value
        if self.kind is ArgumentKind.LIST:
            return list(self.items)
        return None


@dataclass
class Annotation:
    """An annotation on a class or member.

    Attributes
    ----------
    name : str
        Fully-qualified annotation type name
    members : Dict[str, AnnotationArgument]
        Member name to value
    """

    name: str
    members: Dict[str, AnnotationArgument] = field(default_factory=dict)

    def member(self, name: str) -> AnnotationArgument:
        """Get member value, or the absent argument if not declared."""
        return self.members.get(name, AnnotationArgument.absent())

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "members": {k: v.to_dict() for k, v in self.members.items()},
        }


@dataclass
class ParameterNode:
    """A method parameter."""

    name: str
    dynamically_typed: bool = False

    kind = "parameter"


@dataclass
class FieldNode:
    """A class field."""

    name: str
    dynamically_typed: bool = False
    annotations: List[Annotation] = field(default_factory=list)

    kind = "field"


@dataclass
class MethodNode:
    """A method with its parameters in declaration order."""

    name: str
    dynamic_return_type: bool = False
    annotations: List[Annotation] = field(default_factory=list)
    parameters: List[ParameterNode] = field(default_factory=list)

    kind = "method"


@dataclass
class ClassNode:
    """A class with its fields and methods in declaration order.

    Attributes
    ----------
    name : str
        Fully-qualified class name
    annotations : List[Annotation]
        Declared annotations (marker attachment appends here)
    fields : List[FieldNode]
        Fields in declaration order
    methods : List[MethodNode]
        Methods in declaration order
    package : str, optional
        Explicit package name; derived from ``name`` when not given
    """

    name: str
    annotations: List[Annotation] = field(default_factory=list)
    fields: List[FieldNode] = field(default_factory=list)
    methods: List[MethodNode] = field(default_factory=list)
    package: Optional[str] = None

    kind = "class"

    @property
    def package_name(self) -> str:
        if self.package is not None:
            return self.package
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[0]

    def add_annotation(self, annotation: Annotation) -> None:
        self.annotations.append(annotation)


@dataclass
class CompilationUnit:
    """A source unit and the classes it declares.

    Attributes
    ----------
    name : str
        Source name (file name or script name)
    target_directory : str, optional
        Output directory for compiled classes; None for ad-hoc scripts
    classes : List[ClassNode]
        Classes in declaration order
    """

    name: str = ""
    target_directory: Optional[str] = None
    classes: List[ClassNode] = field(default_factory=list)

    @property
    def has_target_directory(self) -> bool:
        return bool(self.target_directory)
