"""Node model for compilation units.

Example
-------
>>> from enterprise_groovy.model import ClassNode, CompilationUnit, FieldNode
>>> unit = CompilationUnit(
...     name="Foo.groovy",
...     target_directory="build/classes",
...     classes=[ClassNode("com.acme.Foo", fields=[FieldNode("bar", True)])],
... )
>>> unit.classes[0].package_name
'com.acme'
"""

from .nodes import (
    COMPILE_DYNAMIC,
    COMPILE_STATIC,
    DYNAMIC_ANNOTATIONS,
    EXCLUDED_ANNOTATIONS,
    EXTENSIONS_MEMBER,
    MODE_MEMBER,
    SKIP_MODE,
    Annotation,
    AnnotationArgument,
    ArgumentKind,
    ClassNode,
    CompilationUnit,
    FieldNode,
    MethodNode,
    ParameterNode,
)

__all__ = [
    # Constants
    "COMPILE_DYNAMIC",
    "COMPILE_STATIC",
    "DYNAMIC_ANNOTATIONS",
    "EXCLUDED_ANNOTATIONS",
    "EXTENSIONS_MEMBER",
    "MODE_MEMBER",
    "SKIP_MODE",
    # Annotations
    "Annotation",
    "AnnotationArgument",
    "ArgumentKind",
    # Nodes
    "ClassNode",
    "CompilationUnit",
    "FieldNode",
    "MethodNode",
    "ParameterNode",
]
