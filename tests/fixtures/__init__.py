"""Test fixtures for Enterprise Groovy.

Provides node tree builders and descriptor helpers.
"""

from .trees import (
    FOO_DESCRIPTOR,
    compile_dynamic,
    compile_static,
    create_def_heavy_class,
    create_foo_unit,
    create_unit,
    write_tree_yaml,
)

__all__ = [
    "FOO_DESCRIPTOR",
    "compile_dynamic",
    "compile_static",
    "create_def_heavy_class",
    "create_foo_unit",
    "create_unit",
    "write_tree_yaml",
]
