"""I/O utilities for Enterprise Groovy.

Provides logging and node tree descriptor loading.
"""

from .logging import get_logger, get_timestamped_log_path, log_yaml
from .tree import (
    TreeFormatError,
    load_units,
    parse_annotation,
    parse_class,
    parse_unit,
    parse_units,
)

__all__ = [
    # Logging
    "get_logger",
    "get_timestamped_log_path",
    "log_yaml",
    # Tree descriptors
    "TreeFormatError",
    "load_units",
    "parse_annotation",
    "parse_class",
    "parse_unit",
    "parse_units",
]
