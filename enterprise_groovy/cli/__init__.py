"""Command-line interface for Enterprise Groovy.

Example Usage
-------------
    # From command line:
    enterprise-groovy --help
    enterprise-groovy check tree.yaml --conventions conventions.yaml --out out/
    enterprise-groovy show-config --conventions conventions.yaml
"""

__version__ = "0.1.0"

from .main import cli, main

__all__ = [
    "__version__",
    "cli",
    "main",
]
