"""Pytest configuration and shared fixtures for Enterprise Groovy tests."""

import sys
from pathlib import Path

import pytest

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from enterprise_groovy.config import KNOWN_PROPERTIES, reset_configuration
from enterprise_groovy.config.resolver import env_name

from tests.fixtures import FOO_DESCRIPTOR, create_foo_unit, write_tree_yaml


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove override properties from the environment and reset resolution."""
    for name in KNOWN_PROPERTIES:
        monkeypatch.delenv(env_name(name), raising=False)
    reset_configuration()
    yield
    reset_configuration()


# ============================================================================
# Tree Fixtures
# ============================================================================


@pytest.fixture
def foo_unit():
    """Compilation unit with class com.acme.Foo (def field, def parameter)."""
    return create_foo_unit()


@pytest.fixture
def foo_tree_file(tmp_path) -> Path:
    """YAML descriptor for the com.acme.Foo unit."""
    return write_tree_yaml(tmp_path / "tree.yaml", FOO_DESCRIPTOR)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def conventions_file(tmp_path) -> Path:
    """Conventions file enabling every enforcement flag."""
    import yaml

    config = {
        "conventions": {
            "disable": False,
            "whiteListScripts": True,
            "disableDynamicCompile": True,
            "dynamicCompileWhiteList": ["com.acme.legacy"],
            "compileStaticExtensions": ["A", "B"],
            "limitCompileStaticExtensions": True,
            "defAllowed": False,
            "skipDefaultPackage": True,
        }
    }

    path = tmp_path / "conventions.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)

    return path
