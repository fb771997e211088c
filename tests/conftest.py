"""
Pytest configuration for the methodref test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- A clean configuration for every test
- Fixtures for registering throwaway modules in sys.modules
"""

import os
import sys
import types

import pytest

os.environ.setdefault("METHODREF_MACHINE_MODE", "1")

from methodref.config import reset_config
from methodref.logging_config import setup_logging


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True)


# ============================================================================
# CONFIG FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Drop METHODREF_* settings from the environment and the cached config."""
    for key in list(os.environ.keys()):
        if key.startswith("METHODREF_") and key != "METHODREF_MACHINE_MODE":
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


# ============================================================================
# MODULE FIXTURES
# ============================================================================

@pytest.fixture
def register_module(monkeypatch):
    """
    Register a throwaway module in sys.modules for the duration of a test.

    Usage:
        def test_something(register_module):
            register_module("fake_models", Widget=Widget)
    """
    def register(name, **attrs):
        module = types.ModuleType(name)
        for key, value in attrs.items():
            setattr(module, key, value)
        monkeypatch.setitem(sys.modules, name, module)
        return module

    return register


@pytest.fixture
def lazy_package(tmp_path, monkeypatch):
    """
    An importable on-disk package that has not been imported yet.

    Yields the package name; ``<name>.models`` defines ``Invoice``.
    """
    name = "methodref_lazy_pkg"
    package_dir = tmp_path / name
    package_dir.mkdir()
    (package_dir / "__init__.py").write_text("")
    (package_dir / "models.py").write_text(
        "class Invoice:\n"
        "    def total(self, currency='USD'):\n"
        "        return 0\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    yield name

    for module_name in list(sys.modules):
        if module_name == name or module_name.startswith(name + "."):
            del sys.modules[module_name]
