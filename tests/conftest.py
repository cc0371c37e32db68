"""Root test configuration: isolate MDSITE_* env vars and clean up runtime artifacts"""

import os
import shutil
from pathlib import Path

import pytest


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_DIRS = ["_site"]


@pytest.fixture(autouse=True)
def clear_mdsite_env(monkeypatch):
    """Keep MDSITE_* variables from the developer's shell out of every test."""
    for name in list(os.environ):
        if name.startswith("MDSITE_"):
            monkeypatch.delenv(name)


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove output directories created in the project root during the test session."""
    yield
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)
