import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'conduit' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from conduit.core.config import clear_all_caches
from conduit.core.logging_setup import reset_stdlib_logging_for_tests
from helpers.content_store import ContentStoreBuilder


@pytest.fixture(autouse=True)
def _isolate_conduit_state(monkeypatch):
    """Fresh config cache and no developer CONDUIT_* overrides for each test."""
    for key in list(os.environ):
        if key.startswith("CONDUIT_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()
    reset_stdlib_logging_for_tests()


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
    """An empty project root that path resolution points at."""
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.setenv("CONDUIT_PROJECT_ROOT", str(root))
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def store(project) -> ContentStoreBuilder:
    """Content-store builder rooted at ``<project>/_conduit``."""
    return ContentStoreBuilder(project)
