"""Shared fixtures and helpers for tests."""

import shutil
from pathlib import Path

import pytest
from tree_sitter import Language
from tree_sitter_language_pack import get_language

from versync.core.extract import ExtractionService, ParserCapabilities

_REPO_ROOT = Path(__file__).parent.parent
_FIXTURES = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fixtures_dir() -> Path:
    return _FIXTURES


@pytest.fixture
def javascript_language() -> Language:
    """Return the tree-sitter JavaScript language."""
    return get_language("javascript")


@pytest.fixture
def typescript_language() -> Language:
    """Return the tree-sitter TypeScript language."""
    return get_language("typescript")


@pytest.fixture
def service(javascript_language: Language, typescript_language: Language) -> ExtractionService:
    return ExtractionService(ParserCapabilities(javascript=javascript_language, typescript=typescript_language))


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A temporary working directory holding a copy of the fixtures."""
    target = tmp_path / "pkg"
    shutil.copytree(_FIXTURES, target)
    monkeypatch.chdir(target)
    return target
