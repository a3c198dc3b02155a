"""Pytest configuration and fixtures for test suite."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from citeparse.gazetteer import Category, MemoryGazetteer  # noqa: E402
from citeparse.parser import Parser  # noqa: E402


@pytest.fixture(scope="session")
def parser() -> Parser:
    """Parser with the bundled default seed, shared across tests."""
    return Parser()


@pytest.fixture
def memory_gazetteer() -> MemoryGazetteer:
    """Small in-memory gazetteer with one term per category."""
    gazetteer = MemoryGazetteer()
    gazetteer.import_terms(Category.PLACE, ["Paris", "London"])
    gazetteer.import_terms(Category.NAME, ["Perec"])
    gazetteer.import_terms(Category.PUBLISHER, ["Seuil"])
    gazetteer.import_terms(Category.JOURNAL, ["Nature"])
    return gazetteer
