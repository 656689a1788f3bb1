"""Shared test fixtures and configuration."""

from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "functions"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from tests.fakes import FakeGenerator, FakeTextGenerator, FakeWordStore  # noqa: E402


@pytest.fixture
def store():
    """Empty in-memory word store."""
    return FakeWordStore()


@pytest.fixture
def generator():
    """Generator that fails unless a test scripts its results."""
    return FakeGenerator()


@pytest.fixture
def text_generator():
    """Gemini stand-in answering "no" to everything until configured."""
    return FakeTextGenerator()
