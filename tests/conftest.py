"""
Global pytest fixtures for apiref tests.

This module provides:
- ``sample_api`` on ``sys.path`` for end-to-end runs
- Configuration isolation between tests
- A semantic model over the sample package
"""

import sys
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

if str(FIXTURES_DIR) not in sys.path:
    sys.path.insert(0, str(FIXTURES_DIR))


@pytest.fixture(autouse=True)
def _reset_config():
    """Restore the configuration singleton after every test."""
    from apiref.config import config

    yield
    config.reset()


@pytest.fixture
def sample_api():
    """The importable sample package."""
    import sample_api

    return sample_api


@pytest.fixture
def model(sample_api):
    """InspectModel scoped to the sample package."""
    from apiref.model import InspectModel

    return InspectModel.for_module(sample_api)


@pytest.fixture
def sample_entries(sample_api):
    """Entries of a full run over the sample package, in visiting order."""
    from apiref import generate_entries

    return generate_entries(sample_api)


@pytest.fixture
def entry_by_name(sample_entries):
    """Lookup of sample entries by display name."""
    return {entry.name: entry for entry in sample_entries}
