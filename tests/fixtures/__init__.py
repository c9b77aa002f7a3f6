"""
Shared test fixtures for apiref.

- ``sample_api/``: importable package documented by the end-to-end tests
  (``tests/conftest.py`` puts this directory on ``sys.path``).
- ``fake_model``: scripted semantic model and extractor for walker tests.
"""

from .fake_model import FakeExtractor, FakeModel

__all__ = [
    "FakeModel",
    "FakeExtractor",
]
