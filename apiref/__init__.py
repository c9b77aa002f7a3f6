"""
Apiref - API reference pages from a module's public surface.

Apiref starts from the exports of one root module and pulls in every class
their signatures mention, then renders a single static HTML page.

Quick Start
-----------

    >>> import apiref
    >>>
    >>> html = apiref.generate_html("mylib")
    >>> apiref.write_html(html, "build/docs/index.html")

With commit-pinned source links:

    >>> html = apiref.generate_html("mylib", repo_url="https://github.com/org/mylib")

From the command line:

    $ apiref mylib build/docs/index.html --repo-url https://github.com/org/mylib


What Gets Documented
--------------------

- Classes, with their constructor, public methods and properties
- Functions, and variables bound to a callable
- Every class defined in the package that appears in a documented
  signature, even when it is not exported

Plain variables, type aliases, protocols and typed dicts are walked but
produce no entries.
"""

from apiref._logging import setup_logging as setup_logging

# Configuration
from apiref.config import config as config

# Records
from apiref.entry import ArgEntry, DocEntry, entries_to_json

# Exceptions
from apiref.exceptions import (
    ApirefError,
    ClassificationError,
    DeclarationError,
    DiscoveryError,
    SourceLinkError,
    ValidationError,
)

# Traversal
from apiref.extract import Extraction, Extractor

# Pipeline
from apiref.generate import generate_entries, generate_html, load_module, write_html
from apiref.markup import markup_docstr
from apiref.model import InspectModel, SemanticModel
from apiref.render import sort_entries, to_html
from apiref.source import GitSourceResolver, SourceResolver
from apiref.walker import Session, Walker

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "generate_entries",
    "generate_html",
    "load_module",
    "write_html",
    # Records
    "DocEntry",
    "ArgEntry",
    "entries_to_json",
    # Traversal
    "Walker",
    "Session",
    "Extractor",
    "Extraction",
    "SemanticModel",
    "InspectModel",
    # Rendering
    "markup_docstr",
    "sort_entries",
    "to_html",
    # Source links
    "SourceResolver",
    "GitSourceResolver",
    # Configuration
    "config",
    "setup_logging",
    # Exceptions
    "ApirefError",
    "DiscoveryError",
    "DeclarationError",
    "ClassificationError",
    "SourceLinkError",
    "ValidationError",
]
