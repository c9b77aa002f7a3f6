"""
Apiref exceptions.

This module defines the exception hierarchy for apiref:

    ApirefError (base)
    ├── DiscoveryError - Root module cannot be located or imported
    ├── DeclarationError - Symbol has no declaration to document
    ├── ClassificationError - Declaration kind is not recognized
    ├── SourceLinkError - Source link cannot be resolved
    └── ValidationError - Invalid configuration value
"""

from .exceptions import (
    ApirefError,
    ClassificationError,
    DeclarationError,
    DiscoveryError,
    SourceLinkError,
    ValidationError,
)

__all__ = [
    # Base
    "ApirefError",
    # Traversal
    "DiscoveryError",
    "DeclarationError",
    "ClassificationError",
    # Source links
    "SourceLinkError",
    # Configuration
    "ValidationError",
]
