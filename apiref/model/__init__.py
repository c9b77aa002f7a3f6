"""
Semantic model.

The walker and extractor only talk to a ``SemanticModel``. ``InspectModel``
implements it over imported Python modules; tests substitute scripted fakes.
"""

from .adapter import SemanticModel
from .inspector import InspectModel, format_type
from .types import (
    Declaration,
    DeclarationKind,
    Member,
    MemberKind,
    Parameter,
    Signature,
    SourceLocation,
    Symbol,
    TypeRef,
)

__all__ = [
    # Protocol
    "SemanticModel",
    # Implementation
    "InspectModel",
    "format_type",
    # Handles
    "Symbol",
    "Declaration",
    "DeclarationKind",
    "Member",
    "MemberKind",
    "TypeRef",
    "Parameter",
    "Signature",
    "SourceLocation",
]
