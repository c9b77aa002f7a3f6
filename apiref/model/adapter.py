"""
The query interface the walker and extractor consume.

Any static or runtime analysis facility can back it; ``InspectModel`` is
the implementation over imported Python modules.
"""

from __future__ import annotations

from collections.abc import Sequence
from types import ModuleType
from typing import Protocol

from .types import (
    Declaration,
    Member,
    Signature,
    SourceLocation,
    Symbol,
    TypeRef,
)

__all__ = ["SemanticModel"]


class SemanticModel(Protocol):
    """Queries over declarations, symbols and types."""

    def get_exports_of_module(self, module: ModuleType) -> list[Symbol]:
        """Exported symbols of ``module``, in export order."""
        ...

    def get_declarations(self, symbol: Symbol) -> list[Declaration]:
        """Declarations of ``symbol``, in source order."""
        ...

    def is_alias(self, symbol: Symbol) -> bool:
        """Whether ``symbol`` re-exports another symbol."""
        ...

    def resolve_alias(self, symbol: Symbol) -> Symbol:
        """The symbol an alias points to."""
        ...

    def get_documentation_comment(self, symbol: Symbol) -> list[str]:
        """Documentation text parts of ``symbol`` (possibly empty)."""
        ...

    def get_call_signature(self, node: Declaration | Member) -> Signature:
        """Call signature of a callable declaration or member."""
        ...

    def type_to_display_string(self, type: TypeRef) -> str:
        """Human-readable rendering of ``type``."""
        ...

    def get_originating_symbol(self, type: TypeRef) -> Symbol | None:
        """The documentable symbol a type instance comes from, if any."""
        ...

    def get_alias_symbol(self, type: TypeRef) -> Symbol | None:
        """The named type alias ``type`` was spelled with, if any."""
        ...

    def get_type_arguments(self, type: TypeRef) -> Sequence[TypeRef]:
        """Type arguments of a generic or union type."""
        ...

    def get_type(self, symbol: Symbol, at: Member) -> TypeRef:
        """Type of a member symbol as seen at its declaration."""
        ...

    def get_members(self, declaration: Declaration) -> list[Member]:
        """Members of a class declaration, in declaration order."""
        ...

    def is_private(self, member: Member) -> bool:
        """Whether ``member`` is marked private."""
        ...

    def is_callable_initializer(self, node: Declaration | Member) -> bool:
        """Whether a variable or field is initialized with a callable."""
        ...

    def get_source_location(self, node: Declaration | Member) -> SourceLocation | None:
        """Where ``node`` is defined, if the source is available."""
        ...
