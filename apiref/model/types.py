"""
Semantic model handles.

These are the opaque values the walker and extractor pass around. They carry
the underlying Python object so an adapter can answer queries about them,
but identity is defined by where a name is declared, never by the object.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

__all__ = [
    "Symbol",
    "DeclarationKind",
    "Declaration",
    "MemberKind",
    "Member",
    "TypeRef",
    "Parameter",
    "Signature",
    "SourceLocation",
]


@dataclass(frozen=True, slots=True)
class Symbol:
    """
    A named program entity.

    Two symbols are equal when they name the same declaration site
    ``(module, name)``; the wrapped object does not take part in equality,
    so a Symbol can be used directly as a dedup key.
    """

    module: str
    name: str
    obj: Any = field(default=None, compare=False, repr=False)

    @property
    def qualname(self) -> str:
        """Dotted path of the declaration site."""
        return f"{self.module}.{self.name}" if self.module else self.name


class DeclarationKind(Enum):
    """Declaration kind discriminator, decided once by the adapter."""

    CLASS = "class"
    FUNCTION = "function"
    VARIABLE = "variable"
    INTERFACE = "interface"
    TYPE_ALIAS = "type_alias"
    STRING_LITERAL = "string_literal"
    OBJECT_LITERAL = "object_literal"
    FUNCTION_TYPE = "function_type"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Declaration:
    """One definition site of a symbol."""

    kind: DeclarationKind
    name: str
    symbol: Symbol
    obj: Any = field(default=None, compare=False, repr=False)


class MemberKind(Enum):
    """Class member discriminator."""

    CONSTRUCTOR = "constructor"
    METHOD = "method"
    PROPERTY = "property"
    ACCESSOR = "accessor"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Member:
    """
    One entry of a class body.

    ``obj`` is the raw class attribute (the ``property`` object, the
    ``staticmethod`` wrapper, the default value of a field) or None for an
    annotated field without a value.
    """

    name: str
    kind: MemberKind
    owner: Symbol
    obj: Any = field(default=None, compare=False, repr=False)
    annotation: Any = field(default=inspect.Parameter.empty, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class TypeRef:
    """A resolved type annotation."""

    annotation: Any = inspect.Parameter.empty

    @property
    def is_empty(self) -> bool:
        """True when the declaration carries no annotation."""
        return self.annotation is inspect.Parameter.empty


@dataclass(frozen=True, slots=True)
class Parameter:
    """A call signature parameter."""

    name: str
    type: TypeRef
    doc: str | None = None


@dataclass(frozen=True, slots=True)
class Signature:
    """A resolved call signature."""

    parameters: tuple[Parameter, ...]
    return_type: TypeRef
    text: str


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """File and 1-based inclusive line range of a declaration."""

    path: Path
    start_line: int
    end_line: int

    @property
    def fragment(self) -> str:
        """Line anchor in ``L10`` or ``L10-L24`` form."""
        if self.end_line > self.start_line:
            return f"L{self.start_line}-L{self.end_line}"
        return f"L{self.start_line}"
