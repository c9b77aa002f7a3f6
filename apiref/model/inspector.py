"""
Semantic model over imported Python modules.

Answers the walker's and extractor's queries with ``inspect`` and
``typing`` introspection. Only classes and type aliases defined inside the
documented package count as originating symbols: builtins, the standard
library and third-party types are never pulled into the reference.
"""

from __future__ import annotations

import collections.abc
import functools
import inspect
import re
import sys
import typing
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType
from typing import Any

from ..docstring import documentation_text, parameter_docs
from ..exceptions import DiscoveryError
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

__all__ = ["InspectModel", "format_type"]

_EMPTY = inspect.Parameter.empty
_NONE_TYPE = type(None)

# Attributes the interpreter, abc and dataclasses put on every class body
_CLASS_MACHINERY = frozenset(
    {
        "__module__",
        "__qualname__",
        "__doc__",
        "__dict__",
        "__weakref__",
        "__annotations__",
        "__annotate__",
        "__annotate_func__",
        "__annotations_cache__",
        "__classcell__",
        "__classdictcell__",
        "__slots__",
        "__hash__",
        "__firstlineno__",
        "__static_attributes__",
        "__orig_bases__",
        "__parameters__",
        "__type_params__",
        "__abstractmethods__",
        "__match_args__",
        "__dataclass_fields__",
        "__dataclass_params__",
        "_abc_impl",
    }
)

# Dunder members that are part of a class's public surface
_PUBLIC_DUNDERS = frozenset({"__init__", "__call__"})

_MODULE_PREFIX_RE = re.compile(r"\b(?:[a-z_]\w*\.)+(?=[A-Za-z_])")
# Quoted spans (Literal values, forward references) are displayed verbatim
_QUOTED_RE = re.compile(r"""('(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")""")


def format_type(type_str: str) -> str:
    """Clean up a type repr for display.

    Removes module prefixes (``mylib.core.Tensor`` -> ``Tensor``,
    ``typing.Optional`` -> ``Optional``) and class wrapper syntax. Text
    inside quotes, such as ``Literal['os.path']``, is left alone.
    """
    type_str = type_str.replace("<class '", "").replace("'>", "")
    pieces = _QUOTED_RE.split(type_str)
    # Odd indices are the quoted spans captured by split
    pieces[::2] = [_MODULE_PREFIX_RE.sub("", piece).replace("NoneType", "None") for piece in pieces[::2]]
    return "".join(pieces)


def _unwrap(obj: Any) -> Any:
    """Get the function behind a method or property wrapper."""
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    if isinstance(obj, property):
        return obj.fget
    if isinstance(obj, functools.cached_property):
        return obj.func
    return obj


def _own_doc(obj: Any) -> str | None:
    """Docstring written on obj itself, never one inherited from a base."""
    obj = _unwrap(obj)
    if inspect.isclass(obj):
        doc = obj.__dict__.get("__doc__")
    elif inspect.isroutine(obj):
        doc = obj.__doc__
    else:
        return None
    if not isinstance(doc, str) or not doc.strip():
        return None
    return inspect.cleandoc(doc)


def _definition_site(obj: Any) -> tuple[str, str] | None:
    """(module, qualname) where obj was defined, for named definitions only."""
    if isinstance(obj, typing.TypeAliasType):
        return obj.__module__, obj.__name__
    if inspect.isclass(obj) or (
        inspect.isroutine(obj) and getattr(obj, "__name__", "") != "<lambda>"
    ):
        module = getattr(obj, "__module__", None)
        qualname = getattr(obj, "__qualname__", None)
        if module and qualname:
            return module, qualname
    return None


def _classify(obj: Any) -> DeclarationKind:
    if isinstance(obj, ModuleType):
        return DeclarationKind.UNKNOWN
    if isinstance(obj, (typing.TypeAliasType, typing.TypeVar, typing.NewType)):
        return DeclarationKind.TYPE_ALIAS
    if inspect.isclass(obj):
        if typing.is_typeddict(obj) or getattr(obj, "_is_protocol", False):
            return DeclarationKind.INTERFACE
        return DeclarationKind.CLASS
    origin = typing.get_origin(obj)
    if origin is collections.abc.Callable:
        return DeclarationKind.FUNCTION_TYPE
    if origin is not None:
        return DeclarationKind.TYPE_ALIAS
    if isinstance(obj, str):
        return DeclarationKind.STRING_LITERAL
    if isinstance(obj, dict):
        return DeclarationKind.OBJECT_LITERAL
    if inspect.isroutine(obj) and obj.__name__ != "<lambda>":
        return DeclarationKind.FUNCTION
    return DeclarationKind.VARIABLE


def _member_kind(name: str, raw: Any) -> MemberKind:
    if name == "__init__":
        return MemberKind.CONSTRUCTOR
    if isinstance(raw, (property, functools.cached_property)):
        return MemberKind.ACCESSOR
    if isinstance(raw, (staticmethod, classmethod)) or inspect.isfunction(raw):
        return MemberKind.METHOD
    if inspect.isclass(raw):
        return MemberKind.OTHER
    return MemberKind.PROPERTY


def _lenient_annotations(obj: Any) -> dict[str, Any]:
    """Own annotations of obj, evaluated when every string resolves.

    Annotations naming TYPE_CHECKING-only imports cannot be evaluated; they
    are kept as the strings written in the source.
    """
    try:
        return inspect.get_annotations(obj, eval_str=True)
    except (NameError, AttributeError, SyntaxError, TypeError):
        pass
    try:
        return inspect.get_annotations(obj)
    except TypeError:
        return {}


def _resolved_annotations(func: Any) -> dict[str, Any]:
    """Annotations of a callable with forward references resolved."""
    if isinstance(func, functools.partial):
        func = func.func
    try:
        hints = typing.get_type_hints(func)
    except (NameError, AttributeError, SyntaxError, TypeError):
        hints = _lenient_annotations(func)
    return {name: _NONE_TYPE if value is None else value for name, value in hints.items()}


def _format_default(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, str):
        return repr(value)
    return str(value)


def _location_of(obj: Any) -> SourceLocation | None:
    try:
        path = inspect.getsourcefile(obj)
        lines, start = inspect.getsourcelines(obj)
    except (OSError, TypeError):
        return None
    if path is None:
        return None
    start = max(start, 1)
    return SourceLocation(Path(path), start, start + len(lines) - 1)


def _find_assignment(container: Any, name: str) -> SourceLocation | None:
    """Locate ``name: ...`` or ``name = ...`` inside a class or module body."""
    if container is None:
        return None
    try:
        path = inspect.getsourcefile(container)
        lines, start = inspect.getsourcelines(container)
    except (OSError, TypeError):
        return None
    if path is None:
        return None
    pattern = re.compile(rf"^\s*{re.escape(name)}\s*(?::|=(?!=))")
    for offset, line in enumerate(lines):
        if pattern.match(line):
            lineno = max(start, 1) + offset
            return SourceLocation(Path(path), lineno, lineno)
    return None


class InspectModel:
    """
    Semantic model backed by runtime introspection.

    Args:
        package: Top-level package whose classes and type aliases are
            documentable. Types defined anywhere else are treated like
            builtins and never visited.
    """

    def __init__(self, package: str) -> None:
        self.package = package

    @classmethod
    def for_module(cls, module: ModuleType) -> InspectModel:
        """Model scoped to the top-level package of ``module``."""
        return cls(module.__name__.partition(".")[0])

    def _in_package(self, module_name: str | None) -> bool:
        if not module_name:
            return False
        return module_name == self.package or module_name.startswith(self.package + ".")

    # -------------------------------------------------------------------------
    # Symbols and declarations
    # -------------------------------------------------------------------------

    def _is_public_export(self, name: str, value: Any) -> bool:
        if name.startswith("_") or isinstance(value, ModuleType):
            return False
        if type(value).__module__ == "__future__":
            return False
        site = _definition_site(value)
        return site is None or self._in_package(site[0])

    def get_exports_of_module(self, module: ModuleType) -> list[Symbol]:
        names = getattr(module, "__all__", None)
        if names is None:
            names = [
                name for name, value in vars(module).items() if self._is_public_export(name, value)
            ]
        symbols = []
        for name in names:
            if not hasattr(module, name):
                raise DiscoveryError(
                    f"{module.__name__}.__all__ lists '{name}' but the module does not define it",
                    details={"module": module.__name__, "name": name},
                )
            symbols.append(Symbol(module.__name__, name, getattr(module, name)))
        return symbols

    def get_declarations(self, symbol: Symbol) -> list[Declaration]:
        kind = _classify(symbol.obj)
        if kind is DeclarationKind.FUNCTION and inspect.isfunction(symbol.obj):
            overloads = typing.get_overloads(symbol.obj)
            return [Declaration(kind, symbol.name, symbol, f) for f in (*overloads, symbol.obj)]
        return [Declaration(kind, symbol.name, symbol, symbol.obj)]

    def is_alias(self, symbol: Symbol) -> bool:
        site = _definition_site(symbol.obj)
        return site is not None and site != (symbol.module, symbol.name)

    def resolve_alias(self, symbol: Symbol) -> Symbol:
        site = _definition_site(symbol.obj)
        if site is None:
            return symbol
        return Symbol(site[0], site[1], symbol.obj)

    def get_documentation_comment(self, symbol: Symbol) -> list[str]:
        doc = documentation_text(_own_doc(symbol.obj))
        return [doc] if doc else []

    # -------------------------------------------------------------------------
    # Signatures
    # -------------------------------------------------------------------------

    def _callable_of(self, node: Declaration | Member) -> tuple[Any, bool, TypeRef | None]:
        """(function, drops_first_parameter, fixed_return_type) for a callable node."""
        if isinstance(node, Declaration):
            return node.obj, False, None
        raw = node.obj
        if node.kind is MemberKind.CONSTRUCTOR:
            return raw, True, TypeRef(node.owner.obj)
        if isinstance(raw, staticmethod):
            return raw.__func__, False, None
        if isinstance(raw, classmethod):
            return raw.__func__, True, None
        if inspect.isfunction(raw):
            return raw, True, None
        return raw, False, None

    def get_call_signature(self, node: Declaration | Member) -> Signature:
        func, drop_first, returns = self._callable_of(node)
        try:
            sig = inspect.signature(func)
        except (ValueError, TypeError):
            return Signature((), returns or TypeRef(), "(...)")

        hints = _resolved_annotations(func)
        docs = parameter_docs(_own_doc(func))
        if isinstance(node, Declaration) and node.obj is not node.symbol.obj:
            # Overload stubs carry no docstring of their own
            docs = {**parameter_docs(_own_doc(node.symbol.obj)), **docs}
        elif isinstance(node, Member) and node.kind is MemberKind.CONSTRUCTOR:
            # Constructor arguments are usually documented on the class
            docs = {**parameter_docs(_own_doc(node.owner.obj)), **docs}

        params = list(sig.parameters.values())
        if drop_first and params:
            params = params[1:]
        parameters = tuple(
            Parameter(p.name, TypeRef(hints.get(p.name, _EMPTY)), docs.get(p.name))
            for p in params
        )
        if returns is None:
            returns = TypeRef(hints.get("return", _EMPTY))
        return Signature(parameters, returns, self._signature_text(params, parameters, returns))

    def _signature_text(
        self,
        params: list[inspect.Parameter],
        parameters: tuple[Parameter, ...],
        returns: TypeRef,
    ) -> str:
        last_positional_only = max(
            (i for i, p in enumerate(params) if p.kind is p.POSITIONAL_ONLY), default=None
        )
        pieces: list[str] = []
        star_seen = False
        for i, (p, param) in enumerate(zip(params, parameters)):
            if p.kind is p.KEYWORD_ONLY and not star_seen:
                pieces.append("*")
                star_seen = True
            prefix = ""
            if p.kind is p.VAR_POSITIONAL:
                prefix, star_seen = "*", True
            elif p.kind is p.VAR_KEYWORD:
                prefix = "**"
            text = prefix + p.name
            if not param.type.is_empty:
                text += f": {self.type_to_display_string(param.type)}"
                if p.default is not _EMPTY:
                    text += f" = {_format_default(p.default)}"
            elif p.default is not _EMPTY:
                text += f"={_format_default(p.default)}"
            pieces.append(text)
            if i == last_positional_only:
                pieces.append("/")
        text = f"({', '.join(pieces)})"
        if not returns.is_empty:
            text += f" -> {self.type_to_display_string(returns)}"
        return text

    # -------------------------------------------------------------------------
    # Types
    # -------------------------------------------------------------------------

    def type_to_display_string(self, type: TypeRef) -> str:
        ann = type.annotation
        if type.is_empty:
            return "Any"
        if ann is _NONE_TYPE or ann is None:
            return "None"
        if isinstance(ann, str):
            return ann
        if isinstance(ann, typing.TypeAliasType):
            return ann.__name__
        if inspect.isclass(ann) and typing.get_origin(ann) is None:
            return ann.__qualname__
        return format_type(repr(ann))

    def get_originating_symbol(self, type: TypeRef) -> Symbol | None:
        if type.is_empty or isinstance(type.annotation, str):
            return None
        origin = typing.get_origin(type.annotation) or type.annotation
        if inspect.isclass(origin) and self._in_package(origin.__module__):
            return Symbol(origin.__module__, origin.__qualname__, origin)
        return None

    def get_alias_symbol(self, type: TypeRef) -> Symbol | None:
        if type.is_empty:
            return None
        ann = typing.get_origin(type.annotation) or type.annotation
        if isinstance(ann, typing.TypeAliasType) and self._in_package(ann.__module__):
            return Symbol(ann.__module__, ann.__name__, ann)
        return None

    def get_type_arguments(self, type: TypeRef) -> Sequence[TypeRef]:
        origin = typing.get_origin(type.annotation)
        if origin is None or origin is typing.Literal:
            return []
        args = typing.get_args(type.annotation)
        if origin is typing.Annotated:
            args = args[:1]
        flat: list[Any] = []
        for arg in args:
            if isinstance(arg, (list, tuple)):
                # Callable[[A, B], R]
                flat.extend(arg)
            else:
                flat.append(arg)
        return [TypeRef(_NONE_TYPE if a is None else a) for a in flat if a is not Ellipsis]

    def get_type(self, symbol: Symbol, at: Member) -> TypeRef:
        if at.kind is MemberKind.ACCESSOR:
            getter = _unwrap(at.obj)
            return TypeRef(_resolved_annotations(getter).get("return", _EMPTY))
        if at.annotation is not _EMPTY:
            return TypeRef(at.annotation)
        if at.obj is not None:
            return TypeRef(type(at.obj))
        return TypeRef()

    # -------------------------------------------------------------------------
    # Members
    # -------------------------------------------------------------------------

    def get_members(self, declaration: Declaration) -> list[Member]:
        cls = declaration.obj
        own = {
            name: _NONE_TYPE if value is None else value
            for name, value in _lenient_annotations(cls).items()
        }
        names = list(own) + [name for name in cls.__dict__ if name not in own]
        return [
            Member(
                name,
                _member_kind(name, cls.__dict__.get(name)),
                declaration.symbol,
                cls.__dict__.get(name),
                own.get(name, _EMPTY),
            )
            for name in names
            if name not in _CLASS_MACHINERY
        ]

    def is_private(self, member: Member) -> bool:
        return member.name.startswith("_") and member.name not in _PUBLIC_DUNDERS

    def is_callable_initializer(self, node: Declaration | Member) -> bool:
        if inspect.isclass(node.obj) or not callable(node.obj):
            return False
        if isinstance(node, Member):
            return node.kind is MemberKind.PROPERTY
        return node.kind is DeclarationKind.VARIABLE

    # -------------------------------------------------------------------------
    # Source
    # -------------------------------------------------------------------------

    def get_source_location(self, node: Declaration | Member) -> SourceLocation | None:
        if isinstance(node, Member):
            target = _unwrap(node.obj)
            if inspect.isroutine(target):
                return _location_of(target)
            return _find_assignment(node.owner.obj, node.name)
        if inspect.isclass(node.obj) or inspect.isroutine(node.obj):
            return _location_of(node.obj)
        return _find_assignment(sys.modules.get(node.symbol.module), node.symbol.name)
