"""
Entry extraction.

Turns one declaration into zero or more ``DocEntry`` records. The extractor
never touches the walker's queue: it returns the types it saw in signatures
and the walker decides what to visit next.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, assert_never

from ._logging import scoped_logger
from .entry import ArgEntry, DocEntry
from .exceptions import ClassificationError
from .model import Declaration, DeclarationKind, Member, MemberKind, Symbol, TypeRef

if TYPE_CHECKING:
    from .model import SemanticModel
    from .source import SourceResolver

__all__ = ["Extraction", "Extractor"]

_log = scoped_logger("extract")

# Declaration kinds that are expected in an export list but never documented
_SKIPPED = {
    DeclarationKind.TYPE_ALIAS: "type alias",
    DeclarationKind.INTERFACE: "interface",
    DeclarationKind.STRING_LITERAL: "string literal",
    DeclarationKind.OBJECT_LITERAL: "object literal",
    DeclarationKind.FUNCTION_TYPE: "function type",
}


@dataclass
class Extraction:
    """Result of visiting one declaration."""

    entries: list[DocEntry] = field(default_factory=list)
    types: list[TypeRef] = field(default_factory=list)


class Extractor:
    """
    Classifies declarations and builds their entries.

    Args:
        model: Semantic model answering signature, type and member queries.
        resolver: Source link resolver. When None, entries carry no
            ``source_url``.
    """

    def __init__(self, model: SemanticModel, resolver: SourceResolver | None = None) -> None:
        self.model = model
        self.resolver = resolver

    def visit(self, declaration: Declaration) -> Extraction:
        """Classify ``declaration`` and extract its entries.

        Raises:
            ClassificationError: The declaration kind is not documentable
                and not a known skip.
        """
        out = Extraction()
        kind = declaration.kind
        match kind:
            case DeclarationKind.CLASS:
                self.visit_class(declaration, out)
            case DeclarationKind.FUNCTION:
                self.visit_method(declaration, declaration.name, out)
            case DeclarationKind.VARIABLE:
                if self.model.is_callable_initializer(declaration):
                    self.visit_method(declaration, declaration.name, out)
                else:
                    _log.info("skipping var %s", declaration.name, extra={"symbol": declaration.name})
            case (
                DeclarationKind.TYPE_ALIAS
                | DeclarationKind.INTERFACE
                | DeclarationKind.STRING_LITERAL
                | DeclarationKind.OBJECT_LITERAL
                | DeclarationKind.FUNCTION_TYPE
            ):
                _log.info(
                    "skipping %s %s", _SKIPPED[kind], declaration.name, extra={"symbol": declaration.name}
                )
            case DeclarationKind.UNKNOWN:
                raise ClassificationError(
                    f"Unknown declaration kind for '{declaration.symbol.qualname}'",
                    details={"symbol": declaration.symbol.qualname},
                )
            case _:
                assert_never(kind)
        return out

    def visit_class(self, declaration: Declaration, out: Extraction) -> None:
        """Emit the class entry followed by its public members."""
        class_name = declaration.name
        out.entries.append(
            DocEntry(
                kind="class",
                name=class_name,
                docstr=self._flat_docstr(declaration.symbol),
                source_url=self._source_url(declaration),
            )
        )

        for member in self.model.get_members(declaration):
            if self.model.is_private(member):
                _log.debug("private, skipping %s", member.name, extra={"symbol": class_name})
                continue
            match member.kind:
                case MemberKind.CONSTRUCTOR:
                    self.visit_method(member, "constructor", out, class_name=class_name)
                case MemberKind.METHOD:
                    self.visit_method(member, member.name, out, class_name=class_name)
                case MemberKind.PROPERTY if self.model.is_callable_initializer(member):
                    self.visit_method(member, member.name, out, class_name=class_name)
                case MemberKind.PROPERTY | MemberKind.ACCESSOR:
                    self.visit_prop(member, out, class_name=class_name)
                case MemberKind.OTHER:
                    _log.info("skipping member %s.%s", class_name, member.name)

    def visit_method(
        self,
        node: Declaration | Member,
        method_name: str,
        out: Extraction,
        class_name: str | None = None,
    ) -> None:
        """Emit a method entry and collect its parameter and return types."""
        sig = self.model.get_call_signature(node)

        args = []
        for param in sig.parameters:
            out.types.append(param.type)
            args.append(
                ArgEntry(
                    name=param.name,
                    typestr=self.model.type_to_display_string(param.type),
                    docstr=param.doc,
                )
            )

        out.types.append(sig.return_type)
        out.entries.append(
            DocEntry(
                kind="method",
                name=f"{class_name}.{method_name}" if class_name else method_name,
                typestr=sig.text,
                docstr=self._flat_docstr(self._symbol_of(node)),
                args=args,
                ret_type=self.model.type_to_display_string(sig.return_type),
                source_url=self._source_url(node),
            )
        )

    def visit_prop(self, member: Member, out: Extraction, class_name: str) -> None:
        """Emit a property entry. Property types are displayed, not walked."""
        symbol = self._symbol_of(member)
        out.entries.append(
            DocEntry(
                kind="property",
                name=f"{class_name}.{member.name}",
                typestr=self.model.type_to_display_string(self.model.get_type(symbol, member)),
                docstr=self._flat_docstr(symbol),
                source_url=self._source_url(member),
            )
        )

    def _symbol_of(self, node: Declaration | Member) -> Symbol:
        if isinstance(node, Member):
            return Symbol(node.owner.module, f"{node.owner.name}.{node.name}", node.obj)
        return node.symbol

    def _flat_docstr(self, symbol: Symbol) -> str | None:
        parts = self.model.get_documentation_comment(symbol)
        return "".join(parts) if parts else None

    def _source_url(self, node: Declaration | Member) -> str | None:
        if self.resolver is None:
            return None
        return self.resolver.resolve_source_url(node)
