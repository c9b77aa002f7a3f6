"""
Worklist traversal.

Computes the closure of documentable declarations reachable from a root
module's exports. Exports seed a FIFO queue; every declaration popped from
the queue is handed to the extractor, and the types its signatures mention
are folded back into the queue. A visited set keyed by the alias-resolved
symbol guarantees each symbol is processed once and the walk terminates.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field

from ._logging import scoped_logger
from .entry import DocEntry
from .exceptions import DeclarationError
from .extract import Extraction, Extractor
from .model import Declaration, SemanticModel, Symbol, TypeRef

__all__ = ["Session", "Walker"]

_log = scoped_logger("walker")


@dataclass
class Session:
    """Mutable state of one documentation run."""

    model: SemanticModel
    queue: deque[Declaration] = field(default_factory=deque)
    visited: set[Symbol] = field(default_factory=set)
    output: list[DocEntry] = field(default_factory=list)


class Walker:
    """
    Breadth-first walk over the declarations reachable from a module.

    A fresh ``Session`` is created for every ``run``; nothing is shared
    between runs.

    Example:
        >>> model = InspectModel.for_module(mylib)
        >>> walker = Walker(model, Extractor(model))
        >>> entries = walker.run(model.get_exports_of_module(mylib))
    """

    def __init__(self, model: SemanticModel, extractor: Extractor) -> None:
        self.model = model
        self.extractor = extractor
        self.session = Session(model)

    def run(self, exports: Iterable[Symbol]) -> list[DocEntry]:
        """Document every export and everything its signatures reference.

        Returns:
            Entries in visiting order. Display order is decided by the
            renderer.
        """
        self.session = Session(self.model)
        for symbol in exports:
            self.request_visit(symbol)

        queue = self.session.queue
        while queue:
            self._fold(self.extractor.visit(queue.popleft()))
        return self.session.output

    def request_visit(self, symbol: Symbol) -> None:
        """Enqueue the first declaration of ``symbol`` unless already visited.

        Raises:
            DeclarationError: The symbol has no declaration.
        """
        if self.model.is_alias(symbol):
            symbol = self.model.resolve_alias(symbol)
        if symbol in self.session.visited:
            return

        declarations = self.model.get_declarations(symbol)
        if not declarations:
            raise DeclarationError(
                f"Symbol '{symbol.qualname}' has no declarations",
                details={"symbol": symbol.qualname},
            )
        _log.debug("requestVisit %s", symbol.name, extra={"symbol": symbol.qualname})
        self.session.visited.add(symbol)
        # Overloads and other extra declarations are not documented
        self.session.queue.append(declarations[0])

    def request_visit_type(self, type: TypeRef) -> None:
        """Visit the symbol behind ``type``, or walk into its type arguments."""
        symbol = self.model.get_originating_symbol(type) or self.model.get_alias_symbol(type)
        if symbol is not None:
            self.request_visit(symbol)
            return
        for arg in self.model.get_type_arguments(type):
            self.request_visit_type(arg)

    def _fold(self, extraction: Extraction) -> None:
        self.session.output.extend(extraction.entries)
        for type in extraction.types:
            self.request_visit_type(type)
