"""
Documentation records.

A ``DocEntry`` is the normalized record produced for every documentable
declaration. The list of entries is the only thing the renderer consumes,
and it can be dumped as JSON for inspection.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Literal

__all__ = ["ArgEntry", "DocEntry", "EntryKind", "entries_to_json"]

EntryKind = Literal["class", "method", "property"]


@dataclass(frozen=True, slots=True)
class ArgEntry:
    """One parameter of a method entry."""

    name: str
    typestr: str | None = None
    docstr: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in (("name", self.name), ("typestr", self.typestr), ("docstr", self.docstr))
            if value is not None
        }


@dataclass(slots=True)
class DocEntry:
    """
    Documentation record for one class, method or property.

    Attributes
    ----------
        kind: ``"class"``, ``"method"`` or ``"property"``.
        name: Display name. Class members are qualified as ``Class.member``;
            constructors are named ``Class.constructor``.
        typestr: Signature or type string.
        docstr: Raw documentation text without the parameter section;
            the renderer applies ``markup_docstr``.
        args: Parameters in declaration order (methods only).
        ret_type: Display string of the return type (methods only).
        source_url: Permanent link to the declaration's source.
    """

    kind: EntryKind
    name: str
    typestr: str | None = None
    docstr: str | None = None
    args: list[ArgEntry] | None = field(default=None)
    ret_type: str | None = None
    source_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serializable form with the ``retType``/``sourceUrl`` key spelling."""
        data: dict[str, Any] = {"kind": self.kind, "name": self.name}
        if self.typestr is not None:
            data["typestr"] = self.typestr
        if self.docstr is not None:
            data["docstr"] = self.docstr
        if self.args is not None:
            data["args"] = [arg.to_dict() for arg in self.args]
        if self.ret_type is not None:
            data["retType"] = self.ret_type
        if self.source_url is not None:
            data["sourceUrl"] = self.source_url
        return data


def entries_to_json(entries: Iterable[DocEntry], indent: int | None = 2) -> str:
    """Serialize entries, in the given order, to a JSON array."""
    return json.dumps([entry.to_dict() for entry in entries], indent=indent)
