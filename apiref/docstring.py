"""
Docstring section parsing.

Splits NumPy- and Google-style docstrings into a description and named
sections, and extracts per-parameter descriptions from the ``Args`` /
``Parameters`` section so each ``ArgEntry`` can carry its own text while
the entry itself shows the rest of the docstring.
"""

from __future__ import annotations

import re

__all__ = ["parse_docstring", "parameter_docs", "documentation_text"]

# Section header classification
_KIND_MAP = {
    "Args": "args",
    "Arguments": "args",
    "Parameters": "args",
    "Params": "args",
    "Attributes": "attributes",
    "Returns": "returns",
    "Return": "returns",
    "Yields": "returns",
    "Raises": "raises",
    "Example": "example",
    "Examples": "example",
    "Note": "note",
    "Notes": "note",
}

_HEADER_RE = re.compile(r"[A-Z][A-Za-z0-9 \-()]+")
_UNDERLINE_RE = re.compile(r"-{3,}")
_BARE_NAME_RE = re.compile(r"\*{0,2}\w+(?:\s*\([^)]*\))?$")


def _dedent_lines(lines: list[str]) -> str:
    """Remove common leading whitespace from lines, then strip outer blank lines."""
    non_empty = [line for line in lines if line.strip()]
    if not non_empty:
        return ""
    min_indent = min(len(line) - len(line.lstrip()) for line in non_empty)
    return "\n".join(line[min_indent:] for line in lines).strip()


def _classify(header: str) -> str:
    if header in _KIND_MAP:
        return _KIND_MAP[header]
    return "custom"


def parse_docstring(doc: str | None) -> dict:
    """Parse NumPy/Google-style docstring into structured sections.

    Returns dict with:
        description: Text before the first section header.
        args: Dict mapping parameter names to {"type": str, "desc": str}.
        sections: Ordered list of {"name", "kind", "content"} dicts.
    """
    if not doc:
        return {"description": "", "args": {}, "sections": []}

    lines = doc.strip().split("\n")
    raw_sections: list[tuple[str, str, list[str]]] = []
    current_name = ""
    current_kind = "description"
    current_lines: list[str] = []
    pending_numpy: str | None = None
    pending_line = ""

    def _flush() -> None:
        raw_sections.append((current_name, current_kind, current_lines))

    for line in lines:
        stripped = line.strip()

        # NumPy-style underline confirms pending header
        if pending_numpy is not None and _UNDERLINE_RE.fullmatch(stripped):
            _flush()
            current_name, current_kind = pending_numpy, _classify(pending_numpy)
            current_lines = []
            pending_numpy = None
            continue
        elif pending_numpy is not None:
            current_lines.append(pending_line)
            pending_numpy = None

        # Google-style header: "Args:"
        if stripped.endswith(":") and not stripped.startswith(">>>"):
            bare = stripped[:-1]
            if bare in _KIND_MAP and len(line) - len(line.lstrip()) <= 8:
                _flush()
                current_name, current_kind = bare, _KIND_MAP[bare]
                current_lines = []
                continue

        # Bare word that could be a NumPy header, wait for underline
        if (
            current_kind != "example"
            and _HEADER_RE.fullmatch(stripped)
            and len(stripped.split()) <= 6
        ):
            pending_numpy, pending_line = stripped, line
            continue

        current_lines.append(line)

    if pending_numpy is not None:
        current_lines.append(pending_line)
    _flush()

    description = ""
    args: dict[str, dict] = {}
    sections: list[dict] = []

    for name, kind, sec_lines in raw_sections:
        if kind == "description":
            description = _dedent_lines(sec_lines)
            continue
        sections.append({"name": name, "kind": kind, "content": _dedent_lines(sec_lines)})
        if kind == "args" and not args:
            args = _parse_entries(sec_lines)

    return {"description": description, "args": args, "sections": sections}


def _parse_entries(lines: list[str]) -> dict[str, dict]:
    """Parse key:value entries from an Args/Parameters section.

    Handles three formats:
    - NumPy typed: ``param : type`` on key line, description on indented continuation
    - Google-style: ``param: description`` (no space before colon)
    - NumPy bare: ``param`` alone, description indented on next lines
    """
    entries: dict[str, dict] = {}
    current_key: str | None = None
    current_type = ""
    current_head = ""
    current_desc_lines: list[str] = []
    entry_indent: int | None = None
    # None = bare-name, True = NumPy typed (" : "), False = Google (":")
    typed_format: bool | None = None

    def _flush() -> None:
        nonlocal current_key, current_type, current_head, current_desc_lines
        if current_key:
            rest = _dedent_lines(current_desc_lines)
            desc = "\n".join(part for part in (current_head, rest) if part)
            entries[current_key] = {"type": current_type, "desc": desc}
        current_key = None
        current_type = ""
        current_head = ""
        current_desc_lines = []

    for line in lines:
        stripped = line.strip()
        if not stripped:
            if current_key and current_desc_lines:
                current_desc_lines.append("")
            continue
        indent = len(line) - len(line.lstrip())
        listish = stripped.startswith((">>>", "-", "*"))

        is_new_entry = False
        if entry_indent is None:
            if " : " in stripped and not listish:
                entry_indent, typed_format, is_new_entry = indent, True, True
            elif ":" in stripped and not listish:
                entry_indent, typed_format, is_new_entry = indent, False, True
            elif _BARE_NAME_RE.match(stripped):
                entry_indent, typed_format, is_new_entry = indent, None, True
        elif indent <= entry_indent:
            if typed_format is True:
                is_new_entry = (" : " in stripped or bool(_BARE_NAME_RE.match(stripped))) and not listish
            elif typed_format is False:
                is_new_entry = ":" in stripped and not listish
            else:
                is_new_entry = bool(_BARE_NAME_RE.match(stripped))

        if is_new_entry:
            _flush()
            if typed_format is True and " : " in stripped:
                key_part, _, type_part = stripped.partition(" : ")
                current_key = key_part.strip().lstrip("*")
                current_type = type_part.strip()
            elif typed_format is False and ":" in stripped:
                key_part, _, desc_part = stripped.partition(":")
                # "name (type): desc"
                current_key = re.sub(r"\s*\(.*\)$", "", key_part.strip()).lstrip("*")
                current_head = desc_part.strip()
            else:
                m = re.match(r"\*{0,2}(\w+)", stripped)
                current_key = m.group(1) if m else stripped
        elif current_key:
            current_desc_lines.append(line)

    _flush()
    return entries


def parameter_docs(doc: str | None) -> dict[str, str]:
    """Map each documented parameter name to its description text."""
    return {
        name: entry["desc"]
        for name, entry in parse_docstring(doc)["args"].items()
        if entry["desc"]
    }


def documentation_text(doc: str | None) -> str:
    """Docstring text shown for an entry, without its parameter section.

    Parameter descriptions are carried by each ``ArgEntry`` instead. Example
    sections stay indented so they render as code blocks; every other
    section is flattened to plain paragraph lines.
    """
    parsed = parse_docstring(doc)
    parts = [parsed["description"]] if parsed["description"] else []
    for section in parsed["sections"]:
        if section["kind"] == "args":
            continue
        lines = section["content"].split("\n")
        if section["kind"] == "example":
            body = "\n".join(f"  {line}" if line.strip() else "" for line in lines)
        else:
            body = "\n".join(line.strip() for line in lines)
        parts.append(f"{section['name']}:\n{body}")
    return "\n\n".join(parts)
