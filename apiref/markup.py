"""
Docstring markup.

Indented runs inside a docstring are examples. ``markup_docstr`` lifts them
out of the surrounding paragraph into ``<script type=notebook>`` blocks so
the page can turn them into runnable cells.
"""

from __future__ import annotations

import re
from functools import reduce
from typing import Literal

__all__ = ["markup_docstr"]

State = Literal["normal", "code"]

_INDENTED_RE = re.compile(r"^  +[^\s]")

CODE_OPEN = "</p><script type=notebook>"
CODE_CLOSE = "</script><p>"


def _is_indented(line: str) -> bool:
    return _INDENTED_RE.match(line) is not None


def _unindent(line: str) -> str:
    return line[2:] if line.startswith("  ") else line


def _step(acc: tuple[State, tuple[str, ...]], line: str) -> tuple[State, tuple[str, ...]]:
    state, emitted = acc
    indented = _is_indented(line)
    if state == "normal":
        if indented:
            return "code", (*emitted, CODE_OPEN, _unindent(line))
        return "normal", (*emitted, line)
    if indented:
        return "code", (*emitted, _unindent(line))
    return "normal", (*emitted, CODE_CLOSE, line)


def markup_docstr(docstr: str) -> str:
    """Wrap a docstring in a paragraph, turning indented runs into code blocks.

    Lines indented by two or more spaces open a block; each line in the
    block loses one two-space level of indentation. The first unindented
    line closes it again, and a block still open at the end is closed.

    Args:
        docstr: Raw documentation text.

    Returns:
        HTML fragment, ``<p class='docstr'>...</p>``.

    Example:
        >>> markup_docstr("Adds.\\n\\n  add(1, 2)")
        "<p class='docstr'>Adds.\\n\\n</p><script type=notebook>\\nadd(1, 2)\\n</script>"
    """
    state, emitted = reduce(_step, docstr.split("\n"), ("normal", ()))
    if state == "code":
        emitted = (*emitted, CODE_CLOSE)
    html = "<p class='docstr'>" + "\n".join(emitted) + "</p>"
    return html.replace("<p></p>", "", 1)
