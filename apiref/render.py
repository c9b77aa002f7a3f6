"""
HTML rendering.

Lays out a list of ``DocEntry`` records as one static page: a side panel
with the sorted index and one detail block per entry. Signatures are
syntax highlighted with Pygments using the shared ``hl-*`` class names.
"""

from __future__ import annotations

from collections.abc import Iterable

from pygments import highlight as _pygments_highlight
from pygments import token as _T
from pygments.formatters import HtmlFormatter as _PygFormatter
from pygments.lexers import PythonLexer as _PyLexer

from ._logging import scoped_logger
from .config import config
from .entry import DocEntry
from .markup import markup_docstr

__all__ = [
    "sort_entries",
    "to_tag_name",
    "to_html_index",
    "html_entry",
    "to_html",
    "html_body",
]

_log = scoped_logger("render")


# =============================================================================
# Syntax Highlighting
# =============================================================================

_HL_MAP = {
    _T.Comment:             "hl-comment",
    _T.Keyword.Constant:    "hl-keyword-constant",
    _T.Keyword:             "hl-keyword",
    _T.Literal.String:      "hl-string",
    _T.Literal.Number:      "hl-number",
    _T.Name.Builtin:        "hl-builtin-name",
    _T.Operator:            "hl-operator",
    _T.Punctuation:         "hl-punctuation",
    _T.Name:                "hl-type-name",
    _T.Text:                "",
    _T.Other:               "",
}


def _hl_class(ttype):
    """Map a Pygments token to a hl-* class name."""
    while ttype:
        if ttype in _HL_MAP:
            return _HL_MAP[ttype]
        ttype = ttype.parent
    return ""


class _SignatureFormatter(_PygFormatter):
    """HtmlFormatter emitting hl-* classes without the wrapping <div><pre>."""

    def _get_css_class(self, ttype):
        return _hl_class(ttype)


_PY_LEXER = _PyLexer()
_SIG_FMT = _SignatureFormatter(nowrap=True)


def _highlight_typestr(typestr: str) -> str:
    """Syntax-highlight a signature or type string as inline HTML."""
    return _pygments_highlight(typestr, _PY_LEXER, _SIG_FMT).rstrip("\n")


def _html_escape(text: str) -> str:
    """Escape HTML special characters (< and & only; > is safe in content)."""
    return text.replace("&", "&amp;").replace("<", "&lt;")


# =============================================================================
# Layout
# =============================================================================


def _starts_with_upper(name: str) -> bool:
    return name[:1].lower() != name[:1]


def sort_entries(entries: Iterable[DocEntry]) -> list[DocEntry]:
    """Order entries with lowercase names first, then by name.

    Functions and instances come before classes; within each group names
    are compared lexicographically. The sort is stable and independent of
    discovery order.
    """
    return sorted(entries, key=lambda e: (_starts_with_upper(e.name), e.name))


def to_tag_name(name: str) -> str:
    """Anchor id for an entry name (``Tensor.add`` -> ``Tensor_add``)."""
    return name.replace(".", "_").replace("$", "_")


def to_html_index(entries: Iterable[DocEntry]) -> str:
    """Index list linking to each entry, in the given order."""
    out = '<ol class="docindex">\n'
    for entry in entries:
        tag = to_tag_name(entry.name)
        out += f'<li><a href="#{tag}" class="name {entry.kind}">{entry.name}</a></li>\n'
    out += "</ol>\n"
    return out


def html_entry(entry: DocEntry, print_args: bool | None = None) -> str:
    """Detail block body for one entry.

    Args:
        entry: Entry to render.
        print_args: Include the Arguments and Returns block. Defaults to
            ``config.print_args``.
    """
    if print_args is None:
        print_args = config.print_args

    out = f'<h2 class="name">{entry.name}'
    if entry.source_url:
        out += f' <a class="source-link" href="{entry.source_url}">source</a>'
    out += "</h2>\n"

    if entry.typestr:
        out += f'<div class="typestr">{_highlight_typestr(entry.typestr)}</div>\n'

    if entry.docstr:
        out += markup_docstr(entry.docstr)

    if print_args and entry.args:
        out += "<p><span class='arg-title'>Arguments</span> <ol class=\"args\">\n"
        for arg in entry.args:
            out += "<li>\n"
            out += f'<span class="name">{arg.name}</span>\n'
            out += f'<span class="typestr">{_html_escape(arg.typestr or "")}</span>\n'
            if arg.docstr:
                out += f'<span class="docstr">{arg.docstr}</span>\n'
            out += "</li>\n"
        out += "</ol>\n"
    if print_args and entry.ret_type:
        out += "<p><span class='arg-title'>Returns</span> "
        out += f'<span class="retType">{_html_escape(entry.ret_type)}</span>\n'
    return out


def to_html(
    entries: Iterable[DocEntry],
    title: str | None = None,
    print_args: bool | None = None,
) -> str:
    """Render entries as a complete HTML page.

    Args:
        entries: Entries in any order; they are sorted with ``sort_entries``.
        title: Panel heading and page title. Defaults to ``config.title``.
        print_args: Passed to ``html_entry``.
    """
    if title is None:
        title = config.title
    docs = sort_entries(entries)
    _log.info("rendering %d entries", len(docs))

    out = '<div class="panel">\n'
    out += f"<h1>{_html_escape(title)}</h1>\n"
    out += to_html_index(docs)
    out += "</div>\n"

    out += '<div class="doc-entries">\n'
    for entry in docs:
        out += f'<div id={to_tag_name(entry.name)} class="doc-entry">\n'
        out += html_entry(entry, print_args=print_args)
        out += "</div>\n"
    out += "</div>\n"
    return html_body(out, title=title)


def _analytics_snippet(tag_id: str) -> str:
    return f"""
<!-- Global site tag (gtag.js) -->
<script async
  src="https://www.googletagmanager.com/gtag/js?id={tag_id}"></script>
<script>
  window.dataLayer = window.dataLayer || [];
  function gtag(){{dataLayer.push(arguments);}}
  gtag('js', new Date());
  gtag('config', '{tag_id}');
</script>"""


def html_body(inner: str, title: str | None = None) -> str:
    """Wrap rendered content in the page shell.

    The stylesheet links come from ``config.stylesheets``; the analytics
    snippet is only included when ``config.analytics_id`` is set.
    """
    if title is None:
        title = config.title
    links = "\n".join(f'  <link rel="stylesheet" href="{href}"/>' for href in config.stylesheets)
    analytics = _analytics_snippet(config.analytics_id) if config.analytics_id else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{_html_escape(title)}</title>
  <meta id="viewport" name="viewport" content="width=device-width,
    minimum-scale=1.0, maximum-scale=1.0, user-scalable=no"/>
{links}
  <link rel="icon" type="image/png" href="favicon.png">
  <script src="notebook.js"></script>
</head>
  <body>{inner}{analytics}
  </body>
</html>
"""
