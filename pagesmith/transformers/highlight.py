# pagesmith/transformers/highlight.py
"""
Transformer that syntax-highlights code with Pygments.

Tags:
    <pre-hl lang="rs">...</pre-hl>     → <pre style="...">highlighted spans</pre>
    <code-hl lang="py">...</code-hl>   → <code style="...">highlighted spans</code>

The body is de-indented first, so code can be indented along with the
surrounding markup. ``lang`` is a file extension and picks the lexer.
Styles are inlined; the theme's background colour is merged into the style
attribute of the produced element.
"""

from pathlib import Path
from typing import List

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..exceptions import (
    InvalidEngineOutputError,
    MalformedAttributesError,
    MissingAttributeError,
    MissingBodyError,
    UnknownLanguageError,
    UnknownThemeError,
)
from ..markup import parse
from ..nodes import Attrs, Element, Node, Text, get_attr
from ..walker import Context, Transformer

BLOCK_TAG = "pre-hl"
INLINE_TAG = "code-hl"

_RETAG = {BLOCK_TAG: "pre", INLINE_TAG: "code"}

DEFAULT_THEME = "monokai"


def deindent(source: str) -> str:
    """
    Strip the indentation of the first line from every line.

    A single leading newline is dropped and trailing whitespace trimmed
    before the indentation is measured.
    """
    if source.startswith("\n"):
        source = source[1:]
    source = source.rstrip()
    n_spaces = len(source) - len(source.lstrip(" "))
    prefix = " " * n_spaces
    return "\n".join(
        line[n_spaces:] if line.startswith(prefix) else line
        for line in source.split("\n")
    )


def _with_background(attrs: Attrs, color: str) -> Attrs:
    """Add ``background: color;`` to the first style attribute, or add one."""
    declaration = f"background: {color};"
    for index, (key, value) in enumerate(attrs):
        if key == "style":
            value = value.rstrip()
            if value and not value.endswith(";"):
                value += ";"
            merged = f"{value} {declaration}" if value else declaration
            return attrs[:index] + [("style", merged)] + attrs[index + 1:]
    return attrs + [("style", declaration)]


class PreHtmlFormatter(HtmlFormatter):
    """HtmlFormatter whose output root is the <pre> element itself."""

    def _wrap_div(self, inner):
        yield from inner


class SyntaxHighlighter(Transformer):
    def __init__(self, theme: str = DEFAULT_THEME):
        self.theme = theme

    def describe(self) -> str:
        return f"SyntaxHighlighter({self.theme})"

    def matches(self, tag_name: str, attrs: Attrs, ctx: Context) -> bool:
        return tag_name in _RETAG

    def _style(self):
        try:
            return get_style_by_name(self.theme)
        except ClassNotFound:
            raise UnknownThemeError(self.theme) from None

    def replace(
        self, tag_name: str, attrs: Attrs, children: List[Node], ctx: Context
    ) -> List[Node]:
        if len(children) != 1 or not isinstance(children[0], Text):
            raise MissingBodyError(f"{tag_name} must contain only text children")
        code_text = deindent(children[0].text)

        lang = get_attr(attrs, "lang")
        if lang is None:
            raise MissingAttributeError("lang", "Missing lang= attribute")
        if not lang.strip():
            raise MalformedAttributesError("lang", "language must not be empty")

        style = self._style()

        try:
            lexer = get_lexer_for_filename(f"snippet.{lang}")
        except ClassNotFound:
            raise UnknownLanguageError(lang) from None

        formatter = PreHtmlFormatter(style=style, noclasses=True)
        html_str = highlight(code_text, lexer, formatter)

        generated = [
            n for n in parse(html_str, Path("<generated-pygments>"))
            if not (isinstance(n, Text) and not n.text.strip())
        ]
        if len(generated) != 1:
            raise InvalidEngineOutputError("pygments", html_str)
        root = generated[0]
        if not isinstance(root, Element) or root.name != "pre":
            raise InvalidEngineOutputError("pygments", html_str)

        new_attrs = list(root.attrs)
        if style.background_color:
            new_attrs = _with_background(new_attrs, style.background_color)

        return [Element(_RETAG[tag_name], new_attrs, root.children)]
