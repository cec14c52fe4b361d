"""Tests for the Pygments syntax highlighting transformer."""

from unittest.mock import patch

import pytest
from pygments.styles import get_style_by_name

from pagesmith.exceptions import (
    InvalidEngineOutputError,
    MalformedAttributesError,
    MissingAttributeError,
    MissingBodyError,
    UnknownLanguageError,
    UnknownThemeError,
)
from pagesmith.markup import parse, serialize
from pagesmith.nodes import Element, Text
from pagesmith.transformers import SyntaxHighlighter, deindent
from pagesmith.transformers.highlight import _with_background
from pagesmith.walker import walk


def text_of(nodes):
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.text)
        elif isinstance(node, Element):
            parts.append(text_of(node.children))
    return "".join(parts)


@pytest.fixture
def highlighter():
    return SyntaxHighlighter("monokai")


class TestDeindent:
    def test_strips_common_indentation(self):
        assert deindent("\n    line1\n    line2\n") == "line1\nline2"

    def test_keeps_relative_indentation(self):
        assert deindent("\n    if x:\n        y()\n  ") == "if x:\n    y()"

    def test_only_one_leading_newline_dropped(self):
        assert deindent("\n\n  a") == "\n  a"

    def test_less_indented_line_kept(self):
        assert deindent("    a\n  b") == "a\n  b"

    def test_unindented(self):
        assert deindent("a\nb") == "a\nb"


class TestHighlight:
    def test_block(self, highlighter, ctx):
        [el] = highlighter.replace(
            "pre-hl", [("lang", "rs")], [Text("\n    fn main() {}\n  ")], ctx
        )
        assert el.name == "pre"
        assert text_of(el.children).strip() == "fn main() {}"
        assert any(isinstance(c, Element) and c.name == "span" for c in el.children)

    def test_background_style_added(self, highlighter, ctx):
        [el] = highlighter.replace("pre-hl", [("lang", "py")], [Text("x = 1")], ctx)
        background = get_style_by_name("monokai").background_color
        styles = [v for k, v in el.attrs if k == "style"]
        assert len(styles) == 1
        assert "line-height" in styles[0]
        assert styles[0].endswith(f"background: {background};")

    def test_background_merged_into_existing_style(self):
        attrs = [("class", "x"), ("style", "line-height: 125%")]
        assert _with_background(attrs, "#fff") == [
            ("class", "x"),
            ("style", "line-height: 125%; background: #fff;"),
        ]

    def test_background_style_created_when_absent(self):
        assert _with_background([("class", "x")], "#fff") == [
            ("class", "x"),
            ("style", "background: #fff;"),
        ]

    def test_inline_becomes_code(self, highlighter, ctx):
        [el] = highlighter.replace("code-hl", [("lang", "py")], [Text("print(1)")], ctx)
        assert el.name == "code"
        assert text_of(el.children).strip() == "print(1)"

    def test_styles_are_inlined(self, highlighter, ctx):
        [el] = highlighter.replace("pre-hl", [("lang", "py")], [Text("def f(): pass")], ctx)
        assert 'style="' in serialize(el.children)
        assert 'class="' not in serialize(el.children)

    def test_in_document(self, highlighter, ctx):
        nodes = parse('<div><pre-hl lang="py">\n    import os\n</pre-hl></div>')
        walk(nodes, [highlighter], ctx)
        [pre] = nodes[0].children
        assert pre.name == "pre"
        assert text_of([pre]).strip() == "import os"


class TestErrors:
    def test_missing_lang(self, highlighter, ctx):
        with pytest.raises(MissingAttributeError, match="Missing lang= attribute"):
            highlighter.replace("pre-hl", [], [Text("x")], ctx)

    def test_empty_lang(self, highlighter, ctx):
        with pytest.raises(MalformedAttributesError):
            highlighter.replace("pre-hl", [("lang", " ")], [Text("x")], ctx)

    def test_unknown_language(self, highlighter, ctx):
        with pytest.raises(UnknownLanguageError) as exc_info:
            highlighter.replace("pre-hl", [("lang", "nosuchlangxyz")], [Text("x")], ctx)
        assert exc_info.value.lang == "nosuchlangxyz"

    def test_unknown_theme(self, ctx):
        with pytest.raises(UnknownThemeError, match="No such theme nope"):
            SyntaxHighlighter("nope").replace("pre-hl", [("lang", "py")], [Text("x")], ctx)

    def test_element_children_rejected(self, highlighter, ctx):
        with pytest.raises(MissingBodyError, match="only text children"):
            highlighter.replace(
                "pre-hl", [("lang", "py")], [Element("b", [], [Text("x")])], ctx
            )

    def test_empty_body_rejected(self, highlighter, ctx):
        with pytest.raises(MissingBodyError):
            highlighter.replace("code-hl", [("lang", "py")], [], ctx)

    def test_unexpected_engine_output(self, highlighter, ctx):
        with patch("pagesmith.transformers.highlight.highlight", return_value="<div>x</div>"):
            with pytest.raises(InvalidEngineOutputError) as exc_info:
                highlighter.replace("pre-hl", [("lang", "py")], [Text("x")], ctx)
        assert exc_info.value.engine == "pygments"

    def test_multiple_roots_rejected(self, highlighter, ctx):
        with patch(
            "pagesmith.transformers.highlight.highlight",
            return_value="<pre>a</pre><pre>b</pre>",
        ):
            with pytest.raises(InvalidEngineOutputError):
                highlighter.replace("pre-hl", [("lang", "py")], [Text("x")], ctx)
