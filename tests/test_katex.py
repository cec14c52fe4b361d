"""Tests for the KaTeX math transformer."""

from pathlib import Path
from unittest.mock import patch

import markdown_katex
import pytest
from markdown_katex.html import KATEX_STYLES

from pagesmith.exceptions import MissingBodyError, RenderError
from pagesmith.markup import parse, serialize
from pagesmith.nodes import Element, RawMarkup, Text
from pagesmith.transformers import KatexRenderer
from pagesmith.transformers.katex import KATEX_VERSION, bundled_katex_version, render_katex
from pagesmith.walker import walk


@pytest.fixture
def renderer(fake_katex):
    return KatexRenderer(render=fake_katex)


class TestMatches:
    @pytest.mark.parametrize("tag", ["katex-prelude", "katex", "$"])
    def test_reserved_tags(self, renderer, ctx, tag):
        assert renderer.matches(tag, [], ctx)

    def test_other_tags(self, renderer, ctx):
        assert not renderer.matches("$name", [], ctx)
        assert not renderer.matches("math", [], ctx)


class TestPrelude:
    def test_stylesheet_link(self, renderer, ctx):
        [link] = renderer.replace("katex-prelude", [("ignored", "x")], [Text("y")], ctx)
        assert link == Element(
            "link",
            [
                ("rel", "stylesheet"),
                ("href", f"https://cdn.jsdelivr.net/npm/katex@{KATEX_VERSION}/dist/katex.min.css"),
            ],
            [],
        )

    def test_default_version_matches_bundled_engine(self):
        bin_dir = Path(markdown_katex.__file__).parent / "bin"
        assert list(bin_dir.glob(f"katex_v{KATEX_VERSION}_*"))
        assert f"katex@{KATEX_VERSION}/" in KATEX_STYLES

    def test_version_read_from_engine_stylesheet(self):
        styles = '<link href="https://cdn.jsdelivr.net/npm/katex@0.99.2/dist/katex.min.css">'
        with patch("pagesmith.transformers.katex.KATEX_STYLES", styles):
            assert bundled_katex_version() == "0.99.2"

    def test_version_is_configurable(self, fake_katex, ctx):
        [link] = KatexRenderer(render=fake_katex, version="0.15.0").replace(
            "katex-prelude", [], [], ctx
        )
        assert "katex@0.15.0/" in dict(link.attrs)["href"]


class TestRender:
    def test_display_math(self, renderer, fake_katex, ctx):
        result = renderer.replace("katex", [], [Text(r"\frac{a}{b}")], ctx)
        assert result == [RawMarkup(r'<span class="katex-display">\frac{a}{b}</span>')]
        assert fake_katex.calls == [
            (r"\frac{a}{b}", {"format": "html", "trust": True, "display-mode": True})
        ]

    def test_inline_math(self, renderer, fake_katex, ctx):
        renderer.replace("$", [], [Text("x^2")], ctx)
        assert fake_katex.calls[0][1]["display-mode"] is False

    def test_trust_can_be_disabled(self, fake_katex, ctx):
        KatexRenderer(render=fake_katex, trust=False).replace("$", [], [Text("x")], ctx)
        assert fake_katex.calls[0][1]["trust"] is False

    def test_empty_body_is_malformed(self, renderer, ctx):
        with pytest.raises(MissingBodyError, match="malformed body"):
            renderer.replace("katex", [], [], ctx)

    def test_element_body_is_malformed(self, renderer, ctx):
        with pytest.raises(MissingBodyError):
            renderer.replace("$", [], [Element("b", [], [Text("x")])], ctx)

    def test_engine_failure_is_wrapped(self, ctx):
        def broken(tex, options):
            raise ValueError("ParseError: KaTeX parse error")

        with pytest.raises(RenderError) as exc_info:
            KatexRenderer(render=broken).replace("katex", [], [Text(r"\frac")], ctx)
        assert exc_info.value.engine == "katex"
        assert isinstance(exc_info.value.cause, ValueError)

    def test_rendered_markup_is_spliced_verbatim(self, renderer, ctx):
        nodes = parse("<head><katex-prelude/></head><p>Area: <$>a+b</$></p>")
        walk(nodes, [renderer], ctx)
        html = serialize(nodes)
        assert html.startswith('<head><link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/katex@')
        assert "katex.min.css\"></head>" in html


class TestDefaultEngine:
    def test_options_are_passed_to_tex2html(self):
        with patch("pagesmith.transformers.katex.tex2html", return_value="<span>k</span>") as tex2html:
            out = render_katex("x", {"format": "html", "display-mode": True})
        assert out == "<span>k</span>"
        tex2html.assert_called_once_with("x", {"format": "html", "display-mode": True})

    def test_default_engine_used(self, ctx):
        with patch("pagesmith.transformers.katex.tex2html", return_value="<span>k</span>"):
            result = KatexRenderer().replace("$", [], [Text("x")], ctx)
        assert result == [RawMarkup("<span>k</span>")]
