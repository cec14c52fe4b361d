# pagesmith/transformers/katex.py
"""
Transformer that typesets TeX with KaTeX at build time.

Tags:
    <katex-prelude/>     → stylesheet <link> for the KaTeX CSS on jsDelivr
    <katex>...</katex>   → display-mode math
    <$>...</$>           → inline math

The rendered HTML is inserted as raw markup and is never walked again.
"""

import re
from typing import Callable, List, Optional

from markdown_katex.html import KATEX_STYLES
from markdown_katex.wrapper import tex2html

from ..exceptions import MissingBodyError, RenderError
from ..nodes import Attrs, Element, Node, RawMarkup, Text
from ..walker import Context, Transformer

KATEX_CSS_URL = "https://cdn.jsdelivr.net/npm/katex@{version}/dist/katex.min.css"

# KaTeX release shipped in the markdown-katex wheel as of v202406.1035
_BUNDLED_FALLBACK = "0.15.1"
_STYLESHEET_VERSION_RE = re.compile(r"katex@([0-9][0-9A-Za-z.\-]*)/")


def bundled_katex_version() -> str:
    """Version of the KaTeX binary that markdown-katex runs, read from its stylesheet link."""
    match = _STYLESHEET_VERSION_RE.search(KATEX_STYLES)
    return match.group(1) if match else _BUNDLED_FALLBACK


KATEX_VERSION = bundled_katex_version()

PRELUDE_TAG = "katex-prelude"
DISPLAY_TAG = "katex"
INLINE_TAG = "$"

KATEX_TAGS = frozenset({PRELUDE_TAG, DISPLAY_TAG, INLINE_TAG})

# (tex, options) -> html
MathEngine = Callable[[str, dict], str]


def render_katex(tex: str, options: dict) -> str:
    """
    Render TeX through the KaTeX command line bundled with markdown-katex.

    Option keys are passed to the KaTeX CLI as ``--<key>`` flags; a True value
    is a bare flag, False drops the flag.
    """
    return tex2html(tex, dict(options))


class KatexRenderer(Transformer):
    def __init__(
        self,
        render: Optional[MathEngine] = None,
        version: str = KATEX_VERSION,
        trust: bool = True,
    ):
        self.render = render or render_katex
        self.version = version
        self.trust = trust

    def describe(self) -> str:
        return f"KatexRenderer({self.version})"

    def matches(self, tag_name: str, attrs: Attrs, ctx: Context) -> bool:
        return tag_name in KATEX_TAGS

    def prelude(self) -> Element:
        return Element(
            "link",
            [
                ("rel", "stylesheet"),
                ("href", KATEX_CSS_URL.format(version=self.version)),
            ],
            [],
        )

    def replace(
        self, tag_name: str, attrs: Attrs, children: List[Node], ctx: Context
    ) -> List[Node]:
        if tag_name == PRELUDE_TAG:
            return [self.prelude()]

        if len(children) != 1 or not isinstance(children[0], Text):
            raise MissingBodyError("Katex: malformed body")
        tex = children[0].text

        options = {
            "format": "html",
            "trust": self.trust,
            "display-mode": tag_name == DISPLAY_TAG,
        }
        try:
            rendered = self.render(tex, options)
        except Exception as exc:
            raise RenderError("katex", exc) from exc
        return [RawMarkup(rendered)]
