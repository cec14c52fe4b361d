# pagesmith/transformers/__init__.py

from .highlight import SyntaxHighlighter, deindent
from .katex import KatexRenderer
from .links import LinkResolver, relative_link
from .variables import VariableReplacer


def default_transformers(config):
    """
    Build the stock transformer list from a SiteConfig.

    Order matters - the first transformer that matches an element wins.
    KaTeX comes before variables since the inline math tag ``$`` also
    starts with the variable sigil.
    """
    return [
        KatexRenderer(version=config.math.katex_version, trust=config.math.trust),
        SyntaxHighlighter(theme=config.highlight.theme),
        VariableReplacer(config.variables),
        LinkResolver(),
    ]


__all__ = [
    "KatexRenderer",
    "LinkResolver",
    "SyntaxHighlighter",
    "VariableReplacer",
    "default_transformers",
    "deindent",
    "relative_link",
]
