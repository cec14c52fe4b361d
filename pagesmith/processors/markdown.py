# pagesmith/processors/markdown.py
"""
Processor for Markdown sources.

The Markdown is converted to HTML5 with pypandoc first; the result then goes
through the same walk as an HTML page, so ``[About](@about)`` links and raw
``<katex>`` / ``<pre-hl>`` blocks work in Markdown too.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

import pypandoc

from ..exceptions import RenderError
from ..resources import Resource, ResourceRegistry
from ..walker import Transformer
from .html import HTMLProcessor

logger = logging.getLogger(__name__)


def get_pandoc_config(extra_args: Optional[List[str]] = None):
    """
    Configuration for pypandoc/Pandoc markdown rendering.

    Math is left alone by Pandoc (``tex_math_dollars`` is disabled) and typeset
    later by the KaTeX transformer through raw <katex> and <$> tags.
    Highlighting is done by the <pre-hl> transformer, not by Pandoc.
    """
    return {
        "format": "markdown",
        "to": "html5",
        "extra_args": [
            # Enable Pandoc markdown extensions
            "--from=markdown+autolink_bare_uris+strikeout+superscript+subscript+task_lists+smart+pipe_tables+definition_lists+footnotes+fenced_code_attributes+raw_html+header_attributes-tex_math_dollars",
            "--no-highlight",
            *(extra_args or []),
        ],
    }


class MarkdownProcessor(HTMLProcessor):
    def __init__(
        self,
        transformers: Sequence[Transformer],
        trim: bool = False,
        data: Optional[Any] = None,
        extra_args: Optional[List[str]] = None,
    ):
        super().__init__(transformers, trim=trim, data=data)
        self.extra_args = list(extra_args or [])

    def to_html(self, text: str) -> str:
        pandoc_config = get_pandoc_config(self.extra_args)
        try:
            return pypandoc.convert_text(
                text,
                to=pandoc_config["to"],
                format=pandoc_config["format"],
                extra_args=pandoc_config["extra_args"],
            )
        except (RuntimeError, OSError) as exc:
            raise RenderError("pandoc", exc) from exc

    def process_resource(
        self,
        source: Resource,
        source_path: Path,
        registry: ResourceRegistry,
    ) -> bytes:
        logger.debug("Converting markdown %s", source.identifier())
        text = self.load_text(source_path, registry)
        html = self.to_html(text)
        return self.render(html, source, source_path, registry).encode("utf-8")
