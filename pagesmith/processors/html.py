# pagesmith/processors/html.py
"""
Processor that runs the transformer walk over an HTML document.

Pipeline for one resource:
    load text → parse → walk(transformers) → optional trim → serialize
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..exceptions import MarkupParseError, PagesmithError
from ..markup import parse, serialize, trim
from ..nodes import Node
from ..resources import Resource, ResourceRegistry
from ..walker import Context, Transformer, walk
from .base import ResourceProcessor

logger = logging.getLogger(__name__)


class HTMLProcessor(ResourceProcessor):
    def __init__(
        self,
        transformers: Sequence[Transformer],
        trim: bool = False,
        data: Optional[Any] = None,
    ):
        self.transformers = list(transformers)
        self.trim = trim
        self.data = data

    def name(self) -> str:
        transformers = ", ".join(t.describe() for t in self.transformers)
        return f"{type(self).__name__}({transformers})"

    def load_text(self, source_path: Path, registry: ResourceRegistry) -> str:
        raw = registry.absolute_path(source_path).read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MarkupParseError(source_path, exc) from exc

    def render(
        self,
        text: str,
        source: Resource,
        source_path: Path,
        registry: ResourceRegistry,
    ) -> str:
        """Parse, transform and serialize markup text for ``source``."""
        dom: List[Node] = parse(text, source_path)

        ctx = Context(
            resource=source,
            source_path=Path(source_path),
            registry=registry,
            data=self.data,
        )
        try:
            walk(dom, self.transformers, ctx)
        except PagesmithError as exc:
            exc.annotate(source_path=source_path)
            raise

        if self.trim:
            trim(dom)

        return serialize(dom)

    def process_resource(
        self,
        source: Resource,
        source_path: Path,
        registry: ResourceRegistry,
    ) -> bytes:
        logger.debug("Loading %s", source.identifier())
        text = self.load_text(source_path, registry)
        return self.render(text, source, source_path, registry).encode("utf-8")
