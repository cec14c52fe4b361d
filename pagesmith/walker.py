# pagesmith/walker.py
"""
Tree walker that runs an ordered list of transformers over a node tree.

Each level of the tree is rebuilt in one pass: every element is offered to
the transformers in list order and the first one whose ``matches`` returns
True replaces it. Replacements are not offered to the transformers again at
the same level, but their children are walked like any other children.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Sequence

from .exceptions import NestingTooDeepError, PagesmithError
from .nodes import Attrs, Element, Node
from .resources import Resource, ResourceRegistry

MAX_DEPTH = 200


@dataclass(frozen=True)
class Context:
    """Read-only data available to transformers while one resource is processed."""

    resource: Resource
    source_path: Path
    registry: ResourceRegistry
    data: Any = None


class Transformer(ABC):
    """A rule that claims matching elements and produces their replacement."""

    def describe(self) -> str:
        return type(self).__name__

    @abstractmethod
    def matches(self, tag_name: str, attrs: Attrs, ctx: Context) -> bool:
        ...

    @abstractmethod
    def replace(
        self, tag_name: str, attrs: Attrs, children: List[Node], ctx: Context
    ) -> List[Node]:
        """Return the nodes that take the element's place (possibly none)."""
        ...


def walk(
    nodes: List[Node],
    transformers: Sequence[Transformer],
    ctx: Context,
    _depth: int = 0,
) -> None:
    """
    Apply ``transformers`` to ``nodes`` in place, recursively.

    Args:
        nodes: Node list to rewrite
        transformers: Ordered transformers; first match wins
        ctx: Context of the resource being processed

    Raises:
        PagesmithError: A transformer failed. The walk stops immediately and
            the error carries the tag of the element being replaced.
        NestingTooDeepError: The tree is nested deeper than MAX_DEPTH
    """
    if _depth > MAX_DEPTH:
        raise NestingTooDeepError(MAX_DEPTH)

    rebuilt: List[Node] = []
    for node in nodes:
        if not isinstance(node, Element):
            rebuilt.append(node)
            continue

        for transformer in transformers:
            if transformer.matches(node.name, node.attrs, ctx):
                try:
                    replacement = transformer.replace(node.name, node.attrs, node.children, ctx)
                except PagesmithError as exc:
                    exc.annotate(tag=node.name)
                    raise
                rebuilt.extend(replacement)
                break
        else:
            rebuilt.append(node)

    nodes[:] = rebuilt

    for node in nodes:
        if isinstance(node, Element):
            walk(node.children, transformers, ctx, _depth + 1)
