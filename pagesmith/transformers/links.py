# pagesmith/transformers/links.py
"""
Transformer that resolves cross-resource references.

Converts:
    <a href="@about">             → <a href="../about/index.html">

The part after ``@`` is a resource identifier. It is looked up in the
registry and replaced by the path of that resource's output, relative to the
directory holding the current source file.
"""

import logging
import os
from pathlib import Path, PurePath
from typing import List

from ..exceptions import InvalidPathError, UnknownIdentifierError
from ..nodes import Attrs, Element, Node
from ..walker import Context, Transformer

logger = logging.getLogger(__name__)

LINK_SIGIL = "@"


def relative_link(target: PurePath, source_path: PurePath) -> str:
    """
    Path of ``target`` as seen from the directory containing ``source_path``.

    Both paths are relative to the same root. A source with no parent
    directory gets the target path back unchanged.
    """
    source_dir = source_path.parent
    if source_dir == source_path:
        diff = PurePath(target)
    else:
        diff = PurePath(os.path.relpath(target, source_dir))

    link = diff.as_posix()
    try:
        link.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidPathError(link) from None
    return link


class LinkResolver(Transformer):
    def matches(self, tag_name: str, attrs: Attrs, ctx: Context) -> bool:
        return any(v.startswith(LINK_SIGIL) for _, v in attrs)

    def _resolve(self, value: str, ctx: Context) -> str:
        if not value.startswith(LINK_SIGIL):
            return value

        identifier = value[len(LINK_SIGIL):]
        resource = ctx.registry.lookup_by_identifier(identifier)
        if resource is None:
            raise UnknownIdentifierError(value)

        target = Path(resource.output_path())
        link = relative_link(target, Path(ctx.source_path))
        logger.debug("%s - %s = %s", target, ctx.source_path, link)
        return link

    def replace(
        self, tag_name: str, attrs: Attrs, children: List[Node], ctx: Context
    ) -> List[Node]:
        new_attrs = [(k, self._resolve(v, ctx)) for k, v in attrs]
        return [Element(tag_name, new_attrs, children)]
