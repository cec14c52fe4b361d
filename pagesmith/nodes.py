# pagesmith/nodes.py
"""
Node tree used by the walker.

A document is a list of nodes. Element owns its attribute list and its
children; nothing points back at a parent, so a subtree can be moved around
as a plain value. Attribute keys may repeat and keep their document order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

Attrs = List[Tuple[str, str]]


@dataclass
class Element:
    name: str
    attrs: Attrs = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class RawMarkup:
    """Pre-rendered HTML, written out verbatim and never walked."""

    html: str


Node = Union[Element, Text, RawMarkup]


def get_attr(attrs: Attrs, key: str) -> Optional[str]:
    """Return the first value stored under ``key``, or None."""
    for k, v in attrs:
        if k == key:
            return v
    return None
