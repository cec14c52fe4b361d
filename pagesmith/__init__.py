# pagesmith/__init__.py

from .exceptions import PagesmithError
from .nodes import Element, RawMarkup, Text, get_attr
from .processors import HTMLProcessor, IdentityProcessor, MarkdownProcessor, ResourceProcessor
from .resources import Resource, ResourceRegistry
from .walker import Context, Transformer, walk

__version__ = "0.1.0"

__all__ = [
    "Context",
    "Element",
    "HTMLProcessor",
    "IdentityProcessor",
    "MarkdownProcessor",
    "PagesmithError",
    "RawMarkup",
    "Resource",
    "ResourceProcessor",
    "ResourceRegistry",
    "Text",
    "Transformer",
    "get_attr",
    "walk",
]
