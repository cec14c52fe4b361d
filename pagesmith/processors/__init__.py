# pagesmith/processors/__init__.py

from .base import ResourceProcessor
from .html import HTMLProcessor
from .identity import IdentityProcessor
from .markdown import MarkdownProcessor, get_pandoc_config

__all__ = [
    "HTMLProcessor",
    "IdentityProcessor",
    "MarkdownProcessor",
    "ResourceProcessor",
    "get_pandoc_config",
]
