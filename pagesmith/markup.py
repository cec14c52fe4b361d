# pagesmith/markup.py
"""
Conversion between markup text and the node tree.

Parsing goes through BeautifulSoup with the stdlib ``html.parser`` builder;
the soup is then converted into pagesmith nodes. Comments, doctypes and the
bodies of <script>/<style> become RawMarkup so they survive untouched.
Repeated attribute keys are kept as repeated pairs.

HTML tokenizers refuse tag names that start with ``$``, so ``<$name>`` and
``</$name>`` are rewritten into a placeholder element before parsing and
restored afterwards, keeping the original spelling of the name. Script and
style bodies are never rewritten.

BeautifulSoup collapses whitespace-only strings outside <pre>/<textarea> to a
single newline (or a single space when there is no newline). ``trim`` goes
further and drops them.
"""

import re
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import HTMLTreeBuilder, ParserRejectedMarkup
from bs4.dammit import EntitySubstitution
from bs4.element import PreformattedString, Script, Stylesheet

from .exceptions import MarkupParseError
from .nodes import Attrs, Element, Node, RawMarkup, Text

VARIABLE_SIGIL = "$"

# <$name ...>, </$name>, <$> and </$>; the name is hex-encoded into the
# placeholder tag so the parser's lower-casing cannot lose its spelling.
_SIGIL_TAG_RE = re.compile(r"<(/?)\$(?:([A-Za-z_][\w-]*)(?=[\s/>])|(?=>))")
_PLACEHOLDER_PREFIX = "pagesmith-sigil-"
_PLACEHOLDER_RE = re.compile(r"<(/?)" + _PLACEHOLDER_PREFIX + r"([0-9a-fA-F]+)")
_RAW_TEXT_RE = re.compile(r"(<(script|style)\b.*?</\2\s*>)", re.IGNORECASE | re.DOTALL)

_builder = HTMLTreeBuilder()
VOID_ELEMENTS = frozenset(_builder.empty_element_tags)
PRESERVE_WHITESPACE = frozenset(_builder.preserve_whitespace_tags)


def _encode_sigil_name(name: str) -> str:
    return _PLACEHOLDER_PREFIX + name.encode("utf-8").hex()


def _decode_sigil_name(tag_name: str) -> Optional[str]:
    if not tag_name.startswith(_PLACEHOLDER_PREFIX):
        return None
    try:
        return bytes.fromhex(tag_name[len(_PLACEHOLDER_PREFIX):]).decode("utf-8")
    except ValueError:
        return None


def _shield_sigil_tags(text: str) -> str:
    def replace(match):
        name = VARIABLE_SIGIL + (match.group(2) or "")
        return f"<{match.group(1)}{_encode_sigil_name(name)}"

    parts = _RAW_TEXT_RE.split(text)
    # split() yields [text, raw block, tag name, text, raw block, tag name, ...]
    out = []
    for index, part in enumerate(parts):
        position = index % 3
        if position == 0:
            out.append(_SIGIL_TAG_RE.sub(replace, part))
        elif position == 1:
            out.append(part)
    return "".join(out)


def _unshield(text: str) -> str:
    """Restore sigil tags that ended up inside attribute values or comments."""

    def restore(match):
        name = _decode_sigil_name(_PLACEHOLDER_PREFIX + match.group(2))
        if name is None:
            return match.group(0)
        return f"<{match.group(1)}{name}"

    return _PLACEHOLDER_RE.sub(restore, text)


def _collect_duplicate(attrs: dict, key: str, value: str) -> None:
    existing = attrs[key]
    if isinstance(existing, list):
        existing.append(value)
    else:
        attrs[key] = [existing, value]


def _convert_attrs(tag: Tag) -> Attrs:
    attrs: Attrs = []
    for key, value in tag.attrs.items():
        values = value if isinstance(value, list) else [value]
        attrs.extend((key, _unshield(v)) for v in values)
    return attrs


def _convert(parent: Tag) -> List[Node]:
    nodes: List[Node] = []
    for child in parent.children:
        if isinstance(child, Tag):
            name = _decode_sigil_name(child.name) or child.name
            nodes.append(Element(name, _convert_attrs(child), _convert(child)))
        elif isinstance(child, (Script, Stylesheet)):
            nodes.append(RawMarkup(str(child)))
        elif isinstance(child, PreformattedString):
            # Comment, Doctype, CData, ProcessingInstruction, Declaration
            nodes.append(RawMarkup(_unshield(child.output_ready())))
        elif isinstance(child, NavigableString):
            nodes.append(Text(_unshield(str(child))))
    return nodes


def parse(text: str, path: Optional[Path] = None) -> List[Node]:
    """
    Parse markup text into a node list.

    Args:
        text: Markup to parse
        path: Source path, only used to label a parse failure

    Raises:
        MarkupParseError: The parser rejected the markup
    """
    try:
        soup = BeautifulSoup(
            _shield_sigil_tags(text),
            "html.parser",
            multi_valued_attributes=None,
            on_duplicate_attribute=_collect_duplicate,
        )
    except ParserRejectedMarkup as exc:
        raise MarkupParseError(path, exc) from exc
    return _convert(soup)


def _serialize_attr(key: str, value: str) -> str:
    value = EntitySubstitution.substitute_xml(value)
    return f" {key}={EntitySubstitution.quoted_attribute_value(value)}"


def _serialize_into(nodes: List[Node], out: List[str]) -> None:
    for node in nodes:
        if isinstance(node, Text):
            out.append(EntitySubstitution.substitute_xml(node.text))
        elif isinstance(node, RawMarkup):
            out.append(node.html)
        else:
            out.append("<" + node.name)
            out.extend(_serialize_attr(k, v) for k, v in node.attrs)
            out.append(">")
            if node.name in VOID_ELEMENTS and not node.children:
                continue
            _serialize_into(node.children, out)
            out.append(f"</{node.name}>")


def serialize(nodes: List[Node]) -> str:
    """Write a node list back out as HTML."""
    out: List[str] = []
    _serialize_into(nodes, out)
    return "".join(out)


def trim(nodes: List[Node]) -> None:
    """
    Drop whitespace-only text nodes in place.

    Content of whitespace-preserving elements (pre, textarea) is left alone.
    """
    nodes[:] = [n for n in nodes if not (isinstance(n, Text) and not n.text.strip())]
    for node in nodes:
        if isinstance(node, Element) and node.name not in PRESERVE_WHITESPACE:
            trim(node.children)
