"""Decode Atom XML into a plain dict/list/str tree.

Single child elements stay bare values; repeated ones become lists. The
feed normalizer does its own singular-or-array coercion on top of this.
"""

from __future__ import annotations

from typing import Any
from xml.etree.ElementTree import Element, ParseError

from defusedxml import ElementTree
from defusedxml.common import DefusedXmlException

ATTRIBUTES_KEY = "$"
TEXT_KEY = "_"

_NAMESPACE_PREFIXES = {
    "http://www.w3.org/2005/Atom": "",
    "http://arxiv.org/schemas/atom": "arxiv:",
    "http://a9.com/-/spec/opensearch/1.1/": "opensearch:",
}


class FeedFormatError(ValueError):
    """Raised when a feed response cannot be decoded or has no usable shape."""


def decode_feed_xml(text: str) -> dict[str, Any]:
    """Parse an XML document into ``{root_tag: tree}``."""
    try:
        root = ElementTree.fromstring(text)
    except (ParseError, DefusedXmlException) as exc:
        raise FeedFormatError(f"Could not parse feed XML: {exc}") from exc

    return {_tag_name(root.tag): _element_to_tree(root)}


def _element_to_tree(element: Element) -> Any:
    attributes = {_tag_name(key): value for key, value in element.attrib.items()}
    children = list(element)
    text = (element.text or "").strip()

    if not attributes and not children:
        return element.text or ""

    node: dict[str, Any] = {}
    if attributes:
        node[ATTRIBUTES_KEY] = attributes
    if text:
        node[TEXT_KEY] = text

    for child in children:
        name = _tag_name(child.tag)
        value = _element_to_tree(child)
        if name not in node:
            node[name] = value
        elif isinstance(node[name], list):
            node[name].append(value)
        else:
            node[name] = [node[name], value]

    return node


def _tag_name(tag: str) -> str:
    """Map ``{namespace}local`` to a prefixed local name."""
    if not tag.startswith("{"):
        return tag
    namespace, _, local = tag[1:].partition("}")
    return f"{_NAMESPACE_PREFIXES.get(namespace, '')}{local}"
