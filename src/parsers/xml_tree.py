# src/parsers/xml_tree.py

"""Convert an XML feed document into a plain ordered tree.

The tree uses only ``dict``, ``list`` and scalars so it can be dumped
as JSON and probed without knowing the feed schema:

* child tags become keys, keeping their namespace prefix (``g:price``);
* repeated sibling tags collapse into a list, in document order;
* attributes become ``@_``-prefixed keys;
* an element with attributes keeps its text under ``#text``;
* numeric text becomes ``int``/``float`` unless it has a leading zero.
"""

import logging
import re
from typing import Any, TypeAlias

from lxml import etree

logger = logging.getLogger("feed_catalog.parser")

TreeNode: TypeAlias = (
    "dict[str, TreeNode] | list[TreeNode] | str | int | float | None"
)

ATTRIBUTE_PREFIX = "@_"
TEXT_KEY = "#text"

_INT_RE = re.compile(r"^-?(0|[1-9]\d*)$")
_FLOAT_RE = re.compile(r"^-?(0|[1-9]\d*)\.\d+$")
_XML_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>")


def _coerce(text: str) -> str | int | float:
    stripped = text.strip()
    if _INT_RE.match(stripped):
        return int(stripped)
    if _FLOAT_RE.match(stripped):
        return float(stripped)
    return stripped


def _qualified_name(elem: Any, name: str) -> str:
    """Render ``{uri}local`` as ``prefix:local`` using the element's nsmap."""
    qname = etree.QName(name)
    if qname.namespace is None:
        return qname.localname
    for prefix, uri in (elem.nsmap or {}).items():
        if uri == qname.namespace and prefix:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _element_to_node(elem: Any) -> TreeNode:
    node: dict[str, TreeNode] = {}

    for attr_name, attr_value in elem.attrib.items():
        key = ATTRIBUTE_PREFIX + _qualified_name(elem, attr_name)
        node[key] = _coerce(attr_value)

    text_parts = [elem.text]
    for child in elem:
        text_parts.append(child.tail)
        if not isinstance(child.tag, str):
            continue  # unresolved entity references
        key = _qualified_name(child, child.tag)
        value = _element_to_node(child)
        if key not in node:
            node[key] = value
            continue
        existing = node[key]
        if isinstance(existing, list):
            existing.append(value)
        else:
            node[key] = [existing, value]

    # mixed content: text before, between and after child elements
    text = " ".join(
        part.strip() for part in text_parts if part and part.strip()
    )
    if not node:
        return _coerce(text) if text else ""
    if text:
        node[TEXT_KEY] = _coerce(text)
    return node


def parse_xml(xml_text: str) -> dict[str, TreeNode]:
    """Parse *xml_text* into a tree keyed by the root tag.

    Raises:
        lxml.etree.XMLSyntaxError: the document is not well-formed.
    """
    parser = etree.XMLParser(
        resolve_entities="internal",
        remove_comments=True,
        remove_pis=True,
        no_network=True,
        huge_tree=True,
        strip_cdata=True,
    )
    # lxml rejects str input that still carries an encoding declaration
    body = _XML_DECLARATION_RE.sub("", xml_text.lstrip("\ufeff"), count=1)
    root = etree.fromstring(body.strip(), parser)
    tree: dict[str, TreeNode] = {
        _qualified_name(root, root.tag): _element_to_node(root)
    }
    logger.debug("Parsed XML document with root <%s>", root.tag)
    return tree
