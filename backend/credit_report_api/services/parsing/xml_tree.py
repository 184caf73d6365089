"""
Credit Report API - XML Tree Builder

Turns raw bureau XML into the generic tree the normalizer reads:

- the document becomes {root_tag: root_value}
- child elements are grouped by tag into lists, even single occurrences
- a bare leaf element becomes its text, verbatim ("" when empty)
- an element with attributes becomes {"$": {...attrs}, "_": text}
- an element with children keeps its character data (own text plus the
  text between children) under "_", unless it is only whitespace
"""
from __future__ import annotations
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, Union

from .path_resolver import TEXT_KEY, ATTRS_KEY

logger = logging.getLogger(__name__)


class ReportParseError(ValueError):
    """Raised when an uploaded document is not well-formed XML."""


def _strip_ns(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _shallow_node(element: ET.Element) -> Union[str, Dict[str, Any]]:
    """Node for one element, with its child lists still empty."""
    children = list(element)
    if not element.attrib and not children:
        return element.text or ""

    node: Dict[str, Any] = {}
    if element.attrib:
        node[ATTRS_KEY] = {_strip_ns(k): v for k, v in element.attrib.items()}

    text = (element.text or "") + "".join(child.tail or "" for child in children)
    if text and not (children and text.isspace()):
        node[TEXT_KEY] = text
    return node


def _element_to_node(element: ET.Element) -> Union[str, Dict[str, Any]]:
    # Explicit stack: report depth is bounded by upload size, not the call stack
    root = _shallow_node(element)
    pending = [(element, root)]
    while pending:
        parent, node = pending.pop()
        if not isinstance(node, dict):
            continue
        for child in parent:
            child_node = _shallow_node(child)
            node.setdefault(_strip_ns(child.tag), []).append(child_node)
            pending.append((child, child_node))
    return root


def parse_xml(content: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse XML text into the list-wrapped tree.

    Raises ReportParseError on malformed or empty input.
    """
    if isinstance(content, str):
        content = content.lstrip("\ufeff")
    if not content or not content.strip():
        raise ReportParseError("XML document is empty")

    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        logger.error(f"XML parse failed: {e}")
        raise ReportParseError(f"XML invalid or not parseable: {e}") from e

    return {_strip_ns(root.tag): _element_to_node(root)}
