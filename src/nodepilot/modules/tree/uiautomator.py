"""
Parse Android ``uiautomator dump`` XML into a node tree.
"""
from __future__ import annotations

import re
from typing import Callable, Optional
from xml.etree import ElementTree

from .memory import MemoryNode
from .types import Rect

HIERARCHY_CLASS = "hierarchy"

_BOUNDS_RE = re.compile(r"\[(-?\d+),(-?\d+)\]\[(-?\d+),(-?\d+)\]")

NodeFactory = Callable[..., MemoryNode]


def parse_bounds(bounds_str: str) -> Optional[Rect]:
    """
    Parse a uiautomator bounds string ``"[x1,y1][x2,y2]"``.
    Returns None if it does not parse.
    """
    match = _BOUNDS_RE.search(bounds_str or "")
    if not match:
        return None
    x1, y1, x2, y2 = (int(match.group(i)) for i in range(1, 5))
    return Rect(x1, y1, x2, y2)


def _flag(attrib: dict, name: str) -> bool:
    return (attrib.get(name) or "").lower() == "true"


def _build(el: ElementTree.Element, factory: NodeFactory) -> MemoryNode:
    attrib = el.attrib or {}
    node = factory(
        attrib.get("class") or None,
        text=attrib.get("text") or None,
        content_description=attrib.get("content-desc") or None,
        clickable=_flag(attrib, "clickable"),
        long_clickable=_flag(attrib, "long-clickable"),
        scrollable=_flag(attrib, "scrollable"),
        bounds=parse_bounds(attrib.get("bounds", "")) or Rect(0, 0, 0, 0),
        resource_id=attrib.get("resource-id") or None,
    )
    for child in el:
        if child.tag == "node":
            node.append(_build(child, factory))
    return node


def parse_uiautomator_xml(
    page_source_xml: str, *, node_factory: NodeFactory = MemoryNode
) -> Optional[MemoryNode]:
    """
    Build a tree from a uiautomator dump.

    The returned root is a synthetic ``hierarchy`` node whose children are
    the dump's top-level windows, so child index paths stay stable between
    dumps of the same screen. Returns None for empty input.
    """
    if not page_source_xml or not page_source_xml.strip():
        return None

    # ``uiautomator dump /dev/tty`` appends a status line after the document
    end = page_source_xml.rfind(">")
    try:
        doc = ElementTree.fromstring(page_source_xml[: end + 1])
    except ElementTree.ParseError as e:
        raise ValueError(f"Failed to parse uiautomator XML: {e}") from e

    root = node_factory(HIERARCHY_CLASS)
    top_level = [doc] if doc.tag == "node" else [el for el in doc if el.tag == "node"]
    for el in top_level:
        root.append(_build(el, node_factory))
    if root.child_count:
        root.bounds = root.get_child(0).bounds
    return root


__all__ = ["HIERARCHY_CLASS", "parse_bounds", "parse_uiautomator_xml"]
