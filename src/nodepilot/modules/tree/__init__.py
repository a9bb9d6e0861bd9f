from .types import Point, Rect, Node, RootProvider, HostDispatcher
from .nodeset import NodeSet, EMPTY
from .memory import MemoryNode, MemoryRootProvider
from .uiautomator import HIERARCHY_CLASS, parse_bounds, parse_uiautomator_xml

__all__ = [
    "Point",
    "Rect",
    "Node",
    "RootProvider",
    "HostDispatcher",
    "NodeSet",
    "EMPTY",
    "MemoryNode",
    "MemoryRootProvider",
    "HIERARCHY_CLASS",
    "parse_bounds",
    "parse_uiautomator_xml",
]
