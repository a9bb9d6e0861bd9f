"""
nodepilot - drive a foreign app through its live accessibility tree.
"""
from .core.constants import GlobalAction, RefreshMode, ScrollPhase
from .modules.tree import MemoryNode, MemoryRootProvider, NodeSet, Point, Rect, parse_uiautomator_xml
from .modules.query import Navigator, NodeFinder, QueryEngine
from .modules.poll import RetryPolicy, RetryPoller
from .modules.gesture import Gesture, GestureSynthesizer, Stroke
from .modules.interaction import InteractionExecutor
from .modules.search import ScrollSearchOrchestrator
from .modules.toolkit import AccessibilityToolkit
from .modules.async_toolkit import AsyncAccessibilityToolkit

__version__ = "0.1.0"

__all__ = [
    "GlobalAction",
    "RefreshMode",
    "ScrollPhase",
    "MemoryNode",
    "MemoryRootProvider",
    "NodeSet",
    "Point",
    "Rect",
    "parse_uiautomator_xml",
    "Navigator",
    "NodeFinder",
    "QueryEngine",
    "RetryPolicy",
    "RetryPoller",
    "Gesture",
    "GestureSynthesizer",
    "Stroke",
    "InteractionExecutor",
    "ScrollSearchOrchestrator",
    "AccessibilityToolkit",
    "AsyncAccessibilityToolkit",
]
