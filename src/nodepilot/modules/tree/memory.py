"""
In-memory node tree.

Used for offline runs against a parsed uiautomator dump and as the base
class of the ADB-backed nodes. Semantic actions are recorded in
``actions``; an ``on_action`` hook lets callers mutate the tree in
response (e.g. reveal new content after a scroll).
"""
from __future__ import annotations

import weakref
from typing import Callable, List, Optional

from .types import Rect

ActionHook = Callable[["MemoryNode", str, Optional[str]], Optional[bool]]


class MemoryNode:
    def __init__(
        self,
        class_name: Optional[str] = None,
        *,
        text: Optional[str] = None,
        content_description: Optional[str] = None,
        clickable: bool = False,
        long_clickable: bool = False,
        scrollable: bool = False,
        bounds: Rect = Rect(0, 0, 0, 0),
        children: Optional[List["MemoryNode"]] = None,
        resource_id: Optional[str] = None,
        on_action: Optional[ActionHook] = None,
    ) -> None:
        self.class_name = class_name
        self.text = text
        self.content_description = content_description
        self.clickable = clickable
        self.long_clickable = long_clickable
        self.scrollable = scrollable
        self.bounds = bounds
        self.resource_id = resource_id
        self.on_action = on_action
        self.actions: List[tuple] = []
        self.refresh_count = 0
        self._parent_ref: Optional[weakref.ReferenceType] = None
        self._children: List[MemoryNode] = []
        for child in children or []:
            self.append(child)

    # ---- tree structure ----

    def append(self, child: "MemoryNode") -> "MemoryNode":
        child._parent_ref = weakref.ref(self)
        self._children.append(child)
        return child

    def remove(self, child: "MemoryNode") -> None:
        self._children = [c for c in self._children if c is not child]
        child._parent_ref = None

    @property
    def children(self) -> List["MemoryNode"]:
        return list(self._children)

    @property
    def parent(self) -> Optional["MemoryNode"]:
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def child_count(self) -> int:
        return len(self._children)

    @property
    def index_in_parent(self) -> Optional[int]:
        parent = self.parent
        if parent is None:
            return None
        for i, child in enumerate(parent._children):
            if child is self:
                return i
        return None

    def get_child(self, index: int) -> Optional["MemoryNode"]:
        if 0 <= index < len(self._children):
            return self._children[index]
        return None

    def index_path(self) -> List[int]:
        """Child indexes from the root down to this node."""
        path: List[int] = []
        node: Optional[MemoryNode] = self
        while node is not None and node.parent is not None:
            index = node.index_in_parent
            if index is None:
                break
            path.append(index)
            node = node.parent
        path.reverse()
        return path

    def bounds_in_screen(self) -> Rect:
        return self.bounds

    # ---- actions ----

    def _act(self, action: str, argument: Optional[str] = None) -> bool:
        self.actions.append((action, argument) if argument is not None else (action,))
        if self.on_action is not None:
            result = self.on_action(self, action, argument)
            if result is not None:
                return bool(result)
        return True

    def perform_click(self) -> bool:
        return self._act("click")

    def perform_long_click(self) -> bool:
        return self._act("long_click")

    def perform_scroll_forward(self) -> bool:
        return self._act("scroll_forward")

    def perform_scroll_backward(self) -> bool:
        return self._act("scroll_backward")

    def set_text(self, text: str) -> bool:
        ok = self._act("set_text", text)
        if ok:
            self.text = text
        return ok

    def refresh(self) -> bool:
        self.refresh_count += 1
        return True

    def __repr__(self) -> str:
        label = self.text or self.content_description or ""
        return f"<MemoryNode {self.class_name} {label!r}>"


class MemoryRootProvider:
    """Root provider over a fixed root or a factory producing fresh snapshots."""

    def __init__(
        self,
        root: Optional[MemoryNode] = None,
        *,
        factory: Optional[Callable[[], Optional[MemoryNode]]] = None,
    ) -> None:
        if root is None and factory is None:
            raise ValueError("root or factory is required")
        self._root = root
        self._factory = factory
        self.acquisitions = 0

    def current_root(self, force_refresh: bool = False) -> Optional[MemoryNode]:
        if self._factory is not None and (force_refresh or self._root is None):
            self._root = self._factory()
        self.acquisitions += 1
        return self._root


__all__ = ["MemoryNode", "MemoryRootProvider"]
