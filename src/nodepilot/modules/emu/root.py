"""
Root provider backed by ``uiautomator dump``.

Nodes from a dump are plain data, so ``AdbNode`` emulates the semantic
actions with blocking adb input on the caller's thread:

- click: tap at bounds center
- long click: in-place swipe held for ``long_press_duration_ms``
- scroll forward/backward: half-height drag inside the node's bounds
- set text: tap to focus, delete the current value, type the new one

``refresh()`` re-dumps the screen and re-binds the handle by its child
index path; it returns False when that path no longer exists.
"""
from __future__ import annotations

import functools
from typing import Optional

from ...core.config import settings
from ...core.constants import KEYCODE_DEL, KEYCODE_MOVE_END
from ...core.logger import logger
from ..tree.memory import MemoryNode
from ..tree.uiautomator import parse_uiautomator_xml
from .adb import Adb, AdbError


class AdbNode(MemoryNode):
    def __init__(self, class_name: Optional[str] = None, *, provider: "AdbRootProvider", **kwargs) -> None:
        self._parent_hold: Optional[MemoryNode] = None
        super().__init__(class_name, **kwargs)
        self._provider = provider

    def append(self, child: MemoryNode) -> MemoryNode:
        super().append(child)
        # parent links are weak; hold the parent so an old snapshot stays navigable
        if isinstance(child, AdbNode):
            child._parent_hold = self
        return child

    def _act(self, action: str, argument: Optional[str] = None) -> bool:
        self.actions.append((action, argument) if argument is not None else (action,))
        try:
            self._provider.emulate(self, action, argument)
        except AdbError as e:
            logger.error("{} on {} failed: {}", action, self.class_name, e)
            return False
        return True

    def refresh(self) -> bool:
        self.refresh_count += 1
        path = self.index_path()
        try:
            fresh = self._provider.reload()
        except (AdbError, ValueError) as e:
            logger.debug("refresh failed: {}", e)
            return False
        for index in path:
            fresh = fresh.get_child(index) if fresh is not None else None
        if fresh is None:
            return False
        self.class_name = fresh.class_name
        self.text = fresh.text
        self.content_description = fresh.content_description
        self.clickable = fresh.clickable
        self.long_clickable = fresh.long_clickable
        self.scrollable = fresh.scrollable
        self.bounds = fresh.bounds
        self.resource_id = fresh.resource_id
        self._children = []
        for child in fresh.children:
            self.append(child)
        return True


class AdbRootProvider:
    def __init__(self, adb: Optional[Adb] = None, addr: Optional[str] = None) -> None:
        self.adb = adb or Adb()
        self.addr = addr if addr is not None else settings.adb_addr
        self._root: Optional[AdbNode] = None

    def reload(self) -> Optional[AdbNode]:
        """Dump and parse the screen now; raises AdbError or ValueError."""
        xml = self.adb.dump_ui_xml(self.addr)
        self._root = parse_uiautomator_xml(
            xml, node_factory=functools.partial(AdbNode, provider=self)
        )
        return self._root

    def current_root(self, force_refresh: bool = False) -> Optional[AdbNode]:
        """Cached root; a failed dump is logged and the previous root returned."""
        if self._root is None or force_refresh:
            try:
                return self.reload()
            except (AdbError, ValueError) as e:
                logger.warning("ui dump failed on {}: {}", self.addr, e)
        return self._root

    def emulate(self, node: MemoryNode, action: str, argument: Optional[str]) -> None:
        rect = node.bounds_in_screen()
        center = rect.center()
        x, y = int(center.x), int(center.y)
        if action == "click":
            self.adb.tap(self.addr, x, y)
        elif action == "long_click":
            self.adb.swipe(self.addr, x, y, x, y, settings.long_press_duration_ms)
        elif action in ("scroll_forward", "scroll_backward"):
            quarter = rect.height // 4
            # forward reveals content below: drag upward
            sign = 1 if action == "scroll_forward" else -1
            self.adb.swipe(self.addr, x, y + sign * quarter, x, y - sign * quarter, settings.drag_duration_ms)
        elif action == "set_text":
            self.adb.tap(self.addr, x, y)
            self.adb.keyevent(self.addr, KEYCODE_MOVE_END)
            for _ in range(len(node.text or "")):
                self.adb.keyevent(self.addr, KEYCODE_DEL)
            self.adb.input_text(self.addr, argument or "")
        else:
            raise ValueError(f"unsupported action: {action}")


__all__ = ["AdbNode", "AdbRootProvider"]
