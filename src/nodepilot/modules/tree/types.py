"""
Node, root provider and host contracts consumed by the engine.

These are typing-only protocols; concrete implementations live in
``tree.memory`` (offline trees) and ``emu`` (ADB-backed device).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from ...core.constants import GlobalAction

if TYPE_CHECKING:
    from ..gesture.types import Gesture, GestureCallback


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def center(self) -> Point:
        return Point((self.left + self.right) // 2, (self.top + self.bottom) // 2)


class Node(Protocol):
    """Handle to one element of a live, externally mutated UI tree.

    ``parent`` and children are navigation references only; they are valid
    for the snapshot the handle came from. ``index_in_parent`` is None when
    the host cannot tell the position.
    """

    @property
    def class_name(self) -> Optional[str]: ...

    @property
    def text(self) -> Optional[str]: ...

    @property
    def content_description(self) -> Optional[str]: ...

    @property
    def clickable(self) -> bool: ...

    @property
    def long_clickable(self) -> bool: ...

    @property
    def scrollable(self) -> bool: ...

    @property
    def child_count(self) -> int: ...

    @property
    def parent(self) -> Optional["Node"]: ...

    @property
    def index_in_parent(self) -> Optional[int]: ...

    def get_child(self, index: int) -> Optional["Node"]: ...

    def bounds_in_screen(self) -> Rect: ...

    def perform_click(self) -> bool: ...

    def perform_long_click(self) -> bool: ...

    def perform_scroll_forward(self) -> bool: ...

    def perform_scroll_backward(self) -> bool: ...

    def set_text(self, text: str) -> bool: ...

    def refresh(self) -> bool:
        """Re-sync with the live UI. May invalidate children and bounds."""
        ...


class RootProvider(Protocol):
    def current_root(self, force_refresh: bool = False) -> Optional[Node]:
        """Return the live tree root; ``force_refresh`` re-acquires the snapshot."""
        ...


class HostDispatcher(Protocol):
    def perform_global_action(self, action: GlobalAction) -> bool: ...

    def dispatch_gesture(
        self, gesture: "Gesture", callback: Optional["GestureCallback"] = None
    ) -> bool:
        """Submit a gesture. True means accepted, not completed."""
        ...

    def screen_width(self) -> int: ...

    def screen_height(self) -> int: ...


__all__ = ["Point", "Rect", "Node", "RootProvider", "HostDispatcher"]
