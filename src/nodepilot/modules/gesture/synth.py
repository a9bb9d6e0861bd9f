"""
Synthetic input built from timed strokes.

Every method returns the host's *acceptance* of the gesture. Completion
and cancellation arrive later on a logging callback; a True return does
not mean the tap or drag has visibly happened yet.
"""
from __future__ import annotations

from typing import Optional

from ...core.config import settings
from ...core.logger import logger
from ..tree.types import HostDispatcher, Node, Point
from .types import Gesture, LoggingGestureCallback, Stroke


class GestureSynthesizer:
    def __init__(self, host: HostDispatcher) -> None:
        self.host = host

    def dispatch(self, gesture: Gesture, label: str) -> bool:
        accepted = self.host.dispatch_gesture(gesture, LoggingGestureCallback(label))
        if not accepted:
            logger.debug("{} gesture rejected by host", label)
        return accepted

    def tap(self, point: Point, duration_ms: Optional[int] = None) -> bool:
        stroke = Stroke((point,), 0, duration_ms or settings.tap_duration_ms)
        return self.dispatch(Gesture((stroke,)), "click")

    def tap_xy(self, x: float, y: float) -> bool:
        return self.tap(Point(x, y))

    def press(self, point: Point, duration_ms: int) -> bool:
        return self.dispatch(Gesture((Stroke((point,), 0, duration_ms),)), "press")

    def drag_by(self, origin: Point, dx: float, dy: float, duration_ms: Optional[int] = None) -> bool:
        """Straight drag from ``origin`` to ``origin + (dx, dy)``.

        Negative ``dy`` drags upward, which scrolls content down.
        """
        stroke = Stroke((origin, origin.offset(dx, dy)), 0, duration_ms or settings.drag_duration_ms)
        return self.dispatch(Gesture((stroke,)), "scroll")

    def click_node(self, node: Node) -> bool:
        """Tap the center of ``node`` for nodes that cannot click themselves."""
        node.refresh()
        return self.tap(node.bounds_in_screen().center(), settings.click_duration_ms)

    def press_node(self, node: Node, duration_ms: Optional[int] = None) -> bool:
        node.refresh()
        return self.press(node.bounds_in_screen().center(), duration_ms or settings.long_press_duration_ms)

    def scroll_by_node(self, node: Node, dx: float = 0, dy: float = 0) -> bool:
        """Drag from the center of ``node``, for containers that are not scrollable."""
        return self.drag_by(node.bounds_in_screen().center(), dx, dy)

    def scroll_by_xy(self, x: float = 0, y: float = 0, dx: float = 0, dy: float = 0) -> bool:
        return self.drag_by(Point(x, y), dx, dy)

    def screen_center(self) -> Point:
        return Point(self.host.screen_width() // 2, self.host.screen_height() // 2)


__all__ = ["GestureSynthesizer"]
