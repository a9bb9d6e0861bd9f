"""
Semantic actions on nodes with fallback chains.

- click / long_click: climb to the nearest capable ancestor (node included)
- *_with_descendant: pre-order search of the subtree for a capable node
- scroll_up / scroll_down: nearest scrollable ancestor
- scroll_*_indexed: the N-th scrollable descendant, then settle
- click fallback: synthetic tap at the node's center (result not propagated)
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from ...core.config import settings
from ...core.logger import logger
from ..gesture.synth import GestureSynthesizer
from ..query.engine import QueryEngine, walk
from ..tree.types import Node


def _climb(node: Optional[Node], capable: Callable[[Node], bool]) -> Optional[Node]:
    current = node
    while current is not None:
        if capable(current):
            return current
        current = current.parent
    return None


def _descend(node: Optional[Node], capable: Callable[[Node], bool]) -> Optional[Node]:
    for current, _ in walk(node):
        if capable(current):
            return current
    return None


class InteractionExecutor:
    def __init__(
        self,
        gestures: GestureSynthesizer,
        *,
        engine: Optional[QueryEngine] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.gestures = gestures
        self.engine = engine or QueryEngine()
        self._sleep = sleep

    # ---- click ----

    def click(self, node: Optional[Node], retry: bool = True) -> bool:
        """Click node or its nearest clickable ancestor.

        When nothing up the chain is clickable and ``retry`` is set, the node
        is tapped at its refreshed center. That tap is only requested,
        so the call still returns False.
        """
        if node is None:
            return False
        target = _climb(node, lambda n: n.clickable)
        if target is not None:
            acked = target.perform_click()
            logger.debug("click ok: {} (acked: {})", node.class_name, acked)
            return True
        logger.error("click failed, no clickable ancestor: {} retry: {}", node.class_name, retry)
        if retry:
            self._sleep(settings.short_interval_ms * 2 / 1000.0)
            accepted = self.gestures.click_node(node)
            logger.error("click fallback tap accepted: {}", accepted)
        return False

    def click_with_descendant(self, node: Optional[Node]) -> bool:
        target = _descend(node, lambda n: n.clickable)
        if target is None:
            logger.debug("no clickable node under {}", getattr(node, "class_name", None))
            return False
        target.perform_click()
        return True

    # ---- long click ----

    def long_click(self, node: Optional[Node], retry: bool = False) -> bool:
        """Long-click node or its nearest long-clickable ancestor.

        With ``retry`` a synthetic long press is requested on failure; the
        call still returns False.
        """
        if node is None:
            return False
        target = _climb(node, lambda n: n.long_clickable)
        if target is not None:
            target.perform_long_click()
            return True
        logger.error("long click failed, no long-clickable ancestor: {} retry: {}", node.class_name, retry)
        if retry:
            self._sleep(settings.short_interval_ms * 2 / 1000.0)
            accepted = self.gestures.press_node(node)
            logger.error("long click fallback press accepted: {}", accepted)
        return False

    def long_click_with_descendant(self, node: Optional[Node]) -> bool:
        target = _descend(node, lambda n: n.long_clickable)
        if target is None:
            return False
        target.perform_long_click()
        return True

    # ---- scroll ----

    def scroll_up(self, node: Optional[Node]) -> bool:
        target = _climb(node, lambda n: n.scrollable)
        if target is None:
            return False
        target.perform_scroll_backward()
        return True

    def scroll_down(self, node: Optional[Node]) -> bool:
        target = _climb(node, lambda n: n.scrollable)
        if target is None:
            return False
        target.perform_scroll_forward()
        return True

    def _scroll_indexed(self, node: Optional[Node], index: int, forward: bool) -> bool:
        if node is None:
            return False
        scrollables = self.engine.match_scrollable(node)
        if index < 0 or len(scrollables) <= index:
            logger.debug("no scrollable node #{} ({} found)", index, len(scrollables))
            return False
        target = scrollables[index]
        if forward:
            target.perform_scroll_forward()
        else:
            target.perform_scroll_backward()
        self._sleep(settings.scroll_interval_ms / 1000.0)
        return True

    def scroll_up_indexed(self, node: Optional[Node], index: int = 0) -> bool:
        return self._scroll_indexed(node, index, forward=False)

    def scroll_down_indexed(self, node: Optional[Node], index: int = 0) -> bool:
        return self._scroll_indexed(node, index, forward=True)

    # ---- text ----

    def input_text(self, node: Optional[Node], text: str) -> bool:
        """Set text directly, without reading the current value."""
        if node is None:
            return False
        node.set_text(text)
        return True

    def set_text(self, node: Optional[Node], text: str, append: bool = False) -> bool:
        if node is None:
            return False
        node.refresh()
        old_text = node.text or ""
        logger.trace("set text, old value: {}", old_text)
        node.set_text(old_text + text if append else text)
        return True


__all__ = ["InteractionExecutor"]
