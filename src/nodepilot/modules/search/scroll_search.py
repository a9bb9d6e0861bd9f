"""
Find-while-scrolling.

Phases run in a fixed order, cheapest first, each with its own budget
(``max_retry`` times the phase multiplier):

1. native scroll forward on the first scrollable descendant   x1
2. native scroll backward                                      x2
3. synthetic drag up from screen center by half a screen       x2
4. synthetic drag down                                         x3

The node is refreshed after each step that moved the UI, and the first
match in any phase is returned.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from ...core.config import settings
from ...core.constants import SCROLL_PHASE_MULTIPLIERS, ScrollPhase
from ...core.logger import logger
from ..gesture.synth import GestureSynthesizer
from ..interaction.executor import InteractionExecutor
from ..query.engine import QueryEngine
from ..tree.types import Node


class ScrollSearchOrchestrator:
    def __init__(
        self,
        executor: InteractionExecutor,
        gestures: GestureSynthesizer,
        *,
        engine: Optional[QueryEngine] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.executor = executor
        self.gestures = gestures
        self.engine = engine or executor.engine
        self._sleep = sleep
        self.last_phase: Optional[ScrollPhase] = None

    def _step(self, node: Node, phase: ScrollPhase) -> None:
        if phase == ScrollPhase.NATIVE_FORWARD:
            moved = self.executor.scroll_down_indexed(node, 0)
        elif phase == ScrollPhase.NATIVE_BACKWARD:
            moved = self.executor.scroll_up_indexed(node, 0)
        else:
            center = self.gestures.screen_center()
            half = self.gestures.host.screen_height() // 2
            dy = -half if phase == ScrollPhase.SYNTHETIC_UP else half
            self.gestures.drag_by(center, 0, dy)
            self._sleep(settings.scroll_interval_ms / 1000.0)
            moved = True
        # the live UI changed under the snapshot; re-read before searching
        if moved:
            node.refresh()

    def scroll_and_find(
        self, node: Optional[Node], *texts: str, max_retry: int = 3, exact: bool = False
    ) -> Optional[Node]:
        self.last_phase = None
        if node is None:
            return None
        for phase, multiplier in SCROLL_PHASE_MULTIPLIERS:
            if phase == ScrollPhase.SYNTHETIC_UP:
                logger.debug("native scroll exhausted, falling back to drag gestures")
            for _ in range(max_retry * multiplier):
                self._step(node, phase)
                found = self.engine.match_by_text(node, *texts, exact=exact)
                if found is not None:
                    self.last_phase = phase
                    logger.debug("scroll search hit in {}: {}", phase.value, ", ".join(texts))
                    return found
        logger.error("scroll search: not found: {}", ", ".join(texts))
        return None


__all__ = ["ScrollSearchOrchestrator"]
