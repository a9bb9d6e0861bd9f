"""
AccessibilityToolkit: one object wiring the engine around a host and a
root provider.

The host is passed in explicitly; there is no process-wide "current
service". Composite helpers here are thin compositions of finder and
executor calls.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from ..core.constants import EDIT_TEXT, LIST_CLASSES, GlobalAction
from ..core.logger import logger
from .gesture.synth import GestureSynthesizer
from .interaction.executor import InteractionExecutor
from .poll.retry import RetryPoller
from .query.engine import QueryEngine
from .query.finder import NodeFinder
from .query.navigator import Navigator
from .search.scroll_search import ScrollSearchOrchestrator
from .tree.types import HostDispatcher, Node, RootProvider


class AccessibilityToolkit:
    def __init__(
        self,
        host: HostDispatcher,
        root_provider: RootProvider,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.host = host
        self.root_provider = root_provider
        self.engine = QueryEngine()
        self.navigator = Navigator()
        self.poller = RetryPoller(root_provider, clock=clock, sleep=sleep)
        self.finder = NodeFinder(self.poller, self.engine)
        self.gestures = GestureSynthesizer(host)
        self.executor = InteractionExecutor(self.gestures, engine=self.engine, sleep=sleep)
        self.scroll_search = ScrollSearchOrchestrator(self.executor, self.gestures, engine=self.engine, sleep=sleep)

    def root(self, force_refresh: bool = False) -> Optional[Node]:
        return self.root_provider.current_root(force_refresh)

    # ---- composites ----

    def find_text_and_click(self, node: Optional[Node], *texts: str, exact: bool = False) -> bool:
        target = self.finder.find_one_by_text(node, *texts, exact=exact)
        if target is None:
            return False
        return self.executor.click(target)

    def find_text_input(
        self, node: Optional[Node], text: str, root: bool = True, append: bool = False
    ) -> bool:
        """Type into the first EditText; polled when ``root``, single pass otherwise."""
        if root:
            edit = self.finder.find_one_by_class(node, EDIT_TEXT)
        else:
            edit = self.engine.match_by_class(node, EDIT_TEXT)
        if edit is None:
            return False
        return self.executor.set_text(edit, text, append=append)

    def find_list_one_and_click(self, node: Optional[Node], index: int = 0) -> bool:
        """Click item ``index`` of the first RecyclerView/ListView."""
        item = self.engine.match_first_child_of(node, LIST_CLASSES, index)
        if item is None:
            logger.debug("no list item #{}", index)
            return False
        return self.executor.click(item)

    def scroll_and_find(
        self, node: Optional[Node], *texts: str, max_retry: int = 3, exact: bool = False
    ) -> Optional[Node]:
        return self.scroll_search.scroll_and_find(node, *texts, max_retry=max_retry, exact=exact)

    # ---- global pass-throughs ----

    def global_back(self) -> bool:
        return self.host.perform_global_action(GlobalAction.BACK)

    def global_home(self) -> bool:
        return self.host.perform_global_action(GlobalAction.HOME)


__all__ = ["AccessibilityToolkit"]
