"""
Time-bounded retry around single-pass queries.

The bound is wall-clock time, not attempts. The first attempt always
runs, even with a zero timeout. After each miss the poller sleeps, then
re-reads the live tree: a fresh root snapshot (``RefreshMode.ROOT``) or a
refresh of the node it was given (``RefreshMode.NODE``).
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Sized, TypeVar

from ...core.config import settings
from ...core.constants import RefreshMode
from ...core.logger import logger
from ..tree.nodeset import EMPTY, NodeSet
from ..tree.types import Node, RootProvider

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    interval: float = field(default_factory=lambda: settings.poll_interval)
    timeout: float = field(default_factory=lambda: settings.find_timeout)
    refresh: RefreshMode = RefreshMode.ROOT
    min_size: int = 1

    def with_(self, **changes) -> "RetryPolicy":
        return replace(self, **changes)


class RetryPoller:
    def __init__(
        self,
        root_provider: Optional[RootProvider] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.root_provider = root_provider
        self._clock = clock
        self._sleep = sleep

    def _reacquire(self, node: Node, mode: RefreshMode) -> Node:
        if mode == RefreshMode.ROOT and self.root_provider is not None:
            fresh = self.root_provider.current_root(True)
            if fresh is not None:
                return fresh
            logger.debug("root provider returned no snapshot, keeping previous node")
            return node
        node.refresh()
        return node

    def _poll(
        self,
        node: Node,
        search: Callable[[Node], T],
        done: Callable[[T], bool],
        policy: RetryPolicy,
        what: str,
    ) -> Optional[T]:
        start = self._clock()
        attempts = 0
        while True:
            attempts += 1
            result = search(node)
            if done(result):
                return result
            self._sleep(policy.interval)
            node = self._reacquire(node, policy.refresh)
            if self._clock() - start > policy.timeout:
                break
        logger.error("{}: not found after {} attempts ({:.0f}ms)", what, attempts, policy.timeout * 1000)
        return None

    def poll_one(
        self,
        node: Optional[Node],
        search: Callable[[Node], Optional[Node]],
        policy: Optional[RetryPolicy] = None,
        what: str = "node",
    ) -> Optional[Node]:
        """Retry ``search`` until it returns a node or the timeout elapses."""
        if node is None:
            return None
        return self._poll(node, search, lambda r: r is not None, policy or RetryPolicy(), what)

    def poll_all(
        self,
        node: Optional[Node],
        search: Callable[[Node], NodeSet],
        policy: Optional[RetryPolicy] = None,
        what: str = "nodes",
    ) -> NodeSet:
        """Retry ``search`` until it returns at least ``policy.min_size`` nodes."""
        if node is None:
            return EMPTY
        policy = policy or RetryPolicy()

        def enough(result: Sized) -> bool:
            logger.trace("{} count: {}", what, len(result))
            return len(result) >= policy.min_size

        result = self._poll(node, search, enough, policy, what)
        return result if result is not None else EMPTY


__all__ = ["RetryPolicy", "RetryPoller"]
