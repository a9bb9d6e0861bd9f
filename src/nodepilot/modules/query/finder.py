"""
Time-bounded finders: QueryEngine single passes driven by RetryPoller.

``root=True`` re-acquires the root snapshot between attempts;
``root=False`` refreshes the node the search started from. ``timeout``
is in milliseconds, as everywhere else in the public API.
"""
from __future__ import annotations

from typing import Optional

from ...core.config import settings
from ...core.constants import RefreshMode
from ..poll.retry import RetryPolicy, RetryPoller
from ..tree.nodeset import NodeSet
from ..tree.types import Node
from .criteria import ClassCriteria, DescCriteria, RegexCriteria, TextCriteria
from .engine import QueryEngine


class NodeFinder:
    def __init__(self, poller: RetryPoller, engine: Optional[QueryEngine] = None) -> None:
        self.poller = poller
        self.engine = engine or QueryEngine()

    def _policy(self, timeout: Optional[int], root: bool, min_size: int = 1) -> RetryPolicy:
        return RetryPolicy(
            interval=settings.poll_interval,
            timeout=(settings.find_timeout_ms if timeout is None else timeout) / 1000.0,
            refresh=RefreshMode.ROOT if root else RefreshMode.NODE,
            min_size=min_size,
        )

    # ---- by class ----

    def find_one_by_class(
        self,
        node: Optional[Node],
        *classes: str,
        limit_depth: Optional[int] = None,
        min_child_count: int = 0,
        first_child_class: Optional[str] = None,
        timeout: Optional[int] = None,
        root: bool = True,
    ) -> Optional[Node]:
        criteria = ClassCriteria(tuple(classes), limit_depth, min_child_count, first_child_class)
        return self.poller.poll_one(
            node,
            lambda n: self.engine.match(n, criteria),
            self._policy(timeout, root),
            f"find_one_by_class {criteria.describe()}",
        )

    def find_all_by_class(
        self,
        node: Optional[Node],
        *classes: str,
        timeout: Optional[int] = None,
        root: bool = True,
        min_size: int = 1,
    ) -> NodeSet:
        return self.poller.poll_all(
            node,
            lambda n: self.engine.match_all_by_class(n, *classes),
            self._policy(timeout, root, min_size),
            f"find_all_by_class {ClassCriteria(tuple(classes)).describe()}",
        )

    # ---- by text ----

    def find_one_by_text(
        self,
        node: Optional[Node],
        *texts: str,
        exact: bool = False,
        timeout: Optional[int] = None,
        root: bool = True,
    ) -> Optional[Node]:
        return self.poller.poll_one(
            node,
            lambda n: self.engine.match_by_text(n, *texts, exact=exact),
            self._policy(timeout, root),
            f"find_one_by_text {TextCriteria(tuple(texts), exact).describe()}",
        )

    def find_all_by_text(
        self,
        node: Optional[Node],
        *texts: str,
        exact: bool = False,
        timeout: Optional[int] = None,
        root: bool = True,
        min_size: int = 1,
    ) -> NodeSet:
        return self.poller.poll_all(
            node,
            lambda n: self.engine.match_all_by_text(n, *texts, exact=exact),
            self._policy(timeout, root, min_size),
            f"find_all_by_text {TextCriteria(tuple(texts), exact).describe()}",
        )

    # ---- by content description ----

    def find_one_by_desc(
        self,
        node: Optional[Node],
        desc: str,
        timeout: Optional[int] = None,
        root: bool = True,
    ) -> Optional[Node]:
        if node is not None and node.content_description == desc:
            return node
        return self.poller.poll_one(
            node,
            lambda n: self.engine.match_by_desc(n, desc),
            self._policy(timeout, root),
            f"find_one_by_desc {DescCriteria(desc).describe()}",
        )

    def find_all_by_desc(
        self,
        node: Optional[Node],
        desc: str,
        timeout: Optional[int] = None,
        root: bool = True,
        min_size: int = 1,
    ) -> NodeSet:
        return self.poller.poll_all(
            node,
            lambda n: self.engine.match_all_by_desc(n, desc),
            self._policy(timeout, root, min_size),
            f"find_all_by_desc {DescCriteria(desc).describe()}",
        )

    # ---- by regex ----

    def find_one_by_regex(
        self,
        node: Optional[Node],
        pattern: str,
        timeout: Optional[int] = None,
        root: bool = True,
    ) -> Optional[Node]:
        criteria = RegexCriteria(pattern)
        return self.poller.poll_one(
            node,
            lambda n: self.engine.match(n, criteria),
            self._policy(timeout, root),
            f"find_one_by_regex {criteria.describe()}",
        )

    def find_all_by_regex(
        self,
        node: Optional[Node],
        pattern: str,
        timeout: Optional[int] = None,
        root: bool = True,
        min_size: int = 1,
    ) -> NodeSet:
        criteria = RegexCriteria(pattern)
        return self.poller.poll_all(
            node,
            lambda n: self.engine.match_all(n, criteria),
            self._policy(timeout, root, min_size),
            f"find_all_by_regex {criteria.describe()}",
        )


__all__ = ["NodeFinder"]
