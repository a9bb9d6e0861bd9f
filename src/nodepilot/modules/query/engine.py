"""
Single-pass tree queries.

Every query is a depth-first pre-order walk (node before children,
children left to right) over one snapshot. Nothing here waits, refreshes
or mutates the tree; time-bounded variants live in ``finder``.
"""
from __future__ import annotations

from typing import Iterator, Optional, Sequence, Tuple

from ...core.logger import logger
from ..tree.nodeset import NodeSet
from ..tree.types import Node
from .criteria import ClassCriteria, Criteria, DescCriteria, RegexCriteria, TextCriteria


def walk(node: Optional[Node], start_depth: int = 0) -> Iterator[Tuple[Node, int]]:
    """Yield ``(node, depth)`` in pre-order using an explicit stack."""
    if node is None:
        return
    stack = [(node, start_depth)]
    while stack:
        current, depth = stack.pop()
        yield current, depth
        for i in range(current.child_count - 1, -1, -1):
            child = current.get_child(i)
            if child is not None:
                stack.append((child, depth + 1))


class QueryEngine:
    def match(self, node: Optional[Node], criteria: Criteria, *, start_depth: int = 0) -> Optional[Node]:
        for current, depth in walk(node, start_depth):
            if criteria.matches(current, depth):
                return current
        return None

    def match_all(self, node: Optional[Node], criteria: Criteria, *, start_depth: int = 0) -> NodeSet:
        return NodeSet(current for current, depth in walk(node, start_depth) if criteria.matches(current, depth))

    # ---- by class ----

    def match_by_class(
        self,
        node: Optional[Node],
        *classes: str,
        limit_depth: Optional[int] = None,
        min_child_count: int = 0,
        first_child_class: Optional[str] = None,
        start_depth: int = 0,
    ) -> Optional[Node]:
        criteria = ClassCriteria(tuple(classes), limit_depth, min_child_count, first_child_class)
        result = self.match(node, criteria, start_depth=start_depth)
        logger.trace("{} result == None: {}", criteria.describe(), result is None)
        return result

    def match_all_by_class(
        self,
        node: Optional[Node],
        *classes: str,
        limit_depth: Optional[int] = None,
        min_child_count: int = 0,
        first_child_class: Optional[str] = None,
    ) -> NodeSet:
        criteria = ClassCriteria(tuple(classes), limit_depth, min_child_count, first_child_class)
        result = self.match_all(node, criteria)
        logger.trace("{} count: {}", criteria.describe(), len(result))
        return result

    # ---- by text ----

    def match_all_by_text(self, node: Optional[Node], *texts: str, exact: bool = False) -> NodeSet:
        criteria = TextCriteria(tuple(texts), exact)
        result = self.match_all(node, criteria)
        logger.trace("{} count: {}", criteria.describe(), len(result))
        return result

    def match_by_text(self, node: Optional[Node], *texts: str, exact: bool = False) -> Optional[Node]:
        """First text match; in contains mode an exact-text hit wins over traversal order."""
        found = self.match_all_by_text(node, *texts, exact=exact)
        if not found:
            return None
        if not exact:
            for candidate in found:
                if candidate.text in texts:
                    return candidate
        return found[0]

    # ---- by content description ----

    def match_by_desc(self, node: Optional[Node], desc: str) -> Optional[Node]:
        return self.match(node, DescCriteria(desc))

    def match_all_by_desc(self, node: Optional[Node], desc: str) -> NodeSet:
        return self.match_all(node, DescCriteria(desc))

    # ---- by regex ----

    def match_all_by_regex(self, node: Optional[Node], pattern: str) -> NodeSet:
        criteria = RegexCriteria(pattern)
        result = self.match_all(node, criteria)
        logger.trace("{} count: {}", criteria.describe(), len(result))
        return result

    def match_by_regex(self, node: Optional[Node], pattern: str) -> Optional[Node]:
        return self.match_all_by_regex(node, pattern).first()

    # ---- capabilities ----

    def match_scrollable(self, node: Optional[Node]) -> NodeSet:
        return NodeSet(current for current, _ in walk(node) if current.scrollable)

    def match_first_child_of(self, node: Optional[Node], classes: Sequence[str], index: int = 0) -> Optional[Node]:
        """Child ``index`` of the first node whose class is in ``classes``."""
        container = self.match_by_class(node, *classes)
        if container is not None and container.child_count > index:
            return container.get_child(index)
        return None


__all__ = ["walk", "QueryEngine"]
