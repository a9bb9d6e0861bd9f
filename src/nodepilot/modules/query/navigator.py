"""
Sibling lookup by climbing parent references.

A child's position is resolved from ``index_in_parent`` when the host
provides it; otherwise the parent's children are scanned for the same
handle (identity, then equality). Levels where the position cannot be
resolved are skipped.
"""
from __future__ import annotations

from typing import Optional

from ...core.logger import logger
from ..tree.types import Node


def _index_of(parent: Node, son: Node) -> Optional[int]:
    index = getattr(son, "index_in_parent", None)
    if index is not None and 0 <= index < parent.child_count:
        return index
    for i in range(parent.child_count):
        child = parent.get_child(i)
        if child is son or (child is not None and child == son):
            return i
    logger.debug("child position unresolved under {}", parent.class_name)
    return None


class Navigator:
    def _preceding_once(self, node: Optional[Node]) -> Optional[Node]:
        if node is None:
            return None
        son = node
        parent = node.parent
        while parent is not None:
            index = _index_of(parent, son)
            if index is not None and index > 0:
                return parent.get_child(index - 1)
            son = parent
            parent = parent.parent
        return None

    def _following_once(self, node: Optional[Node]) -> Optional[Node]:
        if node is None:
            return None
        son = node
        parent = node.parent
        while parent is not None:
            index = _index_of(parent, son)
            if index is not None and index < parent.child_count - 1:
                return parent.get_child(index + 1)
            son = parent
            parent = parent.parent
        return None

    def preceding_sibling(self, node: Optional[Node], min_child_count: int = 0) -> Optional[Node]:
        """Nearest preceding sibling of node or of its closest ancestor that has one.

        While the result has fewer than ``min_child_count`` children the
        search repeats from the result.
        """
        result = self._preceding_once(node)
        while result is not None and result.child_count < min_child_count:
            result = self._preceding_once(result)
        return result

    def following_sibling(self, node: Optional[Node], min_child_count: int = 0) -> Optional[Node]:
        """Nearest following sibling, climbing like ``preceding_sibling``.

        Only the first hop moves forward. If that sibling has too few
        children the refinement walks *backward* from it, same as the
        legacy automation scripts relied on.
        """
        result = self._following_once(node)
        while result is not None and result.child_count < min_child_count:
            result = self._preceding_once(result)
        return result


__all__ = ["Navigator"]
