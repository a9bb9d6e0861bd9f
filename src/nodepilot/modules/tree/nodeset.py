from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import overload

from .types import Node


class NodeSet(Sequence):
    """Immutable, insertion-ordered collection of nodes.

    Membership is by identity: adding the same handle twice keeps the first
    position only. Indexing follows traversal order.
    """

    __slots__ = ("_items", "_ids")

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        items = []
        ids = set()
        for node in nodes:
            if id(node) in ids:
                continue
            ids.add(id(node))
            items.append(node)
        self._items = tuple(items)
        self._ids = frozenset(ids)

    @overload
    def __getitem__(self, index: int) -> Node: ...

    @overload
    def __getitem__(self, index: slice) -> "NodeSet": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return NodeSet(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._items)

    def __contains__(self, node: object) -> bool:
        return id(node) in self._ids

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeSet):
            return NotImplemented
        return len(self) == len(other) and all(a is b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(id(n) for n in self._items))

    def __repr__(self) -> str:
        return f"NodeSet({len(self._items)} nodes)"

    def first(self):
        return self._items[0] if self._items else None


EMPTY = NodeSet()

__all__ = ["NodeSet", "EMPTY"]
