"""
Match criteria: a tagged variant of frozen dataclasses.

Each criteria answers ``matches(node, depth)`` for one node of a snapshot
and ``describe()`` for not-found logging. Matching is stateless.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..tree.types import Node


@dataclass(frozen=True)
class ClassCriteria:
    classes: Tuple[str, ...]
    limit_depth: Optional[int] = None  # match only at exactly this depth
    min_child_count: int = 0
    first_child_class: Optional[str] = None

    def matches(self, node: Node, depth: int) -> bool:
        if node.class_name not in self.classes:
            return False
        if self.limit_depth is not None and self.limit_depth != depth:
            return False
        if node.child_count < self.min_child_count:
            return False
        if self.first_child_class is not None:
            if node.child_count == 0:
                return False
            first = node.get_child(0)
            return first is not None and first.class_name == self.first_child_class
        return True

    def describe(self) -> str:
        return "clazz: " + ", ".join(self.classes)


@dataclass(frozen=True)
class TextCriteria:
    texts: Tuple[str, ...]
    exact: bool = False

    def matches(self, node: Node, depth: int = 0) -> bool:
        node_text = node.text
        if node_text is None:
            return False
        if self.exact:
            return node_text in self.texts
        return any(t in node_text for t in self.texts)

    def describe(self) -> str:
        return "text: " + ", ".join(self.texts)


@dataclass(frozen=True)
class DescCriteria:
    desc: str

    def matches(self, node: Node, depth: int = 0) -> bool:
        return node.content_description == self.desc

    def describe(self) -> str:
        return f"desc: {self.desc}"


@dataclass(frozen=True)
class RegexCriteria:
    pattern: str

    def __post_init__(self) -> None:
        # fail fast on a bad pattern instead of on every node
        re.compile(self.pattern)

    def matches(self, node: Node, depth: int = 0) -> bool:
        node_text = node.text
        return node_text is not None and re.fullmatch(self.pattern, node_text) is not None

    def describe(self) -> str:
        return f"regex: {self.pattern}"


Criteria = Union[ClassCriteria, TextCriteria, DescCriteria, RegexCriteria]

__all__ = ["ClassCriteria", "TextCriteria", "DescCriteria", "RegexCriteria", "Criteria"]
