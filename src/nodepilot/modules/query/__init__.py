from .criteria import ClassCriteria, TextCriteria, DescCriteria, RegexCriteria, Criteria
from .engine import QueryEngine, walk
from .navigator import Navigator
from .finder import NodeFinder

__all__ = [
    "ClassCriteria",
    "TextCriteria",
    "DescCriteria",
    "RegexCriteria",
    "Criteria",
    "QueryEngine",
    "walk",
    "Navigator",
    "NodeFinder",
]
