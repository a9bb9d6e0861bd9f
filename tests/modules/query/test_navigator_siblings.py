from nodepilot.modules.query import Navigator
from nodepilot.modules.tree import MemoryNode


def test_siblings_of_flat_children():
    a, b, c = MemoryNode("a"), MemoryNode("b"), MemoryNode("c")
    root = MemoryNode("R", children=[a, b, c])
    nav = Navigator()
    assert nav.preceding_sibling(b) is a
    assert nav.following_sibling(b) is c
    assert nav.preceding_sibling(a) is None
    assert nav.following_sibling(c) is None


def test_climbs_to_ancestor_with_sibling():
    leaf = MemoryNode("leaf")
    first = MemoryNode("first")
    group = MemoryNode("group", children=[leaf])
    last = MemoryNode("last")
    root = MemoryNode("R", children=[first, group, last])
    nav = Navigator()
    assert nav.preceding_sibling(leaf) is first
    assert nav.following_sibling(leaf) is last
    assert nav.preceding_sibling(root) is None
    assert nav.preceding_sibling(None) is None


def test_preceding_min_child_count_repeats_search():
    full = MemoryNode("full", children=[MemoryNode("x"), MemoryNode("y")])
    empty = MemoryNode("empty")
    target = MemoryNode("target")
    root = MemoryNode("R", children=[full, empty, target])
    nav = Navigator()
    assert nav.preceding_sibling(target) is empty
    assert nav.preceding_sibling(target, min_child_count=2) is full
    assert nav.preceding_sibling(target, min_child_count=3) is None


def test_following_refinement_walks_backward():
    full = MemoryNode("full", children=[MemoryNode("x")])
    start = MemoryNode("start")
    after = MemoryNode("after")
    later = MemoryNode("later", children=[MemoryNode("z")])
    root = MemoryNode("R", children=[full, start, after, later])
    nav = Navigator()
    assert nav.following_sibling(start) is after
    # after has no children; escalation goes back (start, then full), never forward to later
    assert nav.following_sibling(start, min_child_count=1) is full


class _PlainNode:
    """Host node without index_in_parent; children compared by equality."""

    def __init__(self, key, children=()):
        self.key = key
        self.parent = None
        self._children = list(children)
        for child in self._children:
            child.parent = self

    @property
    def child_count(self):
        return len(self._children)

    def get_child(self, i):
        # fresh handle per fetch, like a host that does not cache
        original = self._children[i]
        copy = _PlainNode.__new__(_PlainNode)
        copy.__dict__.update(original.__dict__)
        return copy

    def __eq__(self, other):
        return isinstance(other, _PlainNode) and other.key == self.key

    __hash__ = object.__hash__


def test_equality_fallback_when_handles_are_not_identical():
    a, b, c = _PlainNode("a"), _PlainNode("b"), _PlainNode("c")
    root = _PlainNode("R", [a, b, c])
    nav = Navigator()
    assert nav.preceding_sibling(b) == a
    assert nav.following_sibling(b) == c
    assert nav.preceding_sibling(a) is None
