import re

import pytest

from nodepilot.modules.query import QueryEngine, walk
from nodepilot.modules.tree import MemoryNode


def _screen():
    """
    Root(Frame)
      List(ListView)
        Item(Text "XAY")
        Item(Text "A")
      Panel(Linear)
        Btn(Button desc "send")
        Edit(EditText "hello")
      List2(ListView) -> child TextView
    """
    xay = MemoryNode("android.widget.TextView", text="XAY")
    a = MemoryNode("android.widget.TextView", text="A")
    list1 = MemoryNode("android.widget.ListView", children=[xay, a])
    btn = MemoryNode("android.widget.Button", content_description="send", clickable=True)
    edit = MemoryNode("android.widget.EditText", text="hello")
    panel = MemoryNode("android.widget.LinearLayout", children=[btn, edit])
    list2 = MemoryNode("android.widget.ListView", children=[MemoryNode("android.widget.TextView", text="B")])
    root = MemoryNode("android.widget.FrameLayout", children=[list1, panel, list2])
    return root, dict(xay=xay, a=a, list1=list1, btn=btn, edit=edit, panel=panel, list2=list2)


def test_walk_is_preorder_with_depth():
    root, n = _screen()
    order = [(node, depth) for node, depth in walk(root)]
    assert order[0] == (root, 0)
    assert [node for node, _ in order[1:4]] == [n["list1"], n["xay"], n["a"]]
    assert order[2][1] == 2
    assert list(walk(None)) == []


def test_match_all_by_class_in_preorder():
    root, n = _screen()
    engine = QueryEngine()
    found = engine.match_all_by_class(root, "android.widget.TextView", "android.widget.EditText")
    assert [node.text for node in found] == ["XAY", "A", "hello", "B"]


def test_match_by_class_is_first_of_match_all():
    root, n = _screen()
    engine = QueryEngine()
    found = engine.match_all_by_class(root, "android.widget.ListView")
    assert engine.match_by_class(root, "android.widget.ListView") is found[0]


def test_match_by_class_depth_and_child_constraints():
    root, n = _screen()
    engine = QueryEngine()
    assert engine.match_by_class(root, "android.widget.TextView", limit_depth=1) is None
    assert engine.match_by_class(root, "android.widget.TextView", limit_depth=2) is n["xay"]
    assert engine.match_by_class(root, "android.widget.ListView", min_child_count=2) is n["list1"]
    assert engine.match_by_class(root, "android.widget.ListView", min_child_count=3) is None
    assert engine.match_by_class(
        root, "android.widget.LinearLayout", first_child_class="android.widget.Button"
    ) is n["panel"]
    assert engine.match_by_class(
        root, "android.widget.LinearLayout", first_child_class="android.widget.TextView"
    ) is None


def test_first_child_class_requires_children():
    engine = QueryEngine()
    leaf = MemoryNode("android.widget.ListView")
    assert engine.match_by_class(leaf, "android.widget.ListView", first_child_class="x") is None


def test_contains_vs_exact_text():
    root, n = _screen()
    engine = QueryEngine()
    contains = engine.match_all_by_text(root, "A", "B")
    assert n["xay"] in contains
    exact = engine.match_all_by_text(root, "A", "B", exact=True)
    assert n["xay"] not in exact
    assert [node.text for node in exact] == ["A", "B"]


def test_node_matching_several_candidates_listed_once():
    engine = QueryEngine()
    root = MemoryNode("Root", children=[MemoryNode("T", text="AB")])
    assert len(engine.match_all_by_text(root, "A", "B")) == 1


def test_match_by_text_prefers_exact_text_over_order():
    root, n = _screen()
    engine = QueryEngine()
    assert engine.match_by_text(root, "A") is n["a"]
    assert engine.match_by_text(root, "X") is n["xay"]
    assert engine.match_by_text(root, "nothing") is None


def test_match_by_text_exact_returns_first():
    root, n = _screen()
    engine = QueryEngine()
    assert engine.match_by_text(root, "B", "A", exact=True) is n["a"]


def test_desc_queries():
    root, n = _screen()
    engine = QueryEngine()
    assert engine.match_by_desc(root, "send") is n["btn"]
    assert engine.match_by_desc(root, "sen") is None
    assert list(engine.match_all_by_desc(root, "send")) == [n["btn"]]


def test_regex_is_whole_string():
    root, n = _screen()
    engine = QueryEngine()
    assert engine.match_by_regex(root, "X.Y") is n["xay"]
    assert engine.match_by_regex(root, "A") is n["a"]
    assert [node.text for node in engine.match_all_by_regex(root, "[AB]")] == ["A", "B"]
    assert engine.match_by_regex(root, "hel") is None


def test_invalid_regex_raises():
    with pytest.raises(re.error):
        QueryEngine().match_by_regex(MemoryNode("Root"), "(")


def test_match_scrollable_collects_preorder():
    inner = MemoryNode("Inner", scrollable=True)
    outer = MemoryNode("Outer", scrollable=True, children=[inner])
    root = MemoryNode("Root", children=[outer, MemoryNode("Other", scrollable=True)])
    found = QueryEngine().match_scrollable(root)
    assert [node.class_name for node in found] == ["Outer", "Inner", "Other"]


def test_match_all_idempotent_on_unmutated_snapshot():
    root, n = _screen()
    engine = QueryEngine()
    first = engine.match_all_by_class(root, "android.widget.TextView")
    second = engine.match_all_by_class(root, "android.widget.TextView")
    assert first == second
    assert root.actions == []


def test_match_first_child_of():
    root, n = _screen()
    engine = QueryEngine()
    assert engine.match_first_child_of(root, ("android.widget.ListView",), 1) is n["a"]
    assert engine.match_first_child_of(root, ("android.widget.ListView",), 5) is None
