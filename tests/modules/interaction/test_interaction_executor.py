from nodepilot.modules.gesture import GestureSynthesizer
from nodepilot.modules.interaction import InteractionExecutor
from nodepilot.modules.tree import MemoryNode, Point, Rect


class _DummyHost:
    def __init__(self):
        self.dispatched = []

    def dispatch_gesture(self, gesture, callback=None):
        self.dispatched.append(gesture)
        return True

    def perform_global_action(self, action):
        return True

    def screen_width(self):
        return 1080

    def screen_height(self):
        return 1920


def _executor():
    host = _DummyHost()
    sleeps = []
    return InteractionExecutor(GestureSynthesizer(host), sleep=sleeps.append), host, sleeps


def test_click_climbs_to_clickable_grandparent():
    node = MemoryNode("Text")
    parent = MemoryNode("Row", children=[node])
    grandparent = MemoryNode("Card", clickable=True, children=[parent])
    executor, host, sleeps = _executor()
    assert executor.click(node) is True
    assert grandparent.actions == [("click",)]
    assert node.actions == [] and parent.actions == []
    assert host.dispatched == []


def test_click_falls_back_to_tap_but_reports_failure():
    node = MemoryNode("Text", bounds=Rect(0, 0, 100, 50))
    root = MemoryNode("Root", children=[node])
    executor, host, sleeps = _executor()
    assert executor.click(node) is False
    assert sleeps == [0.3]
    assert node.refresh_count == 1
    (gesture,) = host.dispatched
    assert gesture.strokes[0].path == (Point(50, 25),)
    assert root.actions == []


def test_click_without_retry_does_not_tap():
    executor, host, sleeps = _executor()
    assert executor.click(MemoryNode("Text"), retry=False) is False
    assert host.dispatched == [] and sleeps == []


def test_click_none():
    executor, host, sleeps = _executor()
    assert executor.click(None) is False


def test_click_with_descendant_preorder():
    deep = MemoryNode("Deep", clickable=True)
    first = MemoryNode("First", children=[deep])
    second = MemoryNode("Second", clickable=True)
    root = MemoryNode("Root", children=[first, second])
    executor, host, sleeps = _executor()
    assert executor.click_with_descendant(root) is True
    assert deep.actions == [("click",)]
    assert second.actions == []


def test_click_with_descendant_prefers_node_itself():
    child = MemoryNode("Child", clickable=True)
    root = MemoryNode("Root", clickable=True, children=[child])
    executor, host, sleeps = _executor()
    assert executor.click_with_descendant(root) is True
    assert root.actions == [("click",)]


def test_click_with_descendant_nothing_clickable():
    root = MemoryNode("Root", children=[MemoryNode("a"), MemoryNode("b")])
    executor, host, sleeps = _executor()
    assert executor.click_with_descendant(root) is False


def test_long_click_variants():
    node = MemoryNode("Text")
    parent = MemoryNode("Row", long_clickable=True, children=[node])
    executor, host, sleeps = _executor()
    assert executor.long_click(node) is True
    assert parent.actions == [("long_click",)]

    inner = MemoryNode("Inner", long_clickable=True)
    outer = MemoryNode("Outer", children=[inner])
    assert executor.long_click_with_descendant(outer) is True
    assert inner.actions == [("long_click",)]


def test_long_click_fallback_press_only_when_requested():
    node = MemoryNode("Text", bounds=Rect(0, 0, 10, 10))
    executor, host, sleeps = _executor()
    assert executor.long_click(node) is False
    assert host.dispatched == []
    assert executor.long_click(node, retry=True) is False
    assert host.dispatched[0].strokes[0].duration_ms == 600


def test_scroll_ancestor():
    node = MemoryNode("Item")
    container = MemoryNode("List", scrollable=True, children=[node])
    executor, host, sleeps = _executor()
    assert executor.scroll_down(node) is True
    assert executor.scroll_up(node) is True
    assert container.actions == [("scroll_forward",), ("scroll_backward",)]
    assert executor.scroll_up(MemoryNode("Lonely")) is False


def test_scroll_indexed_targets_nth_scrollable_and_settles():
    first = MemoryNode("First", scrollable=True)
    second = MemoryNode("Second", scrollable=True)
    root = MemoryNode("Root", children=[first, second])
    executor, host, sleeps = _executor()
    assert executor.scroll_down_indexed(root, 1) is True
    assert second.actions == [("scroll_forward",)]
    assert first.actions == []
    assert sleeps == [0.5]
    assert executor.scroll_up_indexed(root, 0) is True
    assert first.actions == [("scroll_backward",)]
    assert executor.scroll_up_indexed(root, 2) is False
    assert len(sleeps) == 2


def test_set_text_replace_and_append():
    edit = MemoryNode("android.widget.EditText", text="hello")
    executor, host, sleeps = _executor()
    assert executor.set_text(edit, " world", append=True) is True
    assert edit.text == "hello world"
    assert executor.set_text(edit, "bye") is True
    assert edit.actions[-1] == ("set_text", "bye")
    assert edit.refresh_count == 2


def test_set_text_on_empty_field_appends_to_nothing():
    edit = MemoryNode("android.widget.EditText")
    executor, host, sleeps = _executor()
    executor.set_text(edit, "x", append=True)
    assert edit.text == "x"


def test_input_text_skips_refresh():
    edit = MemoryNode("android.widget.EditText", text="old")
    executor, host, sleeps = _executor()
    assert executor.input_text(edit, "new") is True
    assert edit.refresh_count == 0
    assert executor.input_text(None, "x") is False
