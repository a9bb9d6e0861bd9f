from nodepilot.core.constants import GlobalAction
from nodepilot.modules.toolkit import AccessibilityToolkit
from nodepilot.modules.tree import MemoryNode, MemoryRootProvider


class _FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


class _DummyHost:
    def __init__(self):
        self.dispatched = []
        self.global_actions = []

    def dispatch_gesture(self, gesture, callback=None):
        self.dispatched.append(gesture)
        return True

    def perform_global_action(self, action):
        self.global_actions.append(action)
        return True

    def screen_width(self):
        return 1080

    def screen_height(self):
        return 1920


def _screen():
    send = MemoryNode("android.widget.TextView", text="Send")
    button = MemoryNode("android.widget.FrameLayout", clickable=True, children=[send])
    edit = MemoryNode("android.widget.EditText", text="draft")
    items = [MemoryNode("android.widget.LinearLayout", clickable=True) for _ in range(3)]
    recycler = MemoryNode("androidx.recyclerview.widget.RecyclerView", children=items)
    root = MemoryNode("android.widget.FrameLayout", children=[recycler, edit, button])
    return root, dict(send=send, button=button, edit=edit, items=items)


def _toolkit(root):
    clock = _FakeClock()
    host = _DummyHost()
    toolkit = AccessibilityToolkit(host, MemoryRootProvider(root), clock=clock, sleep=clock.sleep)
    return toolkit, host, clock


def test_find_text_and_click_clicks_clickable_ancestor():
    root, n = _screen()
    toolkit, host, clock = _toolkit(root)
    assert toolkit.find_text_and_click(root, "Send") is True
    assert n["button"].actions == [("click",)]


def test_find_text_and_click_missing_text():
    root, n = _screen()
    toolkit, host, clock = _toolkit(root)
    assert toolkit.find_text_and_click(root, "Nope") is False
    assert clock.now >= 5.0


def test_find_text_input_append_and_single_pass():
    root, n = _screen()
    toolkit, host, clock = _toolkit(root)
    assert toolkit.find_text_input(root, "!", append=True) is True
    assert n["edit"].text == "draft!"
    assert toolkit.find_text_input(root, "x", root=False) is True
    assert n["edit"].text == "x"


def test_find_text_input_without_edit_text_single_pass_is_immediate():
    toolkit, host, clock = _toolkit(MemoryNode("Root"))
    assert toolkit.find_text_input(toolkit.root(), "x", root=False) is False
    assert clock.now == 0.0


def test_find_list_one_and_click():
    root, n = _screen()
    toolkit, host, clock = _toolkit(root)
    assert toolkit.find_list_one_and_click(root, 2) is True
    assert n["items"][2].actions == [("click",)]
    assert toolkit.find_list_one_and_click(root, 3) is False


def test_global_pass_throughs():
    root, n = _screen()
    toolkit, host, clock = _toolkit(root)
    assert toolkit.global_back() is True
    assert toolkit.global_home() is True
    assert host.global_actions == [GlobalAction.BACK, GlobalAction.HOME]


def test_siblings_through_navigator():
    root, n = _screen()
    toolkit, host, clock = _toolkit(root)
    assert toolkit.navigator.preceding_sibling(n["edit"], min_child_count=3).class_name.endswith("RecyclerView")
