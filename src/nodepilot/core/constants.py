"""
常量和枚举定义
"""
from enum import Enum


class RefreshMode(str, Enum):
    """轮询失败后的刷新方式"""
    ROOT = "root"  # 重新获取根节点快照
    NODE = "node"  # 刷新当前节点


class GlobalAction(str, Enum):
    """全局操作"""
    BACK = "back"
    HOME = "home"
    RECENTS = "recents"
    NOTIFICATIONS = "notifications"


class ScrollPhase(str, Enum):
    """滚动查找阶段（顺序即执行顺序）"""
    NATIVE_FORWARD = "native_forward"
    NATIVE_BACKWARD = "native_backward"
    SYNTHETIC_UP = "synthetic_up"
    SYNTHETIC_DOWN = "synthetic_down"


# 各阶段重试次数 = max_retry * 倍数
SCROLL_PHASE_MULTIPLIERS = (
    (ScrollPhase.NATIVE_FORWARD, 1),
    (ScrollPhase.NATIVE_BACKWARD, 2),
    (ScrollPhase.SYNTHETIC_UP, 2),
    (ScrollPhase.SYNTHETIC_DOWN, 3),
)

# 控件类名
EDIT_TEXT = "android.widget.EditText"
LIST_VIEW = "android.widget.ListView"
RECYCLER_VIEW = "androidx.recyclerview.widget.RecyclerView"
LIST_CLASSES = (RECYCLER_VIEW, LIST_VIEW)

# ADB 按键码
KEYCODE_HOME = 3
KEYCODE_BACK = 4
KEYCODE_DEL = 67
KEYCODE_MOVE_END = 123
KEYCODE_APP_SWITCH = 187
