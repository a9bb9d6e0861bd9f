"""
ADB host dispatcher.

Gestures are injected with ``input tap`` / ``input swipe`` on a dedicated
single-thread pool per device (key ``<addr>#input``), so dispatch returns
as soon as the request is queued and never waits behind an engine call
running on the device's own pool. Strokes of one gesture run one after
another; adb has no multi-touch injection.
"""
from __future__ import annotations

import time
from concurrent.futures import Future
from typing import Optional, Tuple

from ...core.config import settings
from ...core.constants import KEYCODE_APP_SWITCH, KEYCODE_BACK, KEYCODE_HOME, GlobalAction
from ...core.logger import logger
from ...core.thread_pool import submit_device_io
from ..gesture.types import Gesture, GestureCallback
from .adb import Adb, AdbError

# 短于该时长的原地按压用 input tap，否则用同点 swipe 模拟长按
PRESS_AS_SWIPE_MS = 300

_GLOBAL_KEYCODES = {
    GlobalAction.BACK: KEYCODE_BACK,
    GlobalAction.HOME: KEYCODE_HOME,
    GlobalAction.RECENTS: KEYCODE_APP_SWITCH,
}


class AdbHost:
    def __init__(self, adb: Optional[Adb] = None, addr: Optional[str] = None) -> None:
        self.adb = adb or Adb()
        self.addr = addr if addr is not None else settings.adb_addr
        self._screen: Optional[Tuple[int, int]] = None

    @property
    def input_key(self) -> str:
        return f"{self.addr}#input"

    # ---- global actions ----

    def perform_global_action(self, action: GlobalAction) -> bool:
        try:
            if action == GlobalAction.NOTIFICATIONS:
                code, _ = self.adb.shell(self.addr, "cmd statusbar expand-notifications")
                return code == 0
            self.adb.keyevent(self.addr, _GLOBAL_KEYCODES[action])
            return True
        except AdbError as e:
            logger.error("global action {} failed: {}", action.value, e)
            return False

    # ---- gestures ----

    def _perform(self, gesture: Gesture) -> None:
        for stroke in gesture.strokes:
            if stroke.start_delay_ms:
                time.sleep(stroke.start_delay_ms / 1000.0)
            x1, y1 = int(stroke.start.x), int(stroke.start.y)
            if stroke.is_press and stroke.duration_ms < PRESS_AS_SWIPE_MS:
                self.adb.tap(self.addr, x1, y1)
            else:
                x2, y2 = int(stroke.end.x), int(stroke.end.y)
                self.adb.swipe(self.addr, x1, y1, x2, y2, stroke.duration_ms)

    def _notify(self, future: Future, gesture: Gesture, callback: Optional[GestureCallback]) -> None:
        error = None if future.cancelled() else future.exception()
        if future.cancelled() or error is not None:
            logger.debug("gesture cancelled on {}: {}", self.addr, error)
            if callback is not None:
                callback.on_cancelled(gesture)
        elif callback is not None:
            callback.on_completed(gesture)

    def dispatch_gesture(self, gesture: Gesture, callback: Optional[GestureCallback] = None) -> bool:
        if not self.addr:
            logger.error("gesture rejected: no adb device address configured")
            return False
        try:
            future = submit_device_io(self.input_key, self._perform, gesture)
        except RuntimeError as e:
            # pool already shut down
            logger.error("gesture rejected on {}: {}", self.addr, e)
            return False
        future.add_done_callback(lambda f: self._notify(f, gesture, callback))
        return True

    # ---- screen ----

    def _screen_size(self) -> Tuple[int, int]:
        if self._screen is None:
            self._screen = self.adb.screen_size(self.addr)
        return self._screen

    def screen_width(self) -> int:
        return self._screen_size()[0]

    def screen_height(self) -> int:
        return self._screen_size()[1]


__all__ = ["AdbHost", "PRESS_AS_SWIPE_MS"]
