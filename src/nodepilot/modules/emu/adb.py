"""
ADB 适配封装

提供设备侧基础操作：
- tap(addr, x, y) / swipe(addr, x1, y1, x2, y2, dur_ms)
- keyevent(addr, code) / input_text(addr, text)
- dump_ui_xml(addr) -> uiautomator XML
- screen_size(addr) -> (width, height)
- shell(addr, cmd)
"""
from __future__ import annotations

import re
import subprocess
from typing import List, Optional, Tuple

from ...core.config import settings

_SIZE_RE = re.compile(r"(Physical|Override) size:\s*(\d+)x(\d+)")
# adb shell input text 需要转义的字符
_INPUT_SPECIAL = set("\\()<>|;&*~\"'`$#?[]{}!")


class AdbError(RuntimeError):
    pass


def escape_input_text(text: str) -> str:
    """转义 `input text` 参数：空格写作 %s，shell 元字符加反斜杠"""
    out = []
    for ch in text:
        if ch == " ":
            out.append("%s")
        elif ch in _INPUT_SPECIAL:
            out.append("\\" + ch)
        else:
            out.append(ch)
    return "".join(out)


class Adb:
    def __init__(self, adb_path: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.adb = adb_path or settings.adb_path
        self.timeout = settings.adb_timeout_sec if timeout is None else timeout

    def _run(self, args: List[str], timeout: Optional[float] = None) -> subprocess.CompletedProcess:
        try:
            cp = subprocess.run(
                [self.adb, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=timeout or self.timeout,
            )
        except FileNotFoundError as e:
            raise AdbError(f"找不到 ADB 可执行文件: {self.adb}") from e
        except subprocess.TimeoutExpired as e:
            raise AdbError(f"ADB 命令超时: {' '.join(args)}") from e
        return cp

    def _check(self, cp: subprocess.CompletedProcess) -> str:
        if cp.returncode != 0:
            raise AdbError((cp.stderr or b"").decode(errors="ignore").strip() or f"exit {cp.returncode}")
        return (cp.stdout or b"").decode(errors="ignore")

    def tap(self, addr: str, x: int, y: int) -> None:
        self._check(self._run(["-s", addr, "shell", "input", "tap", str(x), str(y)]))

    def swipe(self, addr: str, x1: int, y1: int, x2: int, y2: int, dur_ms: int = 300) -> None:
        # swipe 需要等待手势执行完毕，超时放宽
        self._check(
            self._run(
                ["-s", addr, "shell", "input", "swipe", str(x1), str(y1), str(x2), str(y2), str(dur_ms)],
                timeout=self.timeout + dur_ms / 1000.0,
            )
        )

    def keyevent(self, addr: str, code: int) -> None:
        self._check(self._run(["-s", addr, "shell", "input", "keyevent", str(code)]))

    def input_text(self, addr: str, text: str) -> None:
        if not text:
            return
        self._check(self._run(["-s", addr, "shell", "input", "text", escape_input_text(text)]))

    def dump_ui_xml(self, addr: str) -> str:
        """uiautomator dump 输出到 /dev/tty，直接读取 XML 文本"""
        out = self._check(self._run(["-s", addr, "exec-out", "uiautomator", "dump", "/dev/tty"], timeout=self.timeout * 2))
        start = out.find("<?xml")
        if start < 0:
            start = out.find("<hierarchy")
        if start < 0:
            raise AdbError(f"uiautomator dump 无有效输出: {out.strip()[:200]}")
        return out[start:]

    def screen_size(self, addr: str) -> Tuple[int, int]:
        """解析 wm size，存在 Override size 时优先使用"""
        out = self._check(self._run(["-s", addr, "shell", "wm", "size"]))
        sizes = {kind: (int(w), int(h)) for kind, w, h in _SIZE_RE.findall(out)}
        if "Override" in sizes:
            return sizes["Override"]
        if "Physical" in sizes:
            return sizes["Physical"]
        raise AdbError(f"无法解析屏幕尺寸: {out.strip()}")

    def shell(self, addr: str, cmd: str) -> Tuple[int, str]:
        """执行 adb shell 命令，返回 (returncode, output)"""
        cp = self._run(["-s", addr, "shell", cmd])
        out = (cp.stdout or b"").decode(errors="ignore")
        return cp.returncode, out
