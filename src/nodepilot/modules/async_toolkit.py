"""
异步 AccessibilityToolkit 包装器

引擎是同步阻塞的（轮询 sleep 在调用线程上执行）。本包装器把每次调用
offload 到该设备的单线程 I/O 池，asyncio 中多设备流程互不阻塞，
同一设备上的调用保持串行。取消需由调用方在外部实现。

使用方式：
    toolkit = AccessibilityToolkit(host, provider)
    async_toolkit = AsyncAccessibilityToolkit(toolkit, io_key="127.0.0.1:16384")
    node = await async_toolkit.find_one_by_text(None, "发送")
"""
from __future__ import annotations

import functools
from typing import Optional

from ..core.thread_pool import run_in_device_io
from .tree.nodeset import NodeSet
from .tree.types import Node
from .toolkit import AccessibilityToolkit


class AsyncAccessibilityToolkit:
    """AccessibilityToolkit 的异步代理。

    node 参数为 None 的查找会先在工作线程上获取当前根节点。
    """

    def __init__(self, toolkit: AccessibilityToolkit, io_key: str = "") -> None:
        self._sync = toolkit
        self._io_key = io_key

    @property
    def sync(self) -> AccessibilityToolkit:
        """获取底层同步 toolkit。"""
        return self._sync

    async def _run(self, func, *args, **kwargs):
        if kwargs:
            func = functools.partial(func, **kwargs)
        return await run_in_device_io(self._io_key, func, *args)

    def _with_root(self, func):
        def call(node, *args, **kwargs):
            if node is None:
                node = self._sync.root()
            return func(node, *args, **kwargs)

        return call

    # ── 查找 ──

    async def root(self, force_refresh: bool = False) -> Optional[Node]:
        return await self._run(self._sync.root, force_refresh)

    async def find_one_by_text(self, node: Optional[Node], *texts: str, **kwargs) -> Optional[Node]:
        return await self._run(self._with_root(self._sync.finder.find_one_by_text), node, *texts, **kwargs)

    async def find_all_by_text(self, node: Optional[Node], *texts: str, **kwargs) -> NodeSet:
        return await self._run(self._with_root(self._sync.finder.find_all_by_text), node, *texts, **kwargs)

    async def find_one_by_class(self, node: Optional[Node], *classes: str, **kwargs) -> Optional[Node]:
        return await self._run(self._with_root(self._sync.finder.find_one_by_class), node, *classes, **kwargs)

    async def find_all_by_class(self, node: Optional[Node], *classes: str, **kwargs) -> NodeSet:
        return await self._run(self._with_root(self._sync.finder.find_all_by_class), node, *classes, **kwargs)

    async def find_one_by_desc(self, node: Optional[Node], desc: str, **kwargs) -> Optional[Node]:
        return await self._run(self._with_root(self._sync.finder.find_one_by_desc), node, desc, **kwargs)

    async def find_one_by_regex(self, node: Optional[Node], pattern: str, **kwargs) -> Optional[Node]:
        return await self._run(self._with_root(self._sync.finder.find_one_by_regex), node, pattern, **kwargs)

    async def scroll_and_find(self, node: Optional[Node], *texts: str, **kwargs) -> Optional[Node]:
        return await self._run(self._with_root(self._sync.scroll_and_find), node, *texts, **kwargs)

    # ── 交互 ──

    async def click(self, node: Optional[Node], retry: bool = True) -> bool:
        return await self._run(self._sync.executor.click, node, retry)

    async def long_click(self, node: Optional[Node], retry: bool = False) -> bool:
        return await self._run(self._sync.executor.long_click, node, retry)

    async def set_text(self, node: Optional[Node], text: str, append: bool = False) -> bool:
        return await self._run(self._sync.executor.set_text, node, text, append)

    async def find_text_and_click(self, node: Optional[Node], *texts: str, **kwargs) -> bool:
        return await self._run(self._with_root(self._sync.find_text_and_click), node, *texts, **kwargs)

    async def find_text_input(self, node: Optional[Node], text: str, **kwargs) -> bool:
        return await self._run(self._with_root(self._sync.find_text_input), node, text, **kwargs)

    async def global_back(self) -> bool:
        return await self._run(self._sync.global_back)

    async def global_home(self) -> bool:
        return await self._run(self._sync.global_home)


__all__ = ["AsyncAccessibilityToolkit"]
