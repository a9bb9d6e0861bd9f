"""
设备 I/O 线程池管理

引擎本身是同步阻塞的。需要并发驱动多台设备的调用方，
通过本模块把阻塞调用 offload 到线程池：

- 共享 I/O 池：没有设备键的阻塞调用
- 设备 I/O 池：每台设备一个单线程池，保证同一设备上的操作串行执行
"""
from __future__ import annotations

import asyncio
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Optional

from .config import settings
from .logger import logger

_io_pool: Optional[ThreadPoolExecutor] = None
_device_io_pools: Dict[str, ThreadPoolExecutor] = {}
_device_io_lock = threading.Lock()


def _auto_io_pool_size() -> int:
    """根据 CPU 核数自动计算 I/O 线程池大小。

    规则: max(8, cpu_count * 2)，上限 32。
    """
    cpu = os.cpu_count() or 4
    return min(max(8, cpu * 2), 32)


def get_io_pool() -> ThreadPoolExecutor:
    """获取共享 I/O 线程池。"""
    global _io_pool
    with _device_io_lock:
        if _io_pool is None:
            size = settings.io_thread_pool_size
            if size <= 0:
                size = _auto_io_pool_size()
            _io_pool = ThreadPoolExecutor(
                max_workers=size,
                thread_name_prefix="np-io",
            )
            logger.info("I/O 线程池已创建: max_workers={}", size)
        return _io_pool


def get_device_io_pool(io_key: str) -> ThreadPoolExecutor:
    """获取指定设备的单线程 I/O 池。"""
    key = str(io_key or "").strip()
    if not key:
        return get_io_pool()

    with _device_io_lock:
        pool = _device_io_pools.get(key)
        if pool is None:
            index = len(_device_io_pools) + 1
            pool = ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix=f"device-io-{index}",
            )
            _device_io_pools[key] = pool
            logger.info("设备 I/O 线程池已创建: io_key={}", key)
        return pool


def submit_device_io(io_key: str, func, *args) -> Future:
    """提交到设备 I/O 池，立即返回 Future（不等待完成）。"""
    return get_device_io_pool(io_key).submit(func, *args)


async def run_in_io(func, *args):
    """在共享 I/O 线程池中执行同步函数并 await 结果。"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(get_io_pool(), func, *args)


async def run_in_device_io(io_key: str, func, *args):
    """在指定设备的单线程 I/O 池中执行同步函数并 await 结果。"""
    key = str(io_key or "").strip()
    if not key:
        return await run_in_io(func, *args)

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(get_device_io_pool(key), func, *args)


def shutdown_pools() -> None:
    """关闭所有线程池。"""
    global _io_pool
    with _device_io_lock:
        if _io_pool:
            _io_pool.shutdown(wait=False)
            _io_pool = None
        for pool in _device_io_pools.values():
            pool.shutdown(wait=False)
        _device_io_pools.clear()
    logger.info("线程池已关闭")
