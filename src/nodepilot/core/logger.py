"""
日志配置模块
"""
import sys
import threading
from pathlib import Path

from loguru import logger

from .config import settings

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

_setup_lock = threading.Lock()
_configured = False
_device_sinks: dict = {}


def _console_stream():
    for stream in (sys.stdout, sys.stderr, sys.__stdout__, sys.__stderr__):
        if stream is not None:
            return stream
    return None


def setup_logger(force: bool = False):
    """配置日志系统，重复调用时仅在 force=True 时重建处理器"""
    global _configured
    with _setup_lock:
        if _configured and not force:
            return logger

        # 移除默认处理器
        logger.remove()
        _device_sinks.clear()

        log_dir = Path(settings.log_path)
        log_dir.mkdir(parents=True, exist_ok=True)

        # 控制台输出
        console_missing = False
        if settings.log_console_enabled:
            stream = _console_stream()
            if stream is not None:
                logger.add(stream, level=settings.log_level, format=_CONSOLE_FORMAT)
            else:
                console_missing = True

        # 文件输出 - 全局日志
        logger.add(
            log_dir / "nodepilot_{time:YYYY-MM-DD}.log",
            level=settings.log_level,
            format=_FILE_FORMAT,
            rotation="00:00",
            retention=f"{settings.log_retention_days} days",
            encoding="utf-8",
        )

        # 错误日志单独记录
        logger.add(
            log_dir / "error_{time:YYYY-MM-DD}.log",
            level="ERROR",
            format=_FILE_FORMAT,
            rotation="00:00",
            retention=f"{settings.log_retention_days * 2} days",
            encoding="utf-8",
        )

        _configured = True

    if console_missing:
        logger.warning("未检测到可用控制台输出流，仅写入文件日志")
    return logger


def get_device_logger(device_addr: str):
    """获取设备专用日志器，同一设备只注册一个文件处理器"""
    device_logger = logger.bind(device=device_addr)
    with _setup_lock:
        if device_addr in _device_sinks:
            return device_logger

        log_dir = Path(settings.log_path) / "devices"
        log_dir.mkdir(parents=True, exist_ok=True)
        safe_name = device_addr.replace(":", "_").replace("/", "_")
        _device_sinks[device_addr] = logger.add(
            log_dir / f"device_{safe_name}_{{time:YYYY-MM-DD}}.log",
            level=settings.log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
            rotation="00:00",
            retention=f"{settings.log_retention_days} days",
            encoding="utf-8",
            filter=lambda record: record["extra"].get("device") == device_addr,
        )
    return device_logger


# 初始化日志系统
logger = setup_logger()
