"""
核心配置模块
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """引擎配置（环境变量前缀 NODEPILOT_）"""

    model_config = SettingsConfigDict(
        env_prefix="NODEPILOT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # 轮询
    poll_interval_ms: int = Field(default=150, ge=0)
    find_timeout_ms: int = Field(default=5000, ge=0)

    # 交互间隔
    short_interval_ms: int = Field(default=150, ge=0)
    scroll_interval_ms: int = Field(default=500, ge=0)

    # 手势时长
    tap_duration_ms: int = Field(default=1, ge=1)
    click_duration_ms: int = Field(default=10, ge=1)
    drag_duration_ms: int = Field(default=300, ge=1)
    long_press_duration_ms: int = Field(default=600, ge=1)

    # ADB
    adb_path: str = "adb"
    adb_addr: str = ""
    adb_timeout_sec: float = 10.0

    # 日志
    log_level: str = "INFO"
    log_path: str = "./logs"
    log_retention_days: int = 3
    log_console_enabled: bool = True

    # 线程池（0 表示自动）
    io_thread_pool_size: int = 0

    @property
    def poll_interval(self) -> float:
        """轮询间隔（秒）"""
        return self.poll_interval_ms / 1000.0

    @property
    def find_timeout(self) -> float:
        """查找超时（秒）"""
        return self.find_timeout_ms / 1000.0


# 全局配置实例
settings = Settings()
