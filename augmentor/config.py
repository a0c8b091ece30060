"""
配置模块

提供动作流引擎、日志和 API 服务的配置管理。
"""

import os
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import List, Optional


class LogLevel(str, Enum):
    """日志级别"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class FlowLimits:
    """
    动作流预算

    解析器和执行引擎共用的硬性限制，用于约束不可信流程定义的最坏开销。
    """
    max_steps: int = 200
    max_source_length: int = 8000
    max_wait_ms: float = 60000
    min_iterations: int = 1
    max_iterations: int = 50
    default_iterations: int = 10
    max_depth: int = 8
    max_runtime_ms: int = 10000
    # :self 指向触发流程的注入元素本身
    self_selector: str = ":self"

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_LIMITS = FlowLimits()


@dataclass
class ServerSettings:
    """服务器设置"""
    host: str = "127.0.0.1"
    port: int = 8080
    reload: bool = False
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class LogSettings:
    """日志设置"""
    level: LogLevel = LogLevel.INFO
    format: str = "detailed"
    file_path: Optional[str] = None


@dataclass
class AppConfig:
    """应用配置"""
    limits: FlowLimits = field(default_factory=FlowLimits)
    server: ServerSettings = field(default_factory=ServerSettings)
    log: LogSettings = field(default_factory=LogSettings)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """从环境变量加载配置"""
        limits = FlowLimits(
            max_runtime_ms=int(os.getenv("FLOW_MAX_RUNTIME_MS", str(DEFAULT_LIMITS.max_runtime_ms))),
            max_depth=int(os.getenv("FLOW_MAX_DEPTH", str(DEFAULT_LIMITS.max_depth))),
        )

        server = ServerSettings(
            host=os.getenv("SERVER_HOST", "127.0.0.1"),
            port=int(os.getenv("SERVER_PORT", "8080")),
            reload=os.getenv("SERVER_RELOAD", "false").lower() == "true",
        )

        log = LogSettings(
            level=LogLevel(os.getenv("LOG_LEVEL", "INFO").upper()),
            format=os.getenv("LOG_FORMAT", "detailed"),
            file_path=os.getenv("LOG_FILE_PATH"),
        )

        return cls(limits=limits, server=server, log=log)

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            "limits": self.limits.to_dict(),
            "server": {
                "host": self.server.host,
                "port": self.server.port,
                "reload": self.server.reload,
            },
            "log": {
                "level": self.log.level.value,
                "format": self.log.format,
                "file_path": self.log.file_path,
            },
        }


# 全局配置实例
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """获取全局配置"""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """设置全局配置"""
    global _config
    _config = config


def reset_config() -> None:
    """重置配置"""
    global _config
    _config = None


__all__ = [
    "LogLevel",
    "FlowLimits",
    "DEFAULT_LIMITS",
    "ServerSettings",
    "LogSettings",
    "AppConfig",
    "get_config",
    "set_config",
    "reset_config",
]
