"""
日志配置模块

提供日志系统的配置功能。
"""

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .formatters import FormatterFactory

ROOT_LOGGER_NAME = "augmentor"


class LogLevel(Enum):
    """日志级别"""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class LogFormat(Enum):
    """日志格式"""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


@dataclass
class LogConfig:
    """日志配置"""
    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.DETAILED
    enable_console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5

    @classmethod
    def default(cls) -> "LogConfig":
        """获取默认配置"""
        return cls()

    @classmethod
    def development(cls) -> "LogConfig":
        """开发环境配置"""
        return cls(level=LogLevel.DEBUG, format=LogFormat.DETAILED)

    @classmethod
    def from_settings(cls, settings) -> "LogConfig":
        """从应用配置的 LogSettings 创建"""
        return cls(
            level=LogLevel[settings.level.value],
            format=LogFormat(settings.format),
            log_file=settings.file_path,
        )


def setup_logging(config: LogConfig = None) -> logging.Logger:
    """
    配置 augmentor 根日志记录器

    重复调用会替换之前安装的处理器。

    Args:
        config: 日志配置

    Returns:
        配置好的根日志记录器
    """
    config = config or LogConfig.default()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(config.level.value)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = FormatterFactory.create(config.format.value)

    if config.enable_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        root.addHandler(console)

    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_file,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


__all__ = [
    "ROOT_LOGGER_NAME",
    "LogLevel",
    "LogFormat",
    "LogConfig",
    "setup_logging",
]
