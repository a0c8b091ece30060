"""
日志格式化模块

提供多种日志格式化器。
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict


class SimpleFormatter(logging.Formatter):
    """简单格式化器"""

    def __init__(self, fmt: str = None):
        super().__init__(fmt or "%(levelname)s %(name)s: %(message)s")


class DetailedFormatter(logging.Formatter):
    """详细格式化器"""

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_line: bool = False,
    ):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_line = include_line

    def format(self, record: logging.LogRecord) -> str:
        parts = []

        if self.include_timestamp:
            parts.append(datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3])

        if self.include_level:
            parts.append(f"[{record.levelname:8}]")

        if self.include_logger:
            parts.append(f"[{record.name}]")

        if self.include_line:
            parts.append(f"[line {record.lineno}]")

        parts.append(record.getMessage())

        message = " ".join(parts)
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class JSONFormatter(logging.Formatter):
    """JSON 格式化器（推荐用于机器解析）"""

    # 执行日志通过 extra 传入的字段
    EXTRA_KEYS = ("run_id", "step", "depth", "duration_ms", "details")

    def __init__(self, extra_fields: Dict[str, Any] = None):
        super().__init__()
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        log_entry.update(self.extra_fields)

        for key in self.EXTRA_KEYS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(log_entry, ensure_ascii=False, default=str)


# ========== 格式化器工厂 ==========

class FormatterFactory:
    """格式化器工厂"""

    _formatters = {
        "simple": SimpleFormatter,
        "detailed": DetailedFormatter,
        "json": JSONFormatter,
    }

    @classmethod
    def create(cls, format_type: str, **kwargs) -> logging.Formatter:
        """创建格式化器"""
        formatter_class = cls._formatters.get(format_type)
        if not formatter_class:
            raise ValueError(f"Unknown formatter type: {format_type}")
        return formatter_class(**kwargs)


def get_formatter(format_type: str = "detailed", **kwargs) -> logging.Formatter:
    """便捷函数：获取格式化器"""
    return FormatterFactory.create(format_type, **kwargs)


__all__ = [
    "SimpleFormatter",
    "DetailedFormatter",
    "JSONFormatter",
    "FormatterFactory",
    "get_formatter",
]
