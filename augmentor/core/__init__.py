"""
核心模块

提供错误类型和统一的错误信息结构。
"""

from .errors import (
    ErrorCode,
    FlowError,
    FlowDefinitionError,
    FlowExecutionError,
    FlowDepthExceededError,
    FlowTimeoutError,
    Error,
)

__all__ = [
    "ErrorCode",
    "FlowError",
    "FlowDefinitionError",
    "FlowExecutionError",
    "FlowDepthExceededError",
    "FlowTimeoutError",
    "Error",
]
