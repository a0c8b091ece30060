"""
错误定义模块

提供动作流解析和执行两个层级的错误类型。

- 定义错误（解析期）：由作者修正，解析器返回带路径的错误消息
- 执行错误（运行期）：仅预算超限会中断流程
"""

import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """错误码枚举"""
    UNKNOWN = "unknown"

    # 定义错误
    INVALID_STEP = "invalid_step"
    INVALID_CONDITION = "invalid_condition"
    EMPTY_FLOW = "empty_flow"
    STEP_LIMIT = "step_limit"

    # 执行错误
    DEPTH_EXCEEDED = "depth_exceeded"
    EXECUTION_TIMEOUT = "execution_timeout"
    UNSUPPORTED_STEP = "unsupported_step"


class FlowError(Exception):
    """动作流基础异常"""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class FlowDefinitionError(FlowError):
    """
    流程定义错误

    Attributes:
        path: 出错节点的路径，例如 ``flow.steps[2].then[0]``
    """

    def __init__(self, message: str, path: str = None, code: ErrorCode = ErrorCode.INVALID_STEP):
        super().__init__(message, code, {"path": path} if path else None)
        self.path = path


class FlowExecutionError(FlowError):
    """流程执行错误"""
    pass


class FlowDepthExceededError(FlowExecutionError):
    """嵌套深度超限"""

    def __init__(self, depth: int, max_depth: int):
        super().__init__(
            "Flow exceeded maximum nesting depth.",
            ErrorCode.DEPTH_EXCEEDED,
            {"depth": depth, "max_depth": max_depth},
        )


class FlowTimeoutError(FlowExecutionError):
    """运行时间超限"""

    def __init__(self, elapsed_ms: int, max_runtime_ms: int):
        super().__init__(
            "Flow execution exceeded the time limit.",
            ErrorCode.EXECUTION_TIMEOUT,
            {"elapsed_ms": elapsed_ms, "max_runtime_ms": max_runtime_ms},
        )


@dataclass
class Error:
    """错误信息"""
    code: str
    message: str
    details: Optional[dict] = None
    recoverable: bool = False
    exception_type: Optional[str] = None
    traceback: Optional[str] = None

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "exception_type": self.exception_type,
            "traceback": self.traceback,
        }

    @classmethod
    def from_exception(cls, exc: Exception, recoverable: bool = False) -> "Error":
        """从异常创建错误对象"""
        if isinstance(exc, FlowError):
            return cls(
                code=exc.code.value,
                message=exc.message,
                details=exc.details or None,
                recoverable=recoverable,
                exception_type=exc.__class__.__name__,
            )
        return cls(
            code=ErrorCode.UNKNOWN.value,
            message=str(exc),
            details={"exception_class": exc.__class__.__name__},
            recoverable=recoverable,
            exception_type=exc.__class__.__name__,
            traceback=traceback.format_exc() if recoverable else None,
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
