"""
API Schemas 模块

提供 API 请求和响应的数据模型定义。
"""

from .common import (
    ErrorResponse,
    HealthResponse,
)

from .flows import (
    SourceFormat,
    FlowSourceRequest,
    FlowParseRequest,
    FlowParseResponse,
    FlowValidateResponse,
    FlowBuilderResponse,
    FlowSerializeRequest,
    FlowSerializeResponse,
    FlowLimitsResponse,
)

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Flows
    "SourceFormat",
    "FlowSourceRequest",
    "FlowParseRequest",
    "FlowParseResponse",
    "FlowValidateResponse",
    "FlowBuilderResponse",
    "FlowSerializeRequest",
    "FlowSerializeResponse",
    "FlowLimitsResponse",
]
