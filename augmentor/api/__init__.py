"""
API 模块

包含:
- FastAPI 应用
- 动作流相关接口 (flows)
"""

from .app import app, create_app
from .schemas import (
    ErrorResponse,
    HealthResponse,
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
    # App
    "app",
    "create_app",
    # Schemas
    "ErrorResponse",
    "HealthResponse",
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
