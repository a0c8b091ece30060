"""
动作流相关 API 数据模型

提供解析、校验、构建器桥接等接口的请求和响应模型。
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from augmentor.flows import BuilderStep


class SourceFormat(str, Enum):
    """流程文本格式"""
    JSON = "json"
    YAML = "yaml"


class FlowSourceRequest(BaseModel):
    """流程文本请求"""
    source: str = Field("", description="作者提交的流程文本")


class FlowParseRequest(FlowSourceRequest):
    """流程解析请求"""
    format: SourceFormat = Field(SourceFormat.JSON, description="文本格式")


class FlowParseResponse(BaseModel):
    """
    流程解析响应

    definition 与 error 至多一个非空，两者都为空表示未配置流程。
    """
    definition: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class FlowValidateResponse(BaseModel):
    """流程校验响应"""
    step_count: int = 0
    error: Optional[str] = None


class FlowBuilderResponse(BaseModel):
    """构建器解析响应"""
    mode: Literal["builder", "advanced"] = "builder"
    steps: List[BuilderStep] = Field(default_factory=list)
    error: str = ""


class FlowSerializeRequest(BaseModel):
    """构建器步骤序列化请求"""
    steps: List[BuilderStep] = Field(default_factory=list)


class FlowSerializeResponse(BaseModel):
    """构建器步骤序列化响应"""
    source: str


class FlowLimitsResponse(BaseModel):
    """流程预算"""
    max_steps: int
    max_source_length: int
    max_wait_ms: float
    min_iterations: int
    max_iterations: int
    default_iterations: int
    max_depth: int
    max_runtime_ms: int
    self_selector: str
