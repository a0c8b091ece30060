"""
动作流相关 API 路由

提供流程文本的解析、校验、构建器桥接和预算查询接口。
解析失败属于正常结果，通过响应中的 error 字段返回，而不是 HTTP 错误。
"""

import logging

from fastapi import APIRouter

from augmentor.api.schemas import (
    FlowBuilderResponse,
    FlowLimitsResponse,
    FlowParseRequest,
    FlowParseResponse,
    FlowSerializeRequest,
    FlowSerializeResponse,
    FlowSourceRequest,
    FlowValidateResponse,
    SourceFormat,
)
from augmentor.config import get_config
from augmentor.flows import FlowParser, FlowValidator, parse_flow_for_builder, steps_to_source

logger = logging.getLogger(__name__)

router = APIRouter()


def get_parser() -> FlowParser:
    """按当前配置创建解析器"""
    return FlowParser(get_config().limits)


# ==================== 解析 ====================

@router.post(
    "/parse",
    response_model=FlowParseResponse,
    summary="解析流程",
    description="把 JSON 或 YAML 流程文本转换为规范化的步骤树",
)
async def parse_flow(request: FlowParseRequest):
    """
    解析流程

    - **source**: 流程文本
    - **format**: json / yaml
    """
    parser = get_parser()
    if request.format == SourceFormat.YAML:
        result = parser.parse_yaml(request.source)
    else:
        result = parser.parse(request.source)

    if result.error:
        logger.info(f"流程解析失败: {result.error}")
    return FlowParseResponse(**result.to_dict())


@router.post(
    "/validate",
    response_model=FlowValidateResponse,
    summary="校验流程",
    description="返回步骤总数或第一条错误，用于编辑器实时提示",
)
async def validate_flow(request: FlowSourceRequest):
    """校验流程"""
    summary = FlowValidator(get_parser()).validate_source(request.source)
    return FlowValidateResponse(step_count=summary.step_count, error=summary.error)


# ==================== 构建器 ====================

@router.post(
    "/builder",
    response_model=FlowBuilderResponse,
    summary="转换为构建器步骤",
    description="仅含顶层 click / input / wait 的流程可在可视化构建器中编辑",
)
async def builder_flow(request: FlowSourceRequest):
    """转换为构建器步骤"""
    parsed = parse_flow_for_builder(request.source, get_parser())
    return FlowBuilderResponse(mode=parsed.mode, steps=parsed.steps, error=parsed.error)


@router.post(
    "/serialize",
    response_model=FlowSerializeResponse,
    summary="序列化构建器步骤",
    description="把构建器步骤转换为流程 JSON 文本",
)
async def serialize_flow(request: FlowSerializeRequest):
    """序列化构建器步骤"""
    return FlowSerializeResponse(source=steps_to_source(request.steps))


# ==================== 预算 ====================

@router.get(
    "/limits",
    response_model=FlowLimitsResponse,
    summary="获取流程预算",
)
async def get_limits():
    """获取当前生效的流程预算"""
    return FlowLimitsResponse(**get_config().limits.to_dict())
