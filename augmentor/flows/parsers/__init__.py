"""
流程解析器模块

提供流程定义的解析、规范化和序列化功能。
"""

from .json import FlowParser, FlowValidator, ParseResult, ValidationSummary, parse_action_flow
from .normalize import FIELD_ALIASES, FlowNormalizer, StepCounter
from .serializer import BuilderParse, BuilderStep, parse_flow_for_builder, steps_to_source, to_source

__all__ = [
    "FlowParser",
    "FlowValidator",
    "ParseResult",
    "ValidationSummary",
    "parse_action_flow",
    "FIELD_ALIASES",
    "FlowNormalizer",
    "StepCounter",
    "BuilderParse",
    "BuilderStep",
    "parse_flow_for_builder",
    "steps_to_source",
    "to_source",
]
