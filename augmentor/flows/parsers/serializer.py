"""
流程序列化模块

- to_source: 规范化定义 -> 作者格式 JSON（可重新解析为相同的定义）
- 可视化编辑器桥接：仅包含顶层 click / input / wait 的流程可在构建器中编辑，
  其余流程回退到高级（文本）模式
"""

import json
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from pydantic import BaseModel

from augmentor.flows.definition import FlowDefinition
from augmentor.flows.steps import ClickStep, InputStep, WaitStep

from .json import FlowParser

DEFAULT_BUILDER_WAIT_MS = 1000


class BuilderStep(BaseModel):
    """可视化构建器中的单个步骤"""
    type: Literal["click", "input", "wait"]
    selector: str = ""
    value: str = ""
    ms: int = DEFAULT_BUILDER_WAIT_MS


@dataclass
class BuilderParse:
    """构建器解析结果"""
    mode: Literal["builder", "advanced"] = "builder"
    steps: List[BuilderStep] = field(default_factory=list)
    error: str = ""


def to_source(definition: FlowDefinition, indent: int = 2) -> str:
    """将规范化定义转换为作者格式 JSON"""
    return json.dumps(definition.to_payload(), ensure_ascii=False, indent=indent)


def steps_to_source(steps: List[BuilderStep]) -> str:
    """
    将构建器步骤转换为动作流 JSON

    Args:
        steps: 构建器步骤

    Returns:
        ``{"steps": [...]}`` 格式的 JSON 文本
    """
    payload = []
    for step in steps or []:
        if step.type == "input":
            payload.append({"type": "input", "selector": step.selector.strip(), "value": step.value})
        elif step.type == "wait":
            payload.append({"type": "wait", "ms": max(0, step.ms)})
        else:
            payload.append({"type": "click", "selector": step.selector.strip(), "all": False})
    return json.dumps({"steps": payload}, ensure_ascii=False, indent=2)


def parse_flow_for_builder(source: str, parser: Optional[FlowParser] = None) -> BuilderParse:
    """
    尝试将流程文本转换为构建器步骤

    Returns:
        BuilderParse: 无法用构建器表示时 mode 为 advanced
    """
    result = (parser or FlowParser()).parse(source)
    if result.error:
        return BuilderParse(mode="advanced", error=result.error)
    if result.definition is None:
        return BuilderParse()

    steps: List[BuilderStep] = []
    for step in result.definition.steps:
        if isinstance(step, ClickStep) and not step.all:
            steps.append(BuilderStep(type="click", selector=step.selector))
        elif isinstance(step, InputStep):
            steps.append(BuilderStep(type="input", selector=step.selector, value=step.value))
        elif isinstance(step, WaitStep):
            steps.append(BuilderStep(type="wait", ms=max(0, round(step.ms))))
        else:
            return BuilderParse(mode="advanced")
    return BuilderParse(steps=steps)


__all__ = [
    "BuilderStep",
    "BuilderParse",
    "to_source",
    "steps_to_source",
    "parse_flow_for_builder",
]
