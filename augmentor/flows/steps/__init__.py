"""
流程步骤模块

规范化步骤树的封闭联合类型：click / wait / input / navigate / log / if / while。
"""

from typing import Annotated, Union

from pydantic import Field

from .base import (
    StepType,
    ConditionKind,
    FlowModel,
    BaseStep,
    BaseCondition,
)
from .action import ClickStep, InputStep, NavigateStep, LogStep
from .wait import WaitStep
from .condition import (
    ExistsCondition,
    NotCondition,
    TextContainsCondition,
    AttributeEqualsCondition,
    FlowCondition,
    IfStep,
)
from .loop import WhileStep

FlowStep = Annotated[
    Union[ClickStep, WaitStep, InputStep, NavigateStep, LogStep, IfStep, WhileStep],
    Field(discriminator="type"),
]

# 解析 IfStep / WhileStep 中对 FlowStep 的前向引用
IfStep.model_rebuild()
WhileStep.model_rebuild()

__all__ = [
    # Base
    "StepType",
    "ConditionKind",
    "FlowModel",
    "BaseStep",
    "BaseCondition",
    # Steps
    "FlowStep",
    "ClickStep",
    "WaitStep",
    "InputStep",
    "NavigateStep",
    "LogStep",
    "IfStep",
    "WhileStep",
    # Conditions
    "FlowCondition",
    "ExistsCondition",
    "NotCondition",
    "TextContainsCondition",
    "AttributeEqualsCondition",
]
