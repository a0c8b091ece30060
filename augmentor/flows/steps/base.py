"""
流程步骤基类模块

定义规范化步骤树的公共基类和类型枚举。
"""

from abc import abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from augmentor.flows.context import ExecutionContext
    from augmentor.flows.engine import FlowEngine


class StepType(str, Enum):
    """步骤类型（解析器词汇表）"""
    CLICK = "click"
    WAIT = "wait"
    INPUT = "input"
    NAVIGATE = "navigate"
    LOG = "log"
    IF = "if"
    WHILE = "while"
    # 仅在解析期存在，会被展开到父级列表中
    SEQUENCE = "sequence"


class ConditionKind(str, Enum):
    """条件类型"""
    EXISTS = "exists"
    NOT = "not"
    TEXT_CONTAINS = "textContains"
    ATTRIBUTE_EQUALS = "attributeEquals"


class FlowModel(BaseModel):
    """规范化流程节点，创建后不可修改"""
    model_config = ConfigDict(frozen=True)


class BaseStep(FlowModel):
    """
    流程步骤抽象基类

    每个可执行步骤都实现 run，由执行引擎按深度优先顺序调用。
    """

    @abstractmethod
    async def run(self, engine: "FlowEngine", context: "ExecutionContext", depth: int) -> None:
        """
        执行步骤

        Args:
            engine: 执行引擎（提供选择器解析和子步骤调度）
            context: 本次运行的上下文
            depth: 当前嵌套深度
        """
        ...

    @abstractmethod
    def to_payload(self) -> Dict[str, Any]:
        """转换为可重新解析的作者格式"""
        ...


class BaseCondition(FlowModel):
    """条件抽象基类（只读 DOM 检查）"""

    @abstractmethod
    async def evaluate(self, engine: "FlowEngine", context: "ExecutionContext") -> bool:
        ...

    @abstractmethod
    def to_payload(self) -> Dict[str, Any]:
        ...


__all__ = [
    "StepType",
    "ConditionKind",
    "FlowModel",
    "BaseStep",
    "BaseCondition",
]
