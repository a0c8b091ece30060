"""
流程定义模块

FlowDefinition 是解析器的输出，创建后不可变。执行期状态保存在 ExecutionContext 中。
"""

from typing import Any, Dict, Iterator, Tuple

from pydantic import Field

from .steps import BaseStep, FlowModel, FlowStep, IfStep, WhileStep


class FlowDefinition(FlowModel):
    """
    规范化的动作流定义

    Attributes:
        steps: 顶层步骤（至少一个）
        step_count: 整棵树中可执行步骤的总数（叶子步骤、if、while 各计 1）
    """
    steps: Tuple[FlowStep, ...] = Field(min_length=1)
    step_count: int = Field(ge=1)

    def iter_steps(self) -> Iterator[BaseStep]:
        """深度优先遍历所有步骤"""
        stack = list(reversed(self.steps))
        while stack:
            step = stack.pop()
            yield step
            if isinstance(step, IfStep):
                stack.extend(reversed(step.else_steps))
                stack.extend(reversed(step.then_steps))
            elif isinstance(step, WhileStep):
                stack.extend(reversed(step.body_steps))

    def to_payload(self) -> Dict[str, Any]:
        """转换为可重新解析的作者格式"""
        return {"steps": [step.to_payload() for step in self.steps]}


__all__ = [
    "FlowDefinition",
]
