"""
循环步骤实现
"""

from typing import TYPE_CHECKING, Any, Dict, Literal, Tuple

from .base import BaseStep
from .condition import FlowCondition

if TYPE_CHECKING:
    from augmentor.flows.context import ExecutionContext
    from augmentor.flows.engine import FlowEngine


class WhileStep(BaseStep):
    """
    While 循环步骤

    每轮开始前重新求值条件。达到 max_iterations 属于正常结束，
    仅记录一条警告并计入 context.exhausted_loops。

    Attributes:
        condition: 循环条件
        body_steps: 循环体（非空）
        max_iterations: 最大迭代次数，解析时已限制在 [1, 50]
    """
    type: Literal["while"] = "while"
    condition: FlowCondition
    body_steps: Tuple["FlowStep", ...]
    max_iterations: int = 10

    async def run(self, engine: "FlowEngine", context: "ExecutionContext", depth: int) -> None:
        iterations = 0
        while iterations < self.max_iterations:
            if not await self.condition.evaluate(engine, context):
                return
            iterations += 1
            await engine.run_steps(self.body_steps, context, depth + 1)
            engine.enforce_runtime_limit(context)

        if await self.condition.evaluate(engine, context):
            context.exhausted_loops += 1
            context.log.warning(
                f"loop stopped after {self.max_iterations} iterations with its condition still true",
                step=self.type,
                depth=depth,
                max_iterations=self.max_iterations,
            )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "condition": self.condition.to_payload(),
            "body": [step.to_payload() for step in self.body_steps],
            "maxIterations": self.max_iterations,
        }


__all__ = [
    "WhileStep",
]
