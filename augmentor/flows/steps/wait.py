"""
等待步骤实现
"""

import asyncio
from typing import TYPE_CHECKING, Any, Dict, Literal

from .base import BaseStep

if TYPE_CHECKING:
    from augmentor.flows.context import ExecutionContext
    from augmentor.flows.engine import FlowEngine


class WaitStep(BaseStep):
    """
    等待步骤

    协作式挂起，不阻塞事件循环。

    Attributes:
        ms: 等待时间（毫秒），解析时已限制在 [0, 60000]
    """
    type: Literal["wait"] = "wait"
    ms: float = 0

    async def run(self, engine: "FlowEngine", context: "ExecutionContext", depth: int) -> None:
        await asyncio.sleep(max(self.ms, 0) / 1000)

    def to_payload(self) -> Dict[str, Any]:
        ms = int(self.ms) if float(self.ms).is_integer() else self.ms
        return {"type": self.type, "ms": ms}


__all__ = [
    "WaitStep",
]
