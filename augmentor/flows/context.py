"""
流程执行上下文

单次运行的全部可变状态。FlowDefinition 本身在执行期间不会被修改。
"""

import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

from augmentor.browser import DomAdapter, Node
from augmentor.logger import FlowRunLogger


class FlowExecutionState(Enum):
    """流程执行状态"""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ExecutionContext:
    """
    流程执行上下文

    Attributes:
        anchor: 触发流程的注入元素（:self 指向它）
        dom: 锚点所属文档的 DOM 适配器
        performed: 是否有步骤真正产生了可观察的效果
        steps_executed: 已执行的步骤数
        exhausted_loops: 因达到迭代上限而结束的循环次数
        log: 本次运行的执行日志
    """

    def __init__(
        self,
        anchor: Node,
        dom: DomAdapter,
        log: FlowRunLogger = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.anchor = anchor
        self.dom = dom
        self.log = log or FlowRunLogger()
        self.state = FlowExecutionState.IDLE
        self.performed = False
        self.steps_executed = 0
        self.exhausted_loops = 0
        self.error: Optional[Dict[str, Any]] = None
        self._clock = clock
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    @property
    def elapsed_ms(self) -> float:
        """自开始以来经过的毫秒数（单调时钟）"""
        if self._start is None:
            return 0
        end = self._end if self._end is not None else self._clock()
        return (end - self._start) * 1000

    def start(self) -> None:
        """开始执行"""
        self.state = FlowExecutionState.RUNNING
        self._start = self._clock()

    def complete(self) -> None:
        """完成执行"""
        self.state = FlowExecutionState.COMPLETED
        self._end = self._clock()

    def fail(self, error: Exception) -> None:
        """执行失败"""
        self.state = FlowExecutionState.FAILED
        self._end = self._clock()
        self.error = {
            "type": type(error).__name__,
            "message": str(error),
        }

    def mark_performed(self) -> None:
        self.performed = True

    def snapshot(self) -> Dict[str, Any]:
        """获取上下文快照"""
        return {
            "run_id": self.log.run_id,
            "state": self.state.value,
            "performed": self.performed,
            "steps_executed": self.steps_executed,
            "exhausted_loops": self.exhausted_loops,
            "duration_ms": int(self.elapsed_ms),
            "error": self.error,
        }

    def __repr__(self) -> str:
        return (
            f"ExecutionContext(run_id={self.log.run_id}, "
            f"state={self.state.value}, "
            f"performed={self.performed})"
        )


__all__ = [
    "FlowExecutionState",
    "ExecutionContext",
]
