"""
流程引擎核心模块

按深度优先、严格顺序地解释规范化步骤树，并在每个步骤和每轮循环后检查预算。

只有预算超限（嵌套深度、运行时间）会中断运行；选择器未命中、选择器语法错误、
元素类型不支持以及 DOM 适配器抛出的其他异常一律按空操作处理，让流程尽可能完成剩余步骤。
"""

import time
from typing import Callable, Iterable, List, Optional

from augmentor.browser import DomAdapter, DomSelectorError, Node
from augmentor.config import DEFAULT_LIMITS, FlowLimits
from augmentor.core.errors import (
    ErrorCode,
    FlowDepthExceededError,
    FlowExecutionError,
    FlowTimeoutError,
)

from .context import ExecutionContext
from .definition import FlowDefinition
from .steps import BaseStep


class FlowEngine:
    """
    流程引擎

    Attributes:
        dom: 宿主页面的 DOM 适配器
        limits: 流程预算
    """

    def __init__(
        self,
        dom: DomAdapter,
        limits: FlowLimits = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.dom = dom
        self.limits = limits or DEFAULT_LIMITS
        self._clock = clock

    async def execute(self, anchor: Node, definition: Optional[FlowDefinition]) -> bool:
        """
        执行流程

        Args:
            anchor: 触发流程的注入元素
            definition: 规范化的流程定义

        Returns:
            bool: 是否至少有一个步骤产生了效果（点击命中、输入成功、打开了页面）

        Raises:
            FlowDepthExceededError: 嵌套深度超限
            FlowTimeoutError: 运行时间超限
        """
        context = await self.run(anchor, definition)
        return context.performed

    async def run(self, anchor: Node, definition: Optional[FlowDefinition]) -> ExecutionContext:
        """执行流程并返回上下文（用于诊断）"""
        context = ExecutionContext(anchor, self.dom, clock=self._clock)
        if definition is None or not definition.steps:
            context.complete()
            return context

        context.start()
        context.log.debug(f"flow started with {definition.step_count} steps")
        try:
            await self.run_steps(definition.steps, context, 0)
        except FlowExecutionError as e:
            context.fail(e)
            context.log.warning(e.message, code=e.code.value, **e.details)
            raise
        except Exception as e:
            context.fail(e)
            raise

        context.complete()
        context.log.debug(
            f"flow finished in {int(context.elapsed_ms)}ms",
            performed=context.performed,
            steps_executed=context.steps_executed,
        )
        return context

    async def run_steps(self, steps: Iterable[BaseStep], context: ExecutionContext, depth: int) -> None:
        """顺序执行步骤列表"""
        if not steps:
            return
        if depth > self.limits.max_depth:
            raise FlowDepthExceededError(depth, self.limits.max_depth)
        for step in steps:
            await self.run_step(step, context, depth)
            self.enforce_runtime_limit(context)

    async def run_step(self, step: BaseStep, context: ExecutionContext, depth: int) -> None:
        """执行单个步骤"""
        if not isinstance(step, BaseStep):
            raise FlowExecutionError(
                f"Unsupported flow step: {type(step).__name__}.",
                ErrorCode.UNSUPPORTED_STEP,
            )
        context.log.step_start(step.type, depth)
        try:
            await step.run(self, context, depth)
        except FlowExecutionError:
            raise
        except Exception as e:
            # 页面导航、节点脱离文档等 DOM 异常只跳过当前步骤
            context.log.warning(
                f"step failed: {e}",
                step=step.type,
                depth=depth,
                exception_type=type(e).__name__,
            )
        context.steps_executed += 1
        context.log.step_end(step.type, depth, context.performed)

    def enforce_runtime_limit(self, context: ExecutionContext) -> None:
        """检查运行时间预算"""
        elapsed = context.elapsed_ms
        if elapsed > self.limits.max_runtime_ms:
            raise FlowTimeoutError(int(elapsed), self.limits.max_runtime_ms)

    # ========== 选择器解析 ==========

    async def resolve_all(self, selector: str, context: ExecutionContext) -> List[Node]:
        """
        解析选择器的全部匹配

        :self 返回锚点；语法无效的选择器视为零匹配。每次调用都重新查询。
        """
        if not selector:
            return []
        if selector == self.limits.self_selector:
            return [context.anchor] if context.anchor is not None else []
        try:
            return list(await context.dom.query_all(selector))
        except DomSelectorError as e:
            context.log.warning(f"invalid selector {selector!r}", reason=str(e))
            return []

    async def resolve_first(self, selector: str, context: ExecutionContext) -> Optional[Node]:
        """解析选择器的第一个匹配"""
        nodes = await self.resolve_all(selector, context)
        return nodes[0] if nodes else None


# ========== 便捷函数 ==========

async def execute_action_flow(
    dom: DomAdapter,
    anchor: Node,
    definition: Optional[FlowDefinition],
    limits: FlowLimits = None,
) -> bool:
    """
    执行流程（便捷函数）

    Args:
        dom: 宿主页面的 DOM 适配器
        anchor: 触发流程的注入元素
        definition: 规范化的流程定义
        limits: 流程预算

    Returns:
        bool: 是否产生了效果
    """
    engine = FlowEngine(dom, limits)
    return await engine.execute(anchor, definition)


__all__ = [
    "FlowEngine",
    "execute_action_flow",
]
