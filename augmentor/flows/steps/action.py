"""
动作步骤实现

对页面 DOM 产生副作用的叶子步骤。选择器未命中、元素类型不支持等情况按空操作处理。
"""

from typing import TYPE_CHECKING, Any, Dict, Literal, Optional

from augmentor.browser import ElementKind, sanitize_url

from .base import BaseStep

if TYPE_CHECKING:
    from augmentor.flows.context import ExecutionContext
    from augmentor.flows.engine import FlowEngine


class ClickStep(BaseStep):
    """
    点击步骤

    先转发合成点击，页面未接管时再回退到原生 click()。

    Attributes:
        selector: CSS 选择器或 :self
        all: 是否点击全部匹配元素
    """
    type: Literal["click"] = "click"
    selector: str
    all: bool = False

    async def run(self, engine: "FlowEngine", context: "ExecutionContext", depth: int) -> None:
        if self.all:
            targets = await engine.resolve_all(self.selector, context)
        else:
            single = await engine.resolve_first(self.selector, context)
            targets = [single] if single is not None else []

        if not targets:
            context.log.debug(f"no match for {self.selector!r}", step=self.type, depth=depth)
            return

        dom = context.dom
        for target in targets:
            if await dom.forward_click(target):
                continue
            try:
                await dom.native_click(target)
            except Exception as e:
                context.log.warning(f"click fallback failed: {e}", step=self.type, depth=depth)
        context.mark_performed()

    def to_payload(self) -> Dict[str, Any]:
        return {"type": self.type, "selector": self.selector, "all": self.all}


class InputStep(BaseStep):
    """
    输入步骤

    Attributes:
        selector: CSS 选择器或 :self
        value: 要写入的文本
    """
    type: Literal["input"] = "input"
    selector: str
    value: str

    async def run(self, engine: "FlowEngine", context: "ExecutionContext", depth: int) -> None:
        target = await engine.resolve_first(self.selector, context)
        if target is None:
            context.log.debug(f"no match for {self.selector!r}", step=self.type, depth=depth)
            return

        dom = context.dom
        kind = await dom.element_kind(target)
        if kind == ElementKind.TEXT_FIELD:
            await dom.focus(target)
            await dom.set_value(target, self.value)
        elif kind == ElementKind.CONTENT_EDITABLE:
            await dom.focus(target)
            await dom.set_text_content(target, self.value)
        else:
            context.log.debug(f"{self.selector!r} is not editable", step=self.type, depth=depth)
            return

        # 让宿主页面自己的监听器感知到变化
        await dom.dispatch_event(target, "input")
        await dom.dispatch_event(target, "change")
        context.mark_performed()

    def to_payload(self) -> Dict[str, Any]:
        return {"type": self.type, "selector": self.selector, "value": self.value}


class NavigateStep(BaseStep):
    """
    导航步骤

    Attributes:
        url: 目标地址（执行时净化）
        target: 窗口目标，默认新标签页
    """
    type: Literal["navigate"] = "navigate"
    url: str
    target: Optional[str] = None

    async def run(self, engine: "FlowEngine", context: "ExecutionContext", depth: int) -> None:
        sanitized = sanitize_url(self.url, context.dom.base_url)
        if not sanitized:
            context.log.warning(f"refusing to open {self.url!r}", step=self.type, depth=depth)
            return
        await context.dom.open_url(sanitized, self.target or "_blank", "noopener")
        context.mark_performed()

    def to_payload(self) -> Dict[str, Any]:
        payload = {"type": self.type, "url": self.url}
        if self.target:
            payload["target"] = self.target
        return payload


class LogStep(BaseStep):
    """日志步骤，仅输出诊断信息"""
    type: Literal["log"] = "log"
    message: str

    async def run(self, engine: "FlowEngine", context: "ExecutionContext", depth: int) -> None:
        context.log.info(self.message, step=self.type, depth=depth)

    def to_payload(self) -> Dict[str, Any]:
        return {"type": self.type, "message": self.message}


__all__ = [
    "ClickStep",
    "InputStep",
    "NavigateStep",
    "LogStep",
]
