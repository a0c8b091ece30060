"""
条件步骤实现

提供 DOM 条件谓词以及 if 分支步骤。条件每次引用都重新求值，不缓存节点。
"""

from typing import TYPE_CHECKING, Annotated, Any, Dict, Literal, Tuple, Union

from pydantic import Field

from .base import BaseCondition, BaseStep, ConditionKind

if TYPE_CHECKING:
    from augmentor.flows.context import ExecutionContext
    from augmentor.flows.engine import FlowEngine


class ExistsCondition(BaseCondition):
    """选择器至少匹配一个节点"""
    kind: Literal["exists"] = "exists"
    selector: str

    async def evaluate(self, engine: "FlowEngine", context: "ExecutionContext") -> bool:
        return await engine.resolve_first(self.selector, context) is not None

    def to_payload(self) -> Dict[str, Any]:
        return {"kind": ConditionKind.EXISTS.value, "selector": self.selector}


class NotCondition(BaseCondition):
    """逻辑取反"""
    kind: Literal["not"] = "not"
    operand: "FlowCondition"

    async def evaluate(self, engine: "FlowEngine", context: "ExecutionContext") -> bool:
        return not await self.operand.evaluate(engine, context)

    def to_payload(self) -> Dict[str, Any]:
        return {"kind": ConditionKind.NOT.value, "operand": self.operand.to_payload()}


class TextContainsCondition(BaseCondition):
    """首个匹配节点的文本包含指定值（忽略大小写）"""
    kind: Literal["textContains"] = "textContains"
    selector: str
    value: str

    async def evaluate(self, engine: "FlowEngine", context: "ExecutionContext") -> bool:
        target = await engine.resolve_first(self.selector, context)
        if target is None:
            return False
        text = await context.dom.text_content(target) or ""
        return self.value.lower() in text.lower()

    def to_payload(self) -> Dict[str, Any]:
        return {"kind": ConditionKind.TEXT_CONTAINS.value, "selector": self.selector, "value": self.value}


class AttributeEqualsCondition(BaseCondition):
    """首个匹配节点的属性值与指定值完全相等"""
    kind: Literal["attributeEquals"] = "attributeEquals"
    selector: str
    name: str
    value: str

    async def evaluate(self, engine: "FlowEngine", context: "ExecutionContext") -> bool:
        target = await engine.resolve_first(self.selector, context)
        if target is None:
            return False
        return await context.dom.get_attribute(target, self.name) == self.value

    def to_payload(self) -> Dict[str, Any]:
        return {
            "kind": ConditionKind.ATTRIBUTE_EQUALS.value,
            "selector": self.selector,
            "name": self.name,
            "value": self.value,
        }


FlowCondition = Annotated[
    Union[ExistsCondition, NotCondition, TextContainsCondition, AttributeEqualsCondition],
    Field(discriminator="kind"),
]

NotCondition.model_rebuild()


class IfStep(BaseStep):
    """
    条件步骤

    条件只求值一次，然后在下一层深度执行其中一个分支（分支可以为空）。

    Attributes:
        condition: 分支条件
        then_steps: 条件为真时执行的步骤
        else_steps: 条件为假时执行的步骤
    """
    type: Literal["if"] = "if"
    condition: FlowCondition
    then_steps: Tuple["FlowStep", ...] = ()
    else_steps: Tuple["FlowStep", ...] = ()

    async def run(self, engine: "FlowEngine", context: "ExecutionContext", depth: int) -> None:
        outcome = await self.condition.evaluate(engine, context)
        context.log.debug(f"condition -> {outcome}", step=self.type, depth=depth)
        await engine.run_steps(self.then_steps if outcome else self.else_steps, context, depth + 1)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "condition": self.condition.to_payload(),
            "then": [step.to_payload() for step in self.then_steps],
            "else": [step.to_payload() for step in self.else_steps],
        }


__all__ = [
    "ExistsCondition",
    "NotCondition",
    "TextContainsCondition",
    "AttributeEqualsCondition",
    "FlowCondition",
    "IfStep",
]
