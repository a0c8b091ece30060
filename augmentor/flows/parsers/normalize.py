"""
流程规范化模块

将任意（不可信的）JSON 数据递归下降地转换为规范化步骤树。

- 每个节点接受三种形态：步骤数组、带 steps 数组的对象、单个步骤对象
- 字段按别名表顺序取第一个非 null 值
- 数值越界时截断而不是报错
- sequence 不计数，其子步骤原位展开到父级列表
"""

import math
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from augmentor.config import DEFAULT_LIMITS, FlowLimits
from augmentor.core.errors import ErrorCode, FlowDefinitionError
from augmentor.flows.definition import FlowDefinition
from augmentor.flows.steps import (
    AttributeEqualsCondition,
    BaseCondition,
    BaseStep,
    ClickStep,
    ExistsCondition,
    IfStep,
    InputStep,
    LogStep,
    NavigateStep,
    NotCondition,
    StepType,
    TextContainsCondition,
    WaitStep,
    WhileStep,
)

# 字段别名表：按顺序取第一个非 null 的键
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "step.type": ("type", "action"),
    "wait.ms": ("ms", "milliseconds", "duration", "delay", "value", "time"),
    "input.value": ("value", "text"),
    "navigate.url": ("url", "href"),
    "navigate.target": ("target",),
    "log.message": ("message", "text"),
    "if.condition": ("condition", "test"),
    "if.then": ("then", "thenSteps", "consequent"),
    "if.else": ("else", "elseSteps", "alternate"),
    "while.condition": ("condition", "test"),
    "while.body": ("body", "steps", "do"),
    "while.iterations": ("maxIterations", "iterations", "limit"),
    "sequence.steps": ("steps", "body", "sequence"),
    "condition.kind": ("kind", "type"),
    "condition.operand": ("operand", "condition", "value"),
    "condition.value": ("value", "text"),
}

def pick(record: Dict[str, Any], field: str, default: Any = None) -> Any:
    """按别名表取字段值"""
    for key in FIELD_ALIASES[field]:
        value = record.get(key)
        if value is not None:
            return value
    return default


def pick_label(record: Dict[str, Any], field: str) -> str:
    """取第一个字符串类型的别名值（用于 type / kind）"""
    for key in FIELD_ALIASES[field]:
        value = record.get(key)
        if isinstance(value, str):
            return value
    return ""


def optional_string(value: Any) -> Optional[str]:
    """返回去除首尾空白后的非空字符串，否则 None"""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def to_number(value: Any) -> Optional[float]:
    """转换为有限数值，无法转换时返回 None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # 超出 float 范围的整数仍是有限值，交给调用方截断
            number = math.copysign(sys.float_info.max, value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


@dataclass
class StepCounter:
    """单次 parse 调用内的步骤计数器"""
    limit: int
    count: int = 0

    def add(self) -> None:
        self.count += 1

    @property
    def exceeded(self) -> bool:
        return self.count > self.limit


def step_limit_error(limit: int) -> FlowDefinitionError:
    return FlowDefinitionError(f"Flows support at most {limit} steps.", code=ErrorCode.STEP_LIMIT)


class FlowNormalizer:
    """
    流程规范化器

    Attributes:
        limits: 流程预算
    """

    def __init__(self, limits: FlowLimits = None):
        self.limits = limits or DEFAULT_LIMITS

    def normalize(self, raw: Any, path: str = "flow") -> FlowDefinition:
        """
        规范化整个流程

        Args:
            raw: json.loads / yaml.safe_load 的结果
            path: 根路径名称

        Returns:
            FlowDefinition: 规范化后的定义

        Raises:
            FlowDefinitionError: 结构无效
        """
        counter = StepCounter(limit=self.limits.max_steps)
        steps = self.normalize_steps(raw, path, counter)
        if not steps:
            raise FlowDefinitionError("Provide at least one flow step.", code=ErrorCode.EMPTY_FLOW)
        if counter.exceeded:
            raise step_limit_error(self.limits.max_steps)
        return FlowDefinition(steps=tuple(steps), step_count=counter.count)

    def normalize_steps(self, raw: Any, path: str, counter: StepCounter) -> List[BaseStep]:
        """规范化步骤列表"""
        if isinstance(raw, list):
            entries, prefix = raw, path
        elif isinstance(raw, dict) and isinstance(raw.get("steps"), list):
            entries, prefix = raw["steps"], f"{path}.steps"
        elif isinstance(raw, dict):
            entries, prefix = [raw], path
        else:
            return []

        steps: List[BaseStep] = []
        for index, entry in enumerate(entries):
            normalized = self.normalize_step(entry, f"{prefix}[{index}]", counter)
            if isinstance(normalized, list):
                steps.extend(normalized)
            else:
                steps.append(normalized)
        return steps

    def normalize_step(self, entry: Any, path: str, counter: StepCounter):
        """规范化单个步骤；sequence 返回展开后的列表"""
        if not isinstance(entry, dict):
            raise FlowDefinitionError(f"{path}: Flow step must be an object.", path)

        raw_type = pick_label(entry, "step.type")
        step_type = raw_type.strip().lower()

        if step_type == StepType.CLICK.value:
            counter.add()
            selector = self._require(entry.get("selector"), path, "Click step requires a selector.")
            return ClickStep(selector=selector, all=bool(entry.get("all")))

        if step_type == StepType.WAIT.value:
            counter.add()
            ms = to_number(pick(entry, "wait.ms", 0))
            ms = 0 if ms is None else min(max(ms, 0), self.limits.max_wait_ms)
            return WaitStep(ms=ms)

        if step_type == StepType.INPUT.value:
            counter.add()
            selector = self._require(entry.get("selector"), path, "Input step requires a selector.")
            value = self._require(pick(entry, "input.value", ""), path, "Input step requires a value.")
            return InputStep(selector=selector, value=value)

        if step_type == StepType.NAVIGATE.value:
            counter.add()
            url = self._require(pick(entry, "navigate.url", ""), path, "Navigate step requires a URL.")
            return NavigateStep(url=url, target=optional_string(pick(entry, "navigate.target")))

        if step_type == StepType.LOG.value:
            counter.add()
            message = self._require(pick(entry, "log.message", ""), path, "Log step requires a message.")
            return LogStep(message=message)

        if step_type == StepType.IF.value:
            counter.add()
            condition = self.normalize_condition(pick(entry, "if.condition"), f"{path}.condition")
            then_steps = self.normalize_steps(pick(entry, "if.then", []), f"{path}.then", counter)
            else_steps = self.normalize_steps(pick(entry, "if.else", []), f"{path}.else", counter)
            return IfStep(condition=condition, then_steps=tuple(then_steps), else_steps=tuple(else_steps))

        if step_type == StepType.WHILE.value:
            counter.add()
            condition = self.normalize_condition(pick(entry, "while.condition"), f"{path}.condition")
            body_steps = self.normalize_steps(pick(entry, "while.body", []), f"{path}.body", counter)
            if not body_steps:
                raise FlowDefinitionError(f"{path}: While step requires at least one nested step.", path)
            return WhileStep(
                condition=condition,
                body_steps=tuple(body_steps),
                max_iterations=self._iterations(pick(entry, "while.iterations")),
            )

        if step_type == StepType.SEQUENCE.value:
            return self.normalize_steps(pick(entry, "sequence.steps", []), f"{path}.steps", counter)

        raise FlowDefinitionError(
            f"{path}: Unsupported flow step type: {raw_type or '(missing)'}.",
            path,
        )

    def normalize_condition(self, raw: Any, path: str) -> BaseCondition:
        """规范化条件"""
        if not isinstance(raw, dict):
            raise FlowDefinitionError(f"{path}: Condition must be an object.", path, ErrorCode.INVALID_CONDITION)

        raw_kind = pick_label(raw, "condition.kind")
        kind = raw_kind.strip().lower()

        if kind == "exists":
            return ExistsCondition(selector=self._require_condition(raw.get("selector"), path, "a selector"))

        if kind == "not":
            operand = self.normalize_condition(pick(raw, "condition.operand"), f"{path}.operand")
            return NotCondition(operand=operand)

        if kind == "textcontains":
            return TextContainsCondition(
                selector=self._require_condition(raw.get("selector"), path, "a selector"),
                value=self._require_condition(pick(raw, "condition.value", ""), path, "a value"),
            )

        if kind == "attributeequals":
            return AttributeEqualsCondition(
                selector=self._require_condition(raw.get("selector"), path, "a selector"),
                name=self._require_condition(raw.get("name"), path, "an attribute name"),
                value=self._require_condition(pick(raw, "condition.value", ""), path, "an attribute value"),
            )

        raise FlowDefinitionError(
            f"{path}: Unsupported flow condition: {raw_kind or '(missing)'}.",
            path,
            ErrorCode.INVALID_CONDITION,
        )

    def _iterations(self, raw: Any) -> int:
        number = to_number(raw)
        if number is None:
            number = self.limits.default_iterations
        return min(max(math.trunc(number), self.limits.min_iterations), self.limits.max_iterations)

    @staticmethod
    def _require(value: Any, path: str, message: str) -> str:
        result = optional_string(value)
        if result is None:
            raise FlowDefinitionError(f"{path}: {message}", path)
        return result

    @staticmethod
    def _require_condition(value: Any, path: str, what: str) -> str:
        result = optional_string(value)
        if result is None:
            raise FlowDefinitionError(f"{path}: Condition requires {what}.", path, ErrorCode.INVALID_CONDITION)
        return result


__all__ = [
    "FIELD_ALIASES",
    "StepCounter",
    "FlowNormalizer",
    "pick",
    "optional_string",
    "to_number",
]
