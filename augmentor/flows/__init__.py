"""
动作流模块

提供动作流的解析、规范化、序列化和执行功能。

主要组件:
- FlowParser: 把不可信的 JSON / YAML 文本转换为 FlowDefinition
- FlowEngine: 在实时 DOM 上按预算执行 FlowDefinition
- ExecutionContext: 单次运行的执行上下文

使用示例:
    ```python
    from augmentor.browser import PlaywrightDom
    from augmentor.flows import FlowEngine, parse_action_flow

    result = parse_action_flow('''
    {"steps": [
        {"type": "input", "selector": "#q", "value": "hello"},
        {"type": "click", "selector": "button[type=submit]"}
    ]}
    ''')
    if result.error:
        print(result.error)

    engine = FlowEngine(PlaywrightDom(page))
    performed = await engine.execute(anchor, result.definition)
    ```
"""

from .definition import FlowDefinition
from .context import ExecutionContext, FlowExecutionState
from .engine import FlowEngine, execute_action_flow
from .steps import (
    StepType,
    ConditionKind,
    BaseStep,
    BaseCondition,
    FlowStep,
    FlowCondition,
    ClickStep,
    WaitStep,
    InputStep,
    NavigateStep,
    LogStep,
    IfStep,
    WhileStep,
    ExistsCondition,
    NotCondition,
    TextContainsCondition,
    AttributeEqualsCondition,
)
from .parsers import (
    FlowParser,
    FlowValidator,
    FlowNormalizer,
    ParseResult,
    ValidationSummary,
    BuilderParse,
    BuilderStep,
    parse_action_flow,
    parse_flow_for_builder,
    steps_to_source,
    to_source,
)

__all__ = [
    # Definition
    "FlowDefinition",
    # Context
    "ExecutionContext",
    "FlowExecutionState",
    # Engine
    "FlowEngine",
    "execute_action_flow",
    # Steps
    "StepType",
    "ConditionKind",
    "BaseStep",
    "BaseCondition",
    "FlowStep",
    "FlowCondition",
    "ClickStep",
    "WaitStep",
    "InputStep",
    "NavigateStep",
    "LogStep",
    "IfStep",
    "WhileStep",
    "ExistsCondition",
    "NotCondition",
    "TextContainsCondition",
    "AttributeEqualsCondition",
    # Parsers
    "FlowParser",
    "FlowValidator",
    "FlowNormalizer",
    "ParseResult",
    "ValidationSummary",
    "BuilderParse",
    "BuilderStep",
    "parse_action_flow",
    "parse_flow_for_builder",
    "steps_to_source",
    "to_source",
]
