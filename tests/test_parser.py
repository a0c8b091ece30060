import json

import pytest

from augmentor.config import FlowLimits
from augmentor.flows import (
    AttributeEqualsCondition,
    ClickStep,
    ExistsCondition,
    FlowParser,
    FlowValidator,
    IfStep,
    InputStep,
    LogStep,
    NavigateStep,
    NotCondition,
    TextContainsCondition,
    WaitStep,
    WhileStep,
    parse_action_flow,
    to_source,
)


def _compact(payload) -> str:
    return json.dumps(payload, separators=(",", ":"))


def _error(source) -> str:
    result = parse_action_flow(source if isinstance(source, str) else _compact(source))
    assert result.definition is None
    assert result.error
    return result.error


def _steps(source):
    result = parse_action_flow(source if isinstance(source, str) else _compact(source))
    assert result.error is None, result.error
    return result.definition.steps


# ---------- 基本形态 ----------

def test_single_click_step() -> None:
    result = parse_action_flow('[{"type":"click","selector":"#submit"}]')
    assert result.ok
    assert result.definition.steps == (ClickStep(selector="#submit"),)
    assert result.definition.step_count == 1


@pytest.mark.parametrize("source", ["", "   ", "\n\t "])
def test_blank_source_means_no_flow(source: str) -> None:
    result = parse_action_flow(source)
    assert result.definition is None
    assert result.error is None


def test_accepts_object_with_steps_and_single_step_object() -> None:
    bare = _steps('[{"type":"log","message":"hi"}]')
    wrapped = _steps('{"steps":[{"type":"log","message":"hi"}]}')
    single = _steps('{"type":"log","message":"hi"}')
    assert bare == wrapped == single == (LogStep(message="hi"),)


def test_type_is_case_insensitive_and_accepts_action_alias() -> None:
    steps = _steps([
        {"type": "CLICK", "selector": "#a"},
        {"action": "Log", "message": "x"},
        {"type": 5, "action": "wait", "ms": 10},
    ])
    assert steps == (ClickStep(selector="#a"), LogStep(message="x"), WaitStep(ms=10))


def test_required_strings_are_trimmed() -> None:
    steps = _steps([{"type": "input", "selector": "  #q  ", "value": " hello "}])
    assert steps == (InputStep(selector="#q", value="hello"),)


def test_navigate_with_href_alias_and_target() -> None:
    steps = _steps([{"type": "navigate", "href": "/next", "target": " _self "}])
    assert steps == (NavigateStep(url="/next", target="_self"),)


# ---------- 数值截断 ----------

@pytest.mark.parametrize(
    "raw, expected",
    [(-5, 0), (999999, 60000), ("abc", 0), ("250", 250), (True, 0), (None, 0), (1.5, 1.5)],
)
def test_wait_ms_is_clamped(raw, expected) -> None:
    steps = _steps([{"type": "wait", "ms": raw}])
    assert steps == (WaitStep(ms=expected),)


def test_wait_duration_aliases_take_first_non_null() -> None:
    assert _steps([{"type": "wait", "delay": 250}]) == (WaitStep(ms=250),)
    assert _steps([{"type": "wait", "ms": None, "duration": "300", "time": 5}]) == (WaitStep(ms=300),)


@pytest.mark.parametrize(
    "raw, expected",
    [(0, 1), (999, 50), (None, 10), ("abc", 10), ("15", 15), (2.9, 2), (-3, 1)],
)
def test_while_iterations_are_clamped(raw, expected) -> None:
    step = {
        "type": "while",
        "condition": {"kind": "exists", "selector": "#more"},
        "body": [{"type": "click", "selector": "#more"}],
    }
    if raw is not None:
        step["maxIterations"] = raw
    (loop,) = _steps([step])
    assert isinstance(loop, WhileStep)
    assert loop.max_iterations == expected


# ---------- 控制流 ----------

def test_if_without_else_has_empty_else_branch() -> None:
    (step,) = _steps(
        '{"type":"if","condition":{"kind":"exists","selector":"#x"},'
        '"then":[{"type":"log","message":"yes"}]}'
    )
    assert step == IfStep(
        condition=ExistsCondition(selector="#x"),
        then_steps=(LogStep(message="yes"),),
    )
    assert step.else_steps == ()


def test_conditions_of_every_kind() -> None:
    (step,) = _steps([{
        "type": "if",
        "condition": {
            "kind": "not",
            "operand": {"type": "TextContains", "selector": ".status", "text": "Done"},
        },
        "then": {"type": "if", "test": {
            "kind": "attributeEquals", "selector": "#tab", "name": "aria-selected", "value": "true",
        }, "else": [{"type": "log", "message": "x"}]},
    }])
    assert step.condition == NotCondition(operand=TextContainsCondition(selector=".status", value="Done"))
    (inner,) = step.then_steps
    assert inner.condition == AttributeEqualsCondition(
        selector="#tab", name="aria-selected", value="true",
    )
    assert inner.then_steps == ()
    assert inner.else_steps == (LogStep(message="x"),)


def test_step_count_includes_control_steps() -> None:
    result = parse_action_flow(_compact([
        {"type": "if", "condition": {"kind": "exists", "selector": "#a"},
         "then": [{"type": "click", "selector": "#a"}],
         "else": [{"type": "while", "condition": {"kind": "exists", "selector": "#b"},
                   "body": [{"type": "click", "selector": "#b"}, {"type": "wait", "ms": 5}]}]},
        {"type": "log", "message": "done"},
    ]))
    assert result.definition.step_count == 6
    assert len(list(result.definition.iter_steps())) == 6


def test_sequence_flattening_is_transparent() -> None:
    inner = [
        {"type": "click", "selector": "#a"},
        {"type": "wait", "ms": 100},
        {"type": "input", "selector": "#q", "value": "x"},
    ]
    bare = parse_action_flow(_compact(inner)).definition
    wrapped = parse_action_flow(_compact([{"type": "sequence", "steps": inner}])).definition
    nested = parse_action_flow(_compact([
        {"type": "sequence", "steps": inner[:1]},
        {"type": "sequence", "body": [{"type": "sequence", "steps": inner[1:]}]},
    ])).definition
    assert bare == wrapped == nested
    assert wrapped.step_count == 3


def test_sequence_inside_while_body_is_spliced() -> None:
    (loop,) = _steps([{
        "type": "while",
        "condition": {"kind": "exists", "selector": "#x"},
        "do": [{"type": "sequence", "steps": [{"type": "log", "message": "a"}, {"type": "log", "message": "b"}]}],
    }])
    assert loop.body_steps == (LogStep(message="a"), LogStep(message="b"))


# ---------- 预算 ----------

def test_two_hundred_steps_is_accepted() -> None:
    source = _compact([{"type": "log", "message": "m"}] * 200)
    result = parse_action_flow(source)
    assert result.definition.step_count == 200


def test_more_than_two_hundred_steps_fails_regardless_of_shape() -> None:
    flat = [{"type": "log", "message": "m"}] * 201
    assert _error(flat) == "Flows support at most 200 steps."

    nested = [{
        "type": "while",
        "condition": {"kind": "exists", "selector": "#x"},
        "body": [{"type": "log", "message": "m"}] * 200,
    }]
    assert _error(nested) == "Flows support at most 200 steps."

    grouped = [{"type": "sequence", "steps": [{"type": "log", "message": "m"}] * 70}] * 3
    assert _error(grouped) == "Flows support at most 200 steps."


def test_custom_limits() -> None:
    three = '[{"type":"log","message":"a"},{"type":"log","message":"b"},{"type":"log","message":"c"}]'
    assert FlowParser(FlowLimits(max_steps=2)).parse(three).error == "Flows support at most 2 steps."

    parser = FlowParser(FlowLimits(max_steps=2, max_source_length=50))
    assert parser.parse('[{"type":"log","message":"a"}]').ok
    assert parser.parse(three).error == "Flow JSON exceeds the maximum length of 50 characters."


def test_source_length_limit() -> None:
    assert _error("x" * 8001) == "Flow JSON exceeds the maximum length of 8000 characters."


# ---------- 错误消息 ----------

@pytest.mark.parametrize(
    "source, message",
    [
        ("{", "Flow JSON is invalid."),
        ("[]", "Provide at least one flow step."),
        ("5", "Provide at least one flow step."),
        ('{"steps":[]}', "Provide at least one flow step."),
        ("[1]", "flow[0]: Flow step must be an object."),
        ('[{"type":"hover"}]', "flow[0]: Unsupported flow step type: hover."),
        ("[{}]", "flow[0]: Unsupported flow step type: (missing)."),
        ('[{"type":"click","selector":"   "}]', "flow[0]: Click step requires a selector."),
        ('[{"type":"input","selector":"#q"}]', "flow[0]: Input step requires a value."),
        ('[{"type":"navigate"}]', "flow[0]: Navigate step requires a URL."),
        ('[{"type":"log"}]', "flow[0]: Log step requires a message."),
    ],
)
def test_error_messages(source: str, message: str) -> None:
    assert _error(source) == message


def test_errors_carry_the_path_of_the_offending_node() -> None:
    source = {
        "steps": [
            {"type": "log", "message": "a"},
            {"type": "log", "message": "b"},
            {"type": "if", "condition": {"kind": "exists", "selector": "#x"},
             "then": [{"type": "click"}]},
        ]
    }
    assert _error(source) == "flow.steps[2].then[0]: Click step requires a selector."


def test_condition_errors() -> None:
    base = {"type": "if", "then": [{"type": "log", "message": "x"}]}
    assert _error({**base, "condition": "yes"}) == "flow[0].condition: Condition must be an object."
    assert _error({**base, "condition": {"kind": "near", "selector": "a"}}) == (
        "flow[0].condition: Unsupported flow condition: near."
    )
    assert _error({**base, "condition": {"kind": "exists"}}) == (
        "flow[0].condition: Condition requires a selector."
    )
    assert _error({**base, "condition": {"kind": "not", "operand": {"kind": "textContains", "selector": "a"}}}) == (
        "flow[0].condition.operand: Condition requires a value."
    )
    assert _error({**base, "condition": {"kind": "attributeEquals", "selector": "a", "value": "1"}}) == (
        "flow[0].condition: Condition requires an attribute name."
    )


def test_empty_while_body_is_rejected() -> None:
    for body in ([], None, [{"type": "sequence", "steps": []}]):
        step = {"type": "while", "condition": {"kind": "exists", "selector": "#a"}}
        if body is not None:
            step["body"] = body
        assert _error([step]) == "flow[0]: While step requires at least one nested step."


def test_deeply_nested_json_does_not_crash() -> None:
    source = "[" * 3000 + "]" * 3000
    result = parse_action_flow(source)
    assert result.definition is None
    assert result.error


# ---------- YAML ----------

def test_parse_yaml() -> None:
    result = FlowParser().parse_yaml(
        "steps:\n"
        "  - type: input\n"
        "    selector: '#q'\n"
        "    value: hello\n"
        "  - type: click\n"
        "    selector: '#go'\n"
    )
    assert result.definition.steps == (
        InputStep(selector="#q", value="hello"),
        ClickStep(selector="#go"),
    )


def test_yaml_aliases_are_rejected() -> None:
    result = FlowParser().parse_yaml("base: &step {type: log, message: hi}\nsteps: [*step, *step]\n")
    assert result.error == "Flow YAML is invalid."


def test_yaml_syntax_error() -> None:
    assert FlowParser().parse_yaml("steps: [").error == "Flow YAML is invalid."


# ---------- 校验与回写 ----------

def test_validator_reports_step_count() -> None:
    validator = FlowValidator()
    summary = validator.validate_source('[{"type":"click","selector":"#a"},{"type":"wait","ms":1}]')
    assert summary.step_count == 2
    assert summary.error is None

    summary = validator.validate_source('[{"type":"click"}]')
    assert summary.step_count == 0
    assert summary.error == "flow[0]: Click step requires a selector."

    assert validator.validate_source("") == validator.validate_source("  ")


def test_to_source_reparses_to_the_same_definition() -> None:
    definition = parse_action_flow(_compact([
        {"type": "click", "selector": ":self", "all": True},
        {"type": "wait", "ms": 250},
        {"type": "navigate", "url": "https://example.com", "target": "_top"},
        {"type": "if", "condition": {"kind": "not", "operand": {"kind": "exists", "selector": "#x"}},
         "then": [{"type": "log", "message": "missing"}],
         "else": [{"type": "while", "condition": {"kind": "attributeEquals", "selector": "#x",
                                                   "name": "data-state", "value": "busy"},
                   "body": [{"type": "wait", "ms": 100}], "maxIterations": 5}]},
    ])).definition

    assert parse_action_flow(to_source(definition)).definition == definition


def test_huge_integers_are_clamped() -> None:
    huge = "9" * 400
    source = (
        f'[{{"type":"wait","ms":{huge}}},{{"type":"wait","ms":-{huge}}},'
        f'{{"type":"while","condition":{{"kind":"exists","selector":"#a"}},'
        f'"body":[{{"type":"log","message":"m"}}],"maxIterations":{huge}}},'
        f'{{"type":"while","condition":{{"kind":"exists","selector":"#a"}},'
        f'"body":[{{"type":"log","message":"m"}}],"maxIterations":-{huge}}}]'
    )
    steps = _steps(source)
    assert steps[0] == WaitStep(ms=60000)
    assert steps[1] == WaitStep(ms=0)
    assert steps[2].max_iterations == 50
    assert steps[3].max_iterations == 1


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_standard_json_constants_are_invalid(constant: str) -> None:
    assert _error('[{"type":"wait","ms":%s}]' % constant) == "Flow JSON is invalid."


def test_yaml_scalars_that_fail_to_construct_are_invalid() -> None:
    result = FlowParser().parse_yaml("- type: wait\n  ms: 2001-13-01\n")
    assert result.definition is None
    assert result.error == "Flow YAML is invalid."


def test_yaml_huge_integers_are_clamped() -> None:
    result = FlowParser().parse_yaml("- type: wait\n  ms: " + "9" * 400 + "\n")
    assert result.definition.steps == (WaitStep(ms=60000),)
