import json

from augmentor.flows import BuilderStep, parse_flow_for_builder, steps_to_source


def test_steps_to_source() -> None:
    source = steps_to_source([
        BuilderStep(type="input", selector="  #q ", value="hello"),
        BuilderStep(type="wait", ms=-5),
        BuilderStep(type="click", selector="#go"),
    ])
    assert json.loads(source) == {
        "steps": [
            {"type": "input", "selector": "#q", "value": "hello"},
            {"type": "wait", "ms": 0},
            {"type": "click", "selector": "#go", "all": False},
        ]
    }
    assert source.startswith('{\n  "steps"')


def test_empty_builder_produces_empty_step_list() -> None:
    assert json.loads(steps_to_source([])) == {"steps": []}


def test_simple_flow_opens_in_builder() -> None:
    parsed = parse_flow_for_builder(
        '[{"type":"click","selector":"#a"},{"type":"wait","ms":1500},'
        '{"type":"input","selector":"#q","value":"x"}]'
    )
    assert parsed.mode == "builder"
    assert parsed.error == ""
    assert parsed.steps == [
        BuilderStep(type="click", selector="#a"),
        BuilderStep(type="wait", ms=1500),
        BuilderStep(type="input", selector="#q", value="x"),
    ]


def test_builder_steps_survive_a_round_trip() -> None:
    steps = [
        BuilderStep(type="click", selector="#a"),
        BuilderStep(type="wait", ms=250),
        BuilderStep(type="input", selector="#q", value="x"),
    ]
    assert parse_flow_for_builder(steps_to_source(steps)).steps == steps


def test_blank_source_opens_an_empty_builder() -> None:
    parsed = parse_flow_for_builder("  ")
    assert parsed.mode == "builder"
    assert parsed.steps == []


def test_control_flow_needs_advanced_mode() -> None:
    for source in (
        '[{"type":"click","selector":"#a","all":true}]',
        '[{"type":"log","message":"hi"}]',
        '[{"type":"navigate","url":"https://example.com"}]',
        '{"type":"if","condition":{"kind":"exists","selector":"#a"},"then":[{"type":"click","selector":"#a"}]}',
    ):
        parsed = parse_flow_for_builder(source)
        assert parsed.mode == "advanced"
        assert parsed.steps == []
        assert parsed.error == ""


def test_invalid_source_reports_error_in_advanced_mode() -> None:
    parsed = parse_flow_for_builder('[{"type":"click"}]')
    assert parsed.mode == "advanced"
    assert parsed.error == "flow[0]: Click step requires a selector."
