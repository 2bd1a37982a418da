"""Tests for execution step narration and variable flow tracking."""

from pathlib import Path

from snippetflow.analysis.narrator import (
    COMPLEXITY_WEIGHTS,
    create_execution_step,
    generate_execution_steps,
    track_variable_flow,
)
from snippetflow.classify import classify_statements

FIXTURES = Path(__file__).resolve().parent / "fixtures" / "snippets"


def _fixture(name: str, profile: str):
    return classify_statements((FIXTURES / name).read_text(encoding="utf-8"), profile)


def test_one_step_per_statement():
    """Steps are numbered from 1 in source order and mirror their statements."""
    statements = _fixture("fibonacci.js", "javascript")
    steps = generate_execution_steps(statements)
    assert len(steps) == len(statements)
    assert [s.step_number for s in steps] == list(range(1, len(statements) + 1))
    assert [s.line_number for s in steps] == [s.line_number for s in statements]
    assert all(step.code == st.raw_text for step, st in zip(steps, statements))


def test_step_descriptions_by_kind():
    """Description, category and weight follow the statement kind."""
    steps = generate_execution_steps(_fixture("fibonacci.js", "javascript"))
    by_line = {s.line_number: s for s in steps}

    assert by_line[1].description == "Define function 'fibonacci'"
    assert by_line[1].category == "definition"
    assert by_line[1].complexity_weight == 2

    assert by_line[2].description == "Check condition: n <= 1"
    assert by_line[2].category == "control"

    assert by_line[6].description == "Declare variable 'a'"
    assert by_line[6].category == "memory"

    assert by_line[8].description == "Start for loop with 'i'"
    assert by_line[8].complexity_weight == 3

    assert by_line[9].description == "Assign value to 'temp'"
    assert by_line[14].description == "Return from function"
    assert by_line[18].description == "Call function 'log'"
    assert by_line[18].category == "execution"

    assert by_line[4].description == "Execute: }"
    assert by_line[4].complexity_weight == 1


def test_memory_events():
    """Declarations create, assignments update, loops create their variable."""
    statements = classify_statements(
        "let x = 1;\nx = 2;\nfor (let i = 0; i < 3; i++) {\n}\nfunction f() {\n}\nwhile (x) {\n}",
        "javascript",
    )
    events = [create_execution_step(s, n).memory_events for n, s in enumerate(statements, 1)]
    assert [(e.action, e.variable, e.kind) for e in events[0]] == [("create", "x", "variable")]
    assert [(e.action, e.variable, e.kind) for e in events[1]] == [("update", "x", "assignment")]
    assert [(e.action, e.variable, e.kind) for e in events[2]] == [("create", "i", "loop_variable")]
    assert [(e.action, e.variable, e.kind) for e in events[4]] == [("create", "f", "function")]
    assert events[6] == ()


def test_complexity_weights():
    """Loops weigh most; plain statements weigh one."""
    assert COMPLEXITY_WEIGHTS["for_loop"] == 3
    assert COMPLEXITY_WEIGHTS["while_loop"] == 3
    assert COMPLEXITY_WEIGHTS["conditional"] == 2
    assert COMPLEXITY_WEIGHTS["assignment"] == 1


def test_track_variable_flow_javascript():
    """Declarations are "declare"; assignments and loop variables are "modify"."""
    flow = track_variable_flow(_fixture("fibonacci.js", "javascript"))
    assert set(flow) == {"a", "b", "i", "temp"}
    assert [(e.line_number, e.action) for e in flow["a"]] == [(6, "declare"), (10, "modify")]
    assert [(e.line_number, e.kind, e.action) for e in flow["i"]] == [(8, "for_loop", "modify")]
    assert [(e.line_number, e.action) for e in flow["temp"]] == [(9, "modify")]


def test_track_variable_flow_python():
    """Python tuple targets record every name."""
    flow = track_variable_flow(_fixture("fibonacci.py", "python"))
    assert [(e.line_number, e.action) for e in flow["a"]] == [(5, "declare"), (9, "declare")]
    assert [(e.line_number, e.action) for e in flow["b"]] == [(5, "declare"), (10, "declare")]
    assert [e.line_number for e in flow["i"]] == [7]


def test_empty_input():
    """No statements: no steps, no flow."""
    assert generate_execution_steps(()) == ()
    assert track_variable_flow(()) == {}
