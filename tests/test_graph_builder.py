"""
Tests for control-flow graph construction: nodes, sequential and branch edges, labels, confidence.
"""

from pathlib import Path

import pytest

from snippetflow.classify import check_indentation, classify_statements
from snippetflow.graph import (
    END_ID,
    START_ID,
    build_control_flow_graph,
    control_flow_graph_to_dict,
    escape_label,
    statement_label,
    truncate_label,
)

FIXTURES = Path(__file__).resolve().parent / "fixtures" / "snippets"


def _graph(text: str, profile: str = "javascript"):
    return build_control_flow_graph(classify_statements(text, profile))


def _edge_set(g) -> set[tuple[str, str, str | None]]:
    return {(e.source, e.target, e.label) for e in g.edges}


def test_empty_graph():
    """No statements: Start and EndNode joined by one edge."""
    g = build_control_flow_graph(())
    assert [n.id for n in g.nodes] == [START_ID, END_ID]
    assert len(g.edges) == 1
    assert (g.edges[0].source, g.edges[0].target) == (START_ID, END_ID)
    assert g.confident is True


def test_linear_chain():
    """Plain statements chain sequentially from Start to EndNode."""
    g = _graph("let a = 1;\nlet b = 2;\nfoo(a, b);")
    assert [n.id for n in g.nodes] == ["Start", "L1", "L2", "L3", "EndNode"]
    assert [(e.source, e.target) for e in g.edges] == [
        ("Start", "L1"),
        ("L1", "L2"),
        ("L2", "L3"),
        ("L3", "EndNode"),
    ]
    assert all(e.label is None for e in g.edges)


def test_node_shapes_and_kinds():
    """Terminals are terminal; conditionals and loops are decisions; the rest are processes."""
    g = _graph("if (x) {\n  y = 1;\n}\nwhile (y < 3) {\n  y++;\n}")
    shapes = {n.id: n.shape for n in g.nodes}
    assert shapes["Start"] == "terminal"
    assert shapes["EndNode"] == "terminal"
    assert shapes["L1"] == "decision"
    assert shapes["L2"] == "process"
    assert shapes["L4"] == "decision"
    assert g.node("L4").kind == "while_loop"
    assert g.node("L1").line_number == 1


def test_conditional_edges():
    """Yes goes to the next statement, No to the first statement back at the conditional's depth."""
    g = _graph("if (x > 1) {\n  y = 1;\n  z = 2;\n}\nfoo();")
    edges = _edge_set(g)
    assert ("L1", "L2", "Yes") in edges
    assert ("L1", "L4", "No") in edges
    styles = {e.label: e.style for e in g.edges if e.label}
    assert styles["Yes"] == "stroke:#27ae60,stroke-width:2px"
    assert styles["No"] == "stroke:#e74c3c,stroke-width:2px"


def test_conditional_without_exit_goes_to_end():
    """A conditional whose body runs to end of input branches No to EndNode."""
    g = _graph("if x:\n    y = 1", "python")
    assert ("L1", "EndNode", "No") in _edge_set(g)


def test_loop_edges_fibonacci():
    """Loop: Continue into the body, Exit past it, Loop back-edge from the last body statement."""
    g = build_control_flow_graph(
        classify_statements((FIXTURES / "fibonacci.js").read_text(encoding="utf-8"), "javascript")
    )
    edges = _edge_set(g)
    assert ("L8", "L9", "Continue") in edges
    assert ("L8", "L12", "Exit") in edges
    assert ("L11", "L8", "Loop") in edges
    loop_edge = next(e for e in g.edges if e.label == "Loop")
    assert "stroke-dasharray" in loop_edge.style
    assert len(g.nodes) == 15
    assert len(g.edges) == 19


def test_return_also_jumps_to_end():
    """A return keeps its sequential edge and adds an edge to EndNode."""
    g = _graph("if (x) {\n  return 1;\n}\nfoo();")
    assert g.successors("L2") == ["L3", "EndNode"]


def test_final_return_single_edge_to_end():
    """A return that is the last statement gets one edge to EndNode, not two."""
    g = _graph("foo();\nreturn 1;")
    assert g.successors("L2") == ["EndNode"]


def test_graph_invariants_on_fixtures():
    """Exactly one start and end terminal; every node reachable; edges >= nodes - 1."""
    for name, profile in [
        ("fibonacci.js", "javascript"),
        ("fibonacci.py", "python"),
        ("Fibonacci.java", "java"),
        ("fibonacci.cpp", "cpp"),
        ("bubble_sort.js", "javascript"),
        ("binary_search.js", "javascript"),
    ]:
        g = build_control_flow_graph(
            classify_statements((FIXTURES / name).read_text(encoding="utf-8"), profile)
        )
        kinds = [n.kind for n in g.nodes]
        assert kinds.count("start") == 1
        assert kinds.count("end") == 1
        assert len(g.edges) >= len(g.nodes) - 1
        assert g.in_degree(START_ID) == 0
        assert g.out_degree(END_ID) == 0
        ids = {n.id for n in g.nodes}
        assert all(e.source in ids and e.target in ids for e in g.edges)
        for n in g.nodes:
            if n.id != START_ID:
                assert g.in_degree(n.id) >= 1, f"{name}: {n.id} unreachable"


def test_statement_labels():
    """Labels depend on the statement kind."""
    statements = classify_statements(
        "function go(a) {\n  let total = 0;\n  for (let i = 0; i < a; i++) {\n"
        "    total += i;\n  }\n  while (total > 3) {\n    total--;\n  }\n  log(total);\n  return total;\n}",
        "javascript",
    )
    labels = [statement_label(s) for s in statements]
    assert labels == [
        "function go()",
        "total = value",
        "Loop: for i",
        "total = value",
        "}",
        "Loop: total > 3",
        "total = value",
        "}",
        "log()",
        "return",
        "}",
    ]


def test_truncate_label():
    """Labels longer than the budget keep budget - 3 characters plus an ellipsis."""
    assert truncate_label("short") == "short"
    assert truncate_label("x" * 25) == "x" * 25
    truncated = truncate_label("x" * 30)
    assert truncated == "x" * 22 + "..."
    assert len(truncated) == 25
    assert truncate_label("abcdefghij", 8) == "abcde..."


def test_escape_label():
    """Quotes and newlines cannot break a quoted Mermaid label."""
    assert escape_label('say "hi"') == "say #quot;hi#quot;"
    assert escape_label("a\nb") == "a b"


def test_label_max_length_setting():
    """A custom label budget applies to every statement node."""
    g = build_control_flow_graph(
        classify_statements("if (someVeryLongConditionName > anotherLongName) {\n}", "javascript"),
        label_max_length=10,
    )
    assert g.node("L1").label == "someVer..."


def test_indentation_issues_mark_graph_unconfident():
    """Inconsistent indentation keeps the graph but flags it."""
    text = "if (a) {\n   b = 1;\n}"
    issues = check_indentation(text, "javascript")
    g = build_control_flow_graph(classify_statements(text, "javascript"), indentation_issues=issues)
    assert g.confident is False
    assert len(g.warnings) == 1
    assert ("L1", "L2", "Yes") in _edge_set(g)


def test_graph_is_frozen():
    """ControlFlowGraph is immutable."""
    g = build_control_flow_graph(())
    with pytest.raises(Exception):  # dataclass.FrozenInstanceError
        g.confident = False


def test_control_flow_graph_to_dict():
    """Dict keeps nodes and edges in construction order."""
    d = control_flow_graph_to_dict(_graph("if (x) {\n  y = 1;\n}"))
    assert d["start_id"] == "Start"
    assert d["end_id"] == "EndNode"
    assert d["confident"] is True
    assert [n["id"] for n in d["nodes"]] == ["Start", "L1", "L2", "L3", "EndNode"]
    assert d["edges"][0] == {"source": "Start", "target": "L1", "label": None, "style": None}
    assert d["edges"][1]["label"] == "Yes"
    assert d["edges"][2] == {
        "source": "L1",
        "target": "L3",
        "label": "No",
        "style": "stroke:#e74c3c,stroke-width:2px",
    }
