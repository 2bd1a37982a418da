"""
Build a ControlFlowGraph from a classified statement stream.

Edges: sequential chaining by default; conditionals branch Yes/No; loops branch
Continue/Exit and get a Loop back-edge from the last body statement; returns also
jump straight to the end node. Branch targets come from indentation depth
(see snippetflow.graph.blocks).
"""

from __future__ import annotations

from typing import Sequence

from snippetflow.classify.indentation import IndentationIssue
from snippetflow.classify.statement import (
    KIND_ASSIGNMENT,
    KIND_CALL,
    KIND_CONDITIONAL,
    KIND_FOR,
    KIND_FUNCTION,
    KIND_RETURN,
    KIND_VARIABLE,
    KIND_WHILE,
    LOOP_KINDS,
    Statement,
)
from snippetflow.graph.blocks import resolve_block_boundaries
from snippetflow.graph.edges import (
    LABEL_CONTINUE,
    LABEL_EXIT,
    LABEL_LOOP,
    LABEL_NO,
    LABEL_YES,
    STYLE_CONTINUE,
    STYLE_EXIT,
    STYLE_LOOP,
    STYLE_NO,
    STYLE_YES,
    Edge,
)
from snippetflow.graph.graph import ControlFlowGraph
from snippetflow.graph.nodes import (
    END_ID,
    KIND_END,
    KIND_START,
    SHAPE_DECISION,
    SHAPE_PROCESS,
    SHAPE_TERMINAL,
    START_ID,
    Node,
    statement_node_id,
)

DEFAULT_LABEL_MAX_LENGTH = 25
ELLIPSIS = "..."


def escape_label(text: str) -> str:
    """Collapse newlines and escape double quotes for a quoted Mermaid label."""
    return text.replace("\r", " ").replace("\n", " ").replace('"', "#quot;")


def truncate_label(text: str, max_length: int = DEFAULT_LABEL_MAX_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[: max(0, max_length - len(ELLIPSIS))] + ELLIPSIS


def statement_label(statement: Statement, max_length: int = DEFAULT_LABEL_MAX_LENGTH) -> str:
    """Kind-specific node text, truncated to max_length and escaped."""
    kind = statement.kind
    if kind in (KIND_VARIABLE, KIND_ASSIGNMENT):
        text = f"{statement.name} = value"
    elif kind == KIND_FUNCTION:
        text = f"function {statement.name}()"
    elif kind == KIND_CONDITIONAL:
        text = statement.condition or "condition"
    elif kind == KIND_FOR:
        text = f"for {statement.loop_variable}" if statement.loop_variable else "for loop"
    elif kind == KIND_WHILE:
        text = statement.condition or "while condition"
    elif kind == KIND_CALL:
        text = f"{statement.name}()"
    elif kind == KIND_RETURN:
        text = "return"
    else:
        text = statement.raw_text
    if kind in LOOP_KINDS:
        text = f"Loop: {text}"
    return escape_label(truncate_label(text, max_length))


def statement_shape(statement: Statement) -> str:
    if statement.kind == KIND_CONDITIONAL or statement.kind in LOOP_KINDS:
        return SHAPE_DECISION
    return SHAPE_PROCESS


def build_control_flow_graph(
    statements: Sequence[Statement],
    *,
    indentation_issues: Sequence[IndentationIssue] = (),
    label_max_length: int = DEFAULT_LABEL_MAX_LENGTH,
) -> ControlFlowGraph:
    """
    Build the graph for a statement stream.

    Args:
        statements: Classified statements in source order.
        indentation_issues: Result of the optional indentation check; any issue marks
            the graph as not confident.
        label_max_length: Character budget for node labels.

    Returns:
        ControlFlowGraph with a Start node, one node per statement, and an EndNode.
    """
    nodes: list[Node] = [Node(START_ID, KIND_START, "START", SHAPE_TERMINAL)]
    for s in statements:
        nodes.append(
            Node(
                id=statement_node_id(s.line_number),
                kind=s.kind,
                label=statement_label(s, label_max_length),
                shape=statement_shape(s),
                line_number=s.line_number,
            )
        )
    nodes.append(Node(END_ID, KIND_END, "END", SHAPE_TERMINAL))

    # nodes[i + 1] is statement i; nodes[-1] is the end node
    ids = [n.id for n in nodes]

    def id_of(index: int | None) -> str:
        return END_ID if index is None else ids[index + 1]

    boundaries = resolve_block_boundaries(statements)
    edges: list[Edge] = [Edge(START_ID, ids[1])]

    for i, s in enumerate(statements):
        current = ids[i + 1]
        following = ids[i + 2]
        if s.kind == KIND_CONDITIONAL:
            boundary = boundaries[i]
            edges.append(Edge(current, following, LABEL_YES, STYLE_YES))
            edges.append(Edge(current, id_of(boundary.exit_index), LABEL_NO, STYLE_NO))
        elif s.kind in LOOP_KINDS:
            boundary = boundaries[i]
            edges.append(Edge(current, following, LABEL_CONTINUE, STYLE_CONTINUE))
            edges.append(Edge(current, id_of(boundary.exit_index), LABEL_EXIT, STYLE_EXIT))
            if boundary.last_body_index is not None:
                edges.append(
                    Edge(id_of(boundary.last_body_index), current, LABEL_LOOP, STYLE_LOOP)
                )
        else:
            edges.append(Edge(current, following))
            if s.kind == KIND_RETURN and following != END_ID:
                edges.append(Edge(current, END_ID))

    return ControlFlowGraph(
        nodes=tuple(nodes),
        edges=tuple(edges),
        confident=not indentation_issues,
        warnings=tuple(issue.message for issue in indentation_issues),
    )
