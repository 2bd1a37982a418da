"""Node type for the control-flow graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

NodeShape = Literal["terminal", "decision", "process"]

SHAPE_TERMINAL = "terminal"
SHAPE_DECISION = "decision"
SHAPE_PROCESS = "process"

KIND_START = "start"
KIND_END = "end"

# Mermaid reserves "end"; keep terminal ids away from it
START_ID = "Start"
END_ID = "EndNode"


@dataclass(frozen=True)
class Node:
    """One graph node: the start/end terminal or a single classified statement."""

    id: str
    kind: str  # "start", "end", or a StatementKind
    label: str
    shape: NodeShape
    line_number: int | None = None


def statement_node_id(line_number: int) -> str:
    """Statement nodes are keyed by source line (unique within one analysis)."""
    return f"L{line_number}"
