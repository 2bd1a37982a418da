"""Edge type for the control-flow graph."""

from __future__ import annotations

from dataclasses import dataclass

LABEL_YES = "Yes"
LABEL_NO = "No"
LABEL_CONTINUE = "Continue"
LABEL_EXIT = "Exit"
LABEL_LOOP = "Loop"

STYLE_YES = "stroke:#27ae60,stroke-width:2px"
STYLE_NO = "stroke:#e74c3c,stroke-width:2px"
STYLE_CONTINUE = "stroke:#3498db,stroke-width:2px"
STYLE_EXIT = "stroke:#e74c3c,stroke-width:2px"
STYLE_LOOP = "stroke:#f39c12,stroke-width:2px,stroke-dasharray: 5 5"


@dataclass(frozen=True)
class Edge:
    """A directed edge between node ids; label and style mark branch outcomes."""

    source: str
    target: str
    label: str | None = None
    style: str | None = None
