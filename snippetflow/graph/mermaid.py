"""
Generate a Mermaid flowchart from a serialized control-flow graph dict.
"""

from __future__ import annotations

from snippetflow.graph.builder import escape_label
from snippetflow.graph.graph import ControlFlowGraph, control_flow_graph_to_dict

SHAPE_DELIMITERS: dict[str, tuple[str, str]] = {
    "process": ("[", "]"),
    "terminal": ("(", ")"),
    "decision": ("{", "}"),
}

# Node kind -> Mermaid class name
NODE_CLASSES: dict[str, str] = {
    "start": "startEnd",
    "end": "startEnd",
    "conditional": "condition",
    "for_loop": "condition",
    "while_loop": "condition",
    "function_definition": "function",
    "variable_declaration": "assignment",
    "assignment": "assignment",
    "return": "return",
}
DEFAULT_NODE_CLASS = "process"

CLASS_DEFS: tuple[tuple[str, str], ...] = (
    ("startEnd", "fill:#e8f5e8,stroke:#27ae60,stroke-width:3px,color:#000"),
    ("condition", "fill:#fff3cd,stroke:#ffc107,stroke-width:2px,color:#000"),
    ("process", "fill:#e3f2fd,stroke:#2196f3,stroke-width:2px,color:#000"),
    ("function", "fill:#f3e5f5,stroke:#9c27b0,stroke-width:2px,color:#000"),
    ("assignment", "fill:#e8f5e8,stroke:#4caf50,stroke-width:2px,color:#000"),
    ("return", "fill:#ffebee,stroke:#f44336,stroke-width:2px,color:#000"),
)


def graph_dict_to_mermaid(
    d: dict,
    *,
    direction: str = "TD",
    include_styles: bool = True,
) -> str:
    """
    Produce a Mermaid flowchart string from a graph dict (from control_flow_graph_to_dict).

    Nodes are declared as id + shape delimiters around a quoted label, which the
    builder has already escaped; edges as `a --> b` or `a -->|"label"| b`, with
    edge labels escaped here. An edge carrying a style is followed by a
    `linkStyle <index>` line, where index is the edge's position in declaration order.

    Args:
        d: Dict with keys nodes and edges (each list), as produced by control_flow_graph_to_dict.
        direction: Flowchart direction (TD, TB, LR, ...).
        include_styles: Emit linkStyle directives and class definitions.

    Returns:
        Mermaid flowchart string.
    """
    lines = [f"flowchart {direction}"]
    for n in d.get("nodes", []):
        open_, close = SHAPE_DELIMITERS.get(n.get("shape", "process"), SHAPE_DELIMITERS["process"])
        lines.append(f'    {n["id"]}{open_}"{n.get("label", n["id"])}"{close}')

    for index, e in enumerate(d.get("edges", [])):
        label = e.get("label")
        if label:
            lines.append(f'    {e["source"]} -->|"{escape_label(label)}"| {e["target"]}')
        else:
            lines.append(f'    {e["source"]} --> {e["target"]}')
        if include_styles and e.get("style"):
            lines.append(f"    linkStyle {index} {e['style']}")

    if include_styles and d.get("nodes"):
        members: dict[str, list[str]] = {}
        for n in d["nodes"]:
            cls = NODE_CLASSES.get(n.get("kind", ""), DEFAULT_NODE_CLASS)
            members.setdefault(cls, []).append(n["id"])
        lines.append("")
        lines.append("    %% Styling")
        for cls, style in CLASS_DEFS:
            lines.append(f"    classDef {cls} {style}")
        for cls, _ in CLASS_DEFS:
            if cls in members:
                lines.append(f"    class {','.join(members[cls])} {cls}")
    return "\n".join(lines)


def control_flow_graph_to_mermaid(g: ControlFlowGraph, **kwargs) -> str:
    """Convenience: graph_dict_to_mermaid(control_flow_graph_to_dict(g), ...)."""
    return graph_dict_to_mermaid(control_flow_graph_to_dict(g), **kwargs)
