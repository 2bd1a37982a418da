"""
ControlFlowGraph: ordered nodes and edges plus a validity flag for the indentation heuristic.
"""

from __future__ import annotations

from dataclasses import dataclass

from snippetflow.graph.edges import Edge
from snippetflow.graph.nodes import END_ID, START_ID, Node


@dataclass(frozen=True)
class ControlFlowGraph:
    """
    Nodes in source order (start first, end last) and edges in construction order.

    confident is False when the input's indentation was flagged as inconsistent, in
    which case branch targets found by the depth scan may be wrong; warnings says why.
    """

    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]
    start_id: str = START_ID
    end_id: str = END_ID
    confident: bool = True
    warnings: tuple[str, ...] = ()

    def node(self, node_id: str) -> Node | None:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def successors(self, node_id: str) -> list[str]:
        """Targets of edges leaving node_id (construction order, duplicates kept)."""
        return [e.target for e in self.edges if e.source == node_id]

    def predecessors(self, node_id: str) -> list[str]:
        return [e.source for e in self.edges if e.target == node_id]

    def out_degree(self, node_id: str) -> int:
        return sum(1 for e in self.edges if e.source == node_id)

    def in_degree(self, node_id: str) -> int:
        return sum(1 for e in self.edges if e.target == node_id)


def control_flow_graph_to_dict(g: ControlFlowGraph) -> dict:
    """
    Return a JSON-serializable dict. Node and edge order is kept as built:
    edge position is the Mermaid link index used by style directives.
    """
    return {
        "start_id": g.start_id,
        "end_id": g.end_id,
        "confident": g.confident,
        "warnings": list(g.warnings),
        "nodes": [
            {
                "id": n.id,
                "kind": n.kind,
                "label": n.label,
                "shape": n.shape,
                "line_number": n.line_number,
            }
            for n in g.nodes
        ],
        "edges": [
            {"source": e.source, "target": e.target, "label": e.label, "style": e.style}
            for e in g.edges
        ],
    }
