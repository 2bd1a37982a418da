"""Control-flow graph construction and serialization."""

from snippetflow.graph.blocks import BlockBoundary, BlockScanner, resolve_block_boundaries
from snippetflow.graph.builder import (
    build_control_flow_graph,
    escape_label,
    statement_label,
    truncate_label,
)
from snippetflow.graph.edges import Edge
from snippetflow.graph.graph import ControlFlowGraph, control_flow_graph_to_dict
from snippetflow.graph.mermaid import control_flow_graph_to_mermaid, graph_dict_to_mermaid
from snippetflow.graph.nodes import END_ID, START_ID, Node

__all__ = [
    "END_ID",
    "START_ID",
    "BlockBoundary",
    "BlockScanner",
    "ControlFlowGraph",
    "Edge",
    "Node",
    "build_control_flow_graph",
    "control_flow_graph_to_dict",
    "control_flow_graph_to_mermaid",
    "escape_label",
    "graph_dict_to_mermaid",
    "resolve_block_boundaries",
    "statement_label",
    "truncate_label",
]
