"""Scope hierarchy and element graph construction."""

from .builder import GraphModel, GraphModelBuilder, op_color, shape_label
from .hierarchy import PathHierarchy, edge_id, node_id, scope_id
from .loader import load_raw_graph, parse_raw_graph

__all__ = [
    "GraphModel",
    "GraphModelBuilder",
    "PathHierarchy",
    "op_color",
    "shape_label",
    "scope_id",
    "node_id",
    "edge_id",
    "load_raw_graph",
    "parse_raw_graph",
]
