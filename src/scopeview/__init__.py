"""
scopeview - Hierarchical computation graph viewer.

Turns a flat list of namespaced operations and data edges into a nested
element graph with collapsible scopes, tracks collapse and highlight state
for an interactive renderer, and formats tensor values attached to
elements.

Key Components:
- graph: scope hierarchy and element graph builder
- interaction: click disambiguation and the interaction controller
- tensor: tensor value formatting and export
- render: standalone HTML view

Usage:
    from scopeview import GraphModelBuilder, load_raw_graph

    model = GraphModelBuilder().build(load_raw_graph("graph.json"))
"""

__version__ = "0.1.0"

from .core.errors import (
    DanglingReferenceError, DuplicateNodeNameError, ExportError,
    GraphModelError, ScopeViewError, TensorShapeError,
)
from .core.types import (
    DataType, ElementKind, GraphElement, KnownTensor,
    RawEdge, RawGraph, RawNode, UnknownTensor, parse_tensor_value,
)
from .graph.builder import GraphModel, GraphModelBuilder
from .graph.hierarchy import PathHierarchy
from .graph.loader import load_raw_graph
from .interaction.controller import InteractionController
from .tensor.formatter import TensorFormatter
from .viewer import ScopeViewer

__all__ = [
    "__version__",
    "DataType",
    "ElementKind",
    "GraphElement",
    "KnownTensor",
    "RawEdge",
    "RawGraph",
    "RawNode",
    "UnknownTensor",
    "parse_tensor_value",
    "ScopeViewError",
    "GraphModelError",
    "DuplicateNodeNameError",
    "DanglingReferenceError",
    "TensorShapeError",
    "ExportError",
    "PathHierarchy",
    "GraphModel",
    "GraphModelBuilder",
    "load_raw_graph",
    "InteractionController",
    "TensorFormatter",
    "ScopeViewer",
]
