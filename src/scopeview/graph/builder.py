"""
Graph Model Builder.

Turns a raw graph into the flat element collection consumed by the renderer:
one leaf per raw node, one metanode per scope, one edge per raw edge. Any
malformed record aborts the build before a model is returned.
"""

import colorsys
import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from ..config import (
    EDGE_COLOR,
    OP_COLOR_LIGHTNESS,
    OP_COLOR_SATURATION,
    PATH_SEPARATOR,
)
from ..core.errors import DanglingReferenceError, GraphModelError
from ..core.types import ElementKind, GraphElement, RawEdge, RawGraph
from .hierarchy import PathHierarchy, edge_id, node_id

logger = logging.getLogger(__name__)


def op_color(op_name: str) -> str:
    """
    Stable color for an op name.

    The hue comes from the MD5 digest of the name, so the same op gets the
    same color in every process and on every rebuild.
    """
    digest = hashlib.md5(op_name.encode("utf-8")).hexdigest()
    hue = int(digest[:8], 16) % 360
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, OP_COLOR_LIGHTNESS, OP_COLOR_SATURATION)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


def shape_label(descriptor: Any) -> str:
    """Edge label for a shape descriptor: `[2, None]` -> `2x?`."""
    if descriptor is None:
        return ""
    if isinstance(descriptor, str):
        return descriptor
    if isinstance(descriptor, (list, tuple)):
        if not descriptor:
            return "scalar"
        return "x".join("?" if dim is None else str(dim) for dim in descriptor)
    return str(descriptor)


@dataclass
class GraphModel:
    """Result of one build: the hierarchy plus the flat element collection."""
    hierarchy: PathHierarchy
    elements: List[GraphElement] = field(default_factory=list)
    _by_id: Dict[str, GraphElement] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        self._by_id = {e.id: e for e in self.elements}

    def get(self, element_id: str) -> Optional[GraphElement]:
        return self._by_id.get(element_id)

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._by_id

    def __iter__(self) -> Iterator[GraphElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def leaves(self) -> List[GraphElement]:
        return [e for e in self.elements if e.kind == ElementKind.LEAF]

    @property
    def metanodes(self) -> List[GraphElement]:
        return [e for e in self.elements if e.kind == ElementKind.METANODE]

    @property
    def edges(self) -> List[GraphElement]:
        return [e for e in self.elements if e.kind == ElementKind.EDGE]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elements": [e.to_renderer_dict() for e in self.elements],
            "stats": {
                "leaf_count": len(self.leaves),
                "metanode_count": len(self.metanodes),
                "edge_count": len(self.edges),
            },
        }


class GraphModelBuilder:
    """
    Builds a GraphModel from a RawGraph.

    The builder is stateless between builds; every call constructs a fresh
    hierarchy and element list.
    """

    def __init__(self, separator: str = PATH_SEPARATOR):
        self.separator = separator

    def build(self, raw: RawGraph) -> GraphModel:
        hierarchy = PathHierarchy(raw.nodes, separator=self.separator)

        elements: List[GraphElement] = hierarchy.get_metanodes()
        for node in raw.nodes:
            elements.append(
                GraphElement(
                    id=node_id(node.name),
                    kind=ElementKind.LEAF,
                    label=hierarchy.get_name(node.name),
                    parent=hierarchy.get_parent(node.name),
                    path=node.name,
                    op=node.op,
                    op_name=node.op_name,
                    color=op_color(node.op_name),
                    other=dict(node.other),
                )
            )

        for edge in raw.edges:
            elements.append(self._build_edge(edge, hierarchy))

        self._check_unique(elements)
        model = GraphModel(hierarchy=hierarchy, elements=elements)
        logger.debug(
            f"Built graph model: {len(raw.nodes)} leaves, "
            f"{hierarchy.scope_count} metanodes, {len(raw.edges)} edges"
        )
        return model

    def _build_edge(self, edge: RawEdge, hierarchy: PathHierarchy) -> GraphElement:
        try:
            source = hierarchy.get_path(edge.source_node_id)
            target = hierarchy.get_path(edge.target_node_id)
        except DanglingReferenceError as e:
            raise DanglingReferenceError(e.node_id, edge.id) from None

        return GraphElement(
            id=edge_id(edge.id),
            kind=ElementKind.EDGE,
            label=shape_label(edge.label),
            source=node_id(source),
            target=node_id(target),
            path=f"{source} -> {target}",
            color=EDGE_COLOR,
            other=dict(edge.other),
        )

    @staticmethod
    def _check_unique(elements: List[GraphElement]) -> None:
        seen = set()
        for element in elements:
            if element.id in seen:
                raise GraphModelError(f"Duplicate element id {element.id!r}")
            seen.add(element.id)
