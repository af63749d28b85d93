"""
Core type definitions for scopeview.

Raw graph records arrive from the inference engine as JSON and are parsed
into pydantic models. Built elements are pydantic models too, so they can be
dumped straight into the renderer payload.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import TensorShapeError


class ElementKind(StrEnum):
    """Variants of a built graph element."""
    LEAF = "leaf"
    METANODE = "metanode"
    EDGE = "edge"


class DataType(StrEnum):
    """Datatype tags carried by tensor values."""
    U8 = "U8"
    I8 = "I8"
    I32 = "I32"
    F32 = "F32"
    F64 = "F64"
    STRING = "String"


class RawNode(BaseModel):
    """
    One operation as emitted by the engine.

    `name` is the slash-separated scope path and is unique across the graph.
    """
    id: int
    name: str
    op: str
    op_name: str = ""
    other: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore")


class RawEdge(BaseModel):
    """
    Data dependency between two raw nodes, referenced by numeric id.

    The wire format spells the source field `scr_node_id`.
    """
    id: int
    source_node_id: int = Field(alias="scr_node_id")
    target_node_id: int = Field(alias="dst_node_id")
    label: Union[List[Any], str, None] = None
    other: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class RawGraph(BaseModel):
    """Complete raw input for one build."""
    nodes: List[RawNode] = Field(default_factory=list)
    edges: List[RawEdge] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class GraphElement(BaseModel):
    """
    Flat element handed to the renderer.

    Leaves and metanodes may carry a `parent` (the id of the enclosing
    metanode). Edges carry `source`/`target` element ids instead.
    """
    id: str
    kind: ElementKind
    label: str = ""
    parent: str | None = None
    path: str = ""
    op: str = ""
    op_name: str = ""
    color: str | None = None
    source: str | None = None
    target: str | None = None
    other: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def is_metanode(self) -> bool:
        return self.kind == ElementKind.METANODE

    @property
    def is_edge(self) -> bool:
        return self.kind == ElementKind.EDGE

    def to_renderer_dict(self) -> Dict[str, Any]:
        """Dump in the `{group, data}` shape browser graph renderers expect."""
        data = self.model_dump(exclude_none=True, mode="json")
        return {"group": "edges" if self.is_edge else "nodes", "data": data}


# =============================================================================
# Tensor values
# =============================================================================

@dataclass(frozen=True)
class UnknownTensor:
    """A value that depends on the graph input and has no static content."""

    def is_known(self) -> bool:
        return False


@dataclass(frozen=True)
class KnownTensor:
    """
    A value with static content.

    `content` is flat and laid out row-major over `shape`. The pair is not
    checked here; the formatter validates before rendering anything.
    """
    datatype: DataType
    shape: Tuple[Any, ...]
    content: Tuple[Any, ...]

    def is_known(self) -> bool:
        return True

    @property
    def rank(self) -> int:
        return len(self.shape)


TensorValue = Union[UnknownTensor, KnownTensor]


def parse_tensor_value(wire: Any) -> TensorValue:
    """
    Parse the engine's tagged tensor value.

    Accepts `"Unknown"`, `{"Unknown": ...}` and
    `{"Only": [datatype, shape, content]}`.
    """
    if wire == "Unknown" or (isinstance(wire, dict) and "Unknown" in wire):
        return UnknownTensor()

    if isinstance(wire, dict) and "Only" in wire:
        payload = wire["Only"]
        if not isinstance(payload, (list, tuple)) or len(payload) != 3:
            raise TensorShapeError(None, None, "'Only' must hold [datatype, shape, content]")
        datatype, shape, content = payload
        try:
            dt = DataType(datatype)
        except ValueError:
            raise TensorShapeError(shape, None, f"unknown datatype {datatype!r}") from None
        if not isinstance(shape, (list, tuple)) or not isinstance(content, (list, tuple)):
            raise TensorShapeError(shape, None, "shape and content must be sequences")
        return KnownTensor(datatype=dt, shape=tuple(shape), content=tuple(content))

    raise TensorShapeError(None, None, f"unrecognised tensor value: {wire!r}")
