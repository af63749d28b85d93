"""
Scope hierarchy built from slash-separated node names.

Every proper, non-empty prefix of a multi-segment name is a scope, and every
scope becomes exactly one metanode, whether it holds one child or many.
The tree is built once per raw graph as an arena of ScopeRecords with parent
indices, plus lookup maps, so queries never re-parse strings.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import METANODE_COLOR, METANODE_OP, PATH_SEPARATOR
from ..core.errors import DanglingReferenceError, DuplicateNodeNameError, GraphModelError
from ..core.types import ElementKind, GraphElement, RawNode

logger = logging.getLogger(__name__)

SCOPE_PREFIX = "scope:"
NODE_PREFIX = "node:"
EDGE_PREFIX = "edge:"


def scope_id(path: str) -> str:
    """Element id of the metanode for a scope prefix."""
    return f"{SCOPE_PREFIX}{path}"


def node_id(name: str) -> str:
    """Element id of the leaf for a raw node name."""
    return f"{NODE_PREFIX}{name}"


def edge_id(raw_id: int) -> str:
    """Element id of the edge for a raw edge id."""
    return f"{EDGE_PREFIX}{raw_id}"


@dataclass
class ScopeRecord:
    """One scope in the arena."""
    path: str
    segments: Tuple[str, ...]
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    leaves: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.segments[-1]


class PathHierarchy:
    """
    Prefix tree over the names of a raw node collection.

    Raises DuplicateNodeNameError when two nodes share a name and
    GraphModelError when two nodes share an id.
    """

    def __init__(self, nodes: Iterable[RawNode], separator: str = PATH_SEPARATOR):
        self.separator = separator
        self._scopes: List[ScopeRecord] = []
        self._scope_index: Dict[str, int] = {}
        self._nodes_by_name: Dict[str, RawNode] = {}
        self._names_by_id: Dict[int, str] = {}

        self._build(list(nodes))

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    def _build(self, nodes: List[RawNode]) -> None:
        ids_by_name: Dict[str, List[int]] = defaultdict(list)
        for node in nodes:
            ids_by_name[node.name].append(node.id)
        for name, ids in ids_by_name.items():
            if len(ids) > 1:
                raise DuplicateNodeNameError(name, ids)

        for node in nodes:
            if node.id in self._names_by_id:
                raise GraphModelError(
                    f"Duplicate node id {node.id} "
                    f"({self._names_by_id[node.id]!r} and {node.name!r})"
                )
            self._names_by_id[node.id] = node.name
            self._nodes_by_name[node.name] = node

            parent_index = self._ensure_scopes(self._split(node.name)[:-1])
            if parent_index is not None:
                self._scopes[parent_index].leaves.append(node.name)

        logger.debug(
            f"Built hierarchy: {len(self._nodes_by_name)} nodes, {len(self._scopes)} scopes"
        )

    def _ensure_scopes(self, segments: Tuple[str, ...]) -> Optional[int]:
        """Create the scope chain for `segments`; return the innermost index."""
        parent: Optional[int] = None
        for depth in range(1, len(segments) + 1):
            path = self.separator.join(segments[:depth])
            if not path:
                continue
            index = self._scope_index.get(path)
            if index is None:
                index = len(self._scopes)
                self._scopes.append(ScopeRecord(path=path, segments=segments[:depth], parent=parent))
                self._scope_index[path] = index
                if parent is not None:
                    self._scopes[parent].children.append(index)
            parent = index
        return parent

    def _split(self, name: str) -> Tuple[str, ...]:
        return tuple(name.split(self.separator))

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get_parent_path(self, name: str) -> Optional[str]:
        """Path of the immediately containing scope, or None at top level."""
        segments = self._split(name)
        if len(segments) < 2:
            return None
        path = self.separator.join(segments[:-1])
        return path or None

    def get_parent(self, name: str) -> Optional[str]:
        """Element id of the immediately containing scope, or None at top level."""
        path = self.get_parent_path(name)
        return scope_id(path) if path is not None else None

    def get_name(self, name: str) -> str:
        """Last path segment, used as the display label."""
        return self._split(name)[-1]

    def get_path(self, raw_node_id: int) -> str:
        """
        Resolve a raw node id to its full name.

        Raises DanglingReferenceError if no node has that id.
        """
        try:
            return self._names_by_id[raw_node_id]
        except KeyError:
            raise DanglingReferenceError(raw_node_id) from None

    def get_node(self, name: str) -> Optional[RawNode]:
        return self._nodes_by_name.get(name)

    def get_metanodes(self) -> List[GraphElement]:
        """One metanode per distinct scope, outer scopes first."""
        metanodes = []
        for record in self._scopes:
            parent = self._scopes[record.parent].path if record.parent is not None else None
            metanodes.append(
                GraphElement(
                    id=scope_id(record.path),
                    kind=ElementKind.METANODE,
                    label=record.name,
                    parent=scope_id(parent) if parent is not None else None,
                    path=record.path,
                    op=METANODE_OP,
                    op_name=METANODE_OP,
                    color=METANODE_COLOR,
                )
            )
        return metanodes

    def is_scope(self, path: str) -> bool:
        return path in self._scope_index

    def ancestors(self, name: str) -> List[str]:
        """Scope paths enclosing `name`, innermost first."""
        result = []
        path = self.get_parent_path(name)
        while path is not None:
            result.append(path)
            path = self.get_parent_path(path)
        return result

    def children(self, path: str) -> List[str]:
        """Direct sub-scopes and leaf names inside the scope `path`."""
        index = self._scope_index.get(path)
        if index is None:
            return []
        record = self._scopes[index]
        return [self._scopes[i].path for i in record.children] + list(record.leaves)

    def depth(self, name: str) -> int:
        """Number of enclosing scopes."""
        return len(self.ancestors(name))

    @property
    def node_names(self) -> List[str]:
        return list(self._nodes_by_name)

    @property
    def scope_count(self) -> int:
        return len(self._scopes)

    def __len__(self) -> int:
        return len(self._nodes_by_name)
