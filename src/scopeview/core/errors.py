"""
Exception hierarchy for scopeview.

Every error names the record that caused it so the CLI can print a useful
diagnostic. Malformed input aborts the whole build; nothing partial is
returned.
"""

from typing import Any, Iterable, Optional


class ScopeViewError(Exception):
    """Base class for all scopeview errors."""


class ConfigError(ScopeViewError):
    """Invalid configuration file or value."""


class GraphModelError(ScopeViewError):
    """The raw graph cannot be turned into a consistent element graph."""


class DuplicateNodeNameError(GraphModelError):
    def __init__(self, name: str, node_ids: Iterable[int]):
        self.name = name
        self.node_ids = tuple(node_ids)
        super().__init__(f"Duplicate node name {name!r} (node ids {list(self.node_ids)})")


class DanglingReferenceError(GraphModelError):
    def __init__(self, node_id: Any, edge_id: Optional[int] = None):
        self.node_id = node_id
        self.edge_id = edge_id
        where = f" referenced by edge {edge_id}" if edge_id is not None else ""
        super().__init__(f"Unknown node id {node_id!r}{where}")


class TensorShapeError(ScopeViewError):
    """Tensor shape and content disagree, or the shape itself is invalid."""

    def __init__(self, shape: Any, content_length: Optional[int], reason: str):
        self.shape = shape
        self.content_length = content_length
        self.reason = reason
        super().__init__(f"Invalid tensor (shape={shape!r}, content length={content_length}): {reason}")


class ExportError(ScopeViewError):
    """The export artifact could not be written."""

    def __init__(self, path: Any, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to export to {path}: {cause}")
