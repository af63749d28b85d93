"""
Raw graph loading.

Reads the `{nodes, edges}` JSON emitted by the inference engine and
validates it into a RawGraph.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from ..core.errors import GraphModelError
from ..core.types import RawGraph

logger = logging.getLogger(__name__)


def parse_raw_graph(data: Dict[str, Any]) -> RawGraph:
    """Validate an already-decoded graph payload."""
    if not isinstance(data, dict):
        raise GraphModelError("Graph payload must be an object with 'nodes' and 'edges'")
    try:
        return RawGraph.model_validate(data)
    except ValidationError as e:
        # First error is enough to point at the offending record
        first = e.errors()[0]
        location = ".".join(str(p) for p in first["loc"])
        raise GraphModelError(f"Malformed graph record at {location}: {first['msg']}") from e


def load_raw_graph(path: Union[str, Path]) -> RawGraph:
    """Read and validate a raw graph JSON file."""
    graph_path = Path(path)
    try:
        data = json.loads(graph_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise GraphModelError(f"{graph_path} is not valid JSON: {e}") from e

    raw = parse_raw_graph(data)
    logger.debug(f"Loaded {len(raw.nodes)} nodes and {len(raw.edges)} edges from {graph_path}")
    return raw
