"""
Renderer contract.

The layout engine is an external collaborator. The controller only asks it
to re-run layout over a subtree and to toggle a highlight marker; it never
waits for either to finish.
"""

import logging
from typing import Dict, Iterable, List, Protocol, Set, Tuple

from ..graph.builder import GraphModel

logger = logging.getLogger(__name__)

HIGHLIGHT_CLASS = "highlighted"


class Renderer(Protocol):
    def request_layout(self, metanode_id: str, collapsed: bool) -> None:
        """Collapse or expand a metanode and re-run layout over its subtree."""
        ...

    def set_highlight_marker(self, element_id: str, highlighted: bool) -> None:
        """Add or remove the highlight marker on one element."""
        ...

    def close(self) -> None:
        """Release the renderer before it is replaced by a rebuild."""
        ...


class RendererFactory(Protocol):
    def __call__(self, model: GraphModel, collapsed: Iterable[str]) -> Renderer: ...


class HeadlessRenderer:
    """
    In-memory renderer.

    Keeps the element collection, the collapsed set and the style classes
    per element, and logs every request. Useful for scripting and for
    exercising the controller without a display.
    """

    def __init__(self, model: GraphModel, collapsed: Iterable[str] = ()):
        self.model = model
        self.collapsed: Set[str] = set(collapsed)
        self.classes: Dict[str, Set[str]] = {e.id: set() for e in model.elements}
        self.layout_requests: List[Tuple[str, bool]] = []
        self.closed = False

    def request_layout(self, metanode_id: str, collapsed: bool) -> None:
        if collapsed:
            self.collapsed.add(metanode_id)
        else:
            self.collapsed.discard(metanode_id)
        self.layout_requests.append((metanode_id, collapsed))
        logger.debug(f"Layout requested for {metanode_id} (collapsed={collapsed})")

    def set_highlight_marker(self, element_id: str, highlighted: bool) -> None:
        classes = self.classes.setdefault(element_id, set())
        if highlighted:
            classes.add(HIGHLIGHT_CLASS)
        else:
            classes.discard(HIGHLIGHT_CLASS)

    def close(self) -> None:
        self.closed = True

    @property
    def highlighted(self) -> List[str]:
        return [eid for eid, classes in self.classes.items() if HIGHLIGHT_CLASS in classes]
