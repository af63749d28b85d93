"""
Interaction Controller.

Owns the two pieces of UI state, collapse flags per metanode and the single
highlight, and maps renderer click events onto them:

- metanode click: disambiguated; a double click toggles collapse, a single
  click behaves like a background click
- background click: clears the highlight
- leaf or edge click: highlights that element

State is updated synchronously. Layout requests go to the renderer and are
not awaited.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from ..config import DEBOUNCE_WINDOW_SECONDS
from ..core.types import ElementKind, GraphElement
from ..graph.builder import GraphModel
from .clicks import ClickDisambiguator, Scheduler
from .renderer import Renderer

logger = logging.getLogger(__name__)

ClickTarget = Union[GraphElement, str, None]


@dataclass
class CollapseState:
    """Collapse flag per metanode id. True means collapsed."""
    flags: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def all_collapsed(cls, model: GraphModel) -> "CollapseState":
        return cls(flags={m.id: True for m in model.metanodes})

    def __contains__(self, metanode_id: str) -> bool:
        return metanode_id in self.flags

    def __iter__(self) -> Iterator[str]:
        return iter(self.flags)

    def is_collapsed(self, metanode_id: str) -> bool:
        return self.flags.get(metanode_id, False)

    def toggle(self, metanode_id: str) -> bool:
        self.flags[metanode_id] = not self.flags[metanode_id]
        return self.flags[metanode_id]

    @property
    def collapsed(self) -> List[str]:
        return [mid for mid, flag in self.flags.items() if flag]


@dataclass
class HighlightState:
    """At most one highlighted element."""
    current: Optional[str] = None

    def set(self, element_id: str) -> None:
        self.current = element_id

    def clear(self) -> None:
        self.current = None


class InteractionController:
    def __init__(
        self,
        model: GraphModel,
        renderer: Renderer,
        scheduler: Scheduler,
        debounce_window: float = DEBOUNCE_WINDOW_SECONDS,
    ):
        self.model = model
        self.renderer = renderer
        self.collapse = CollapseState.all_collapsed(model)
        self.highlight = HighlightState()
        self._clicks = ClickDisambiguator(
            scheduler,
            on_single=self._on_single_metanode_click,
            on_double=self._on_double_metanode_click,
            window=debounce_window,
        )

    # ------------------------------------------------------------------ #
    # Events
    # ------------------------------------------------------------------ #

    def on_click(self, target: ClickTarget) -> None:
        """Handle a renderer click event; None means the background."""
        element = self._resolve(target)
        if target is not None and element is None:
            logger.warning(f"Click on unknown element {target!r} ignored")
            return

        if element is not None and element.kind == ElementKind.METANODE:
            self._clicks.click(element.id)
            return

        # Any other click settles a pending metanode click first
        self._clicks.flush()
        if element is None:
            self.clear_highlight()
        else:
            self.set_highlight(element.id)

    def _on_single_metanode_click(self, metanode_id: str) -> None:
        self.clear_highlight()

    def _on_double_metanode_click(self, metanode_id: str) -> None:
        self.toggle_collapse(metanode_id)

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #

    def toggle_collapse(self, metanode_id: str) -> None:
        """Flip a metanode's collapse flag. Unknown ids are ignored."""
        if metanode_id not in self.collapse:
            logger.warning(f"Toggle on unknown metanode {metanode_id!r} ignored")
            return
        collapsed = self.collapse.toggle(metanode_id)
        logger.debug(f"{metanode_id} is now {'collapsed' if collapsed else 'expanded'}")
        self.renderer.request_layout(metanode_id, collapsed)

    def expand_all(self) -> None:
        for metanode_id in self.collapse.collapsed:
            self.toggle_collapse(metanode_id)

    def collapse_all(self) -> None:
        # Innermost first so every subtree is already folded when its parent closes
        for metanode in reversed(self.model.metanodes):
            if not self.collapse.is_collapsed(metanode.id):
                self.toggle_collapse(metanode.id)

    def set_highlight(self, element_id: str) -> None:
        previous = self.highlight.current
        if previous == element_id:
            return
        if previous is not None:
            self.renderer.set_highlight_marker(previous, False)
            self.highlight.clear()
        self.highlight.set(element_id)
        self.renderer.set_highlight_marker(element_id, True)
        logger.debug(f"Highlighted {element_id}")

    def clear_highlight(self) -> None:
        previous = self.highlight.current
        if previous is None:
            return
        self.highlight.clear()
        self.renderer.set_highlight_marker(previous, False)

    def reset(self, model: GraphModel, renderer: Renderer) -> None:
        """Start over after a full rebuild: everything collapsed, nothing highlighted."""
        self._clicks.cancel()
        self.model = model
        self.renderer = renderer
        self.collapse = CollapseState.all_collapsed(model)
        self.highlight = HighlightState()

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def click_phase(self):
        return self._clicks.phase

    def is_collapsed(self, metanode_id: str) -> bool:
        return self.collapse.is_collapsed(metanode_id)

    def visible_owner(self, element_id: str) -> str:
        """
        The element that stands in for `element_id` on screen: the outermost
        collapsed ancestor, or the element itself when nothing above it is
        collapsed.
        """
        owner = element_id
        element = self.model.get(element_id)
        while element is not None and element.parent is not None:
            if self.collapse.is_collapsed(element.parent):
                owner = element.parent
            element = self.model.get(element.parent)
        return owner

    def visible_elements(self) -> List[str]:
        """Ids of leaves and metanodes not folded inside a collapsed metanode."""
        return [
            e.id for e in self.model.elements
            if not e.is_edge and self.visible_owner(e.id) == e.id
        ]

    def visible_edges(self) -> List[Tuple[str, str, str]]:
        """
        Edges as drawn: `(edge_id, source, target)` with each endpoint moved
        to its visible owner. Edges folded entirely inside one metanode are
        left out.
        """
        result = []
        for edge in self.model.edges:
            source = self.visible_owner(edge.source)
            target = self.visible_owner(edge.target)
            if source != target:
                result.append((edge.id, source, target))
        return result

    def _resolve(self, target: ClickTarget) -> Optional[GraphElement]:
        if target is None:
            return None
        element_id = target.id if isinstance(target, GraphElement) else target
        return self.model.get(element_id)
