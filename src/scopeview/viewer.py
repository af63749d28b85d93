"""
Viewer session.

Ties the pieces together for one displayed graph. Every new raw graph is a
full rebuild: the model is built first (a malformed graph fails here and
leaves the current session as it was), then the previous renderer is
closed, a new one is created, and the interaction state goes back to its
defaults.
"""

import logging
from typing import Any, Dict, Optional

from .config import ViewerConfig
from .core.errors import ScopeViewError
from .core.types import ElementKind, RawGraph, parse_tensor_value
from .graph.builder import GraphModel, GraphModelBuilder
from .interaction.clicks import AsyncioScheduler, Scheduler
from .interaction.controller import ClickTarget, InteractionController
from .interaction.renderer import HeadlessRenderer, Renderer, RendererFactory
from .tensor.formatter import TensorDisplay, TensorFormatter

logger = logging.getLogger(__name__)


class ScopeViewer:
    def __init__(
        self,
        renderer_factory: RendererFactory = HeadlessRenderer,
        scheduler: Optional[Scheduler] = None,
        config: Optional[ViewerConfig] = None,
    ):
        self.config = config or ViewerConfig()
        self._builder = GraphModelBuilder(separator=self.config.path_separator)
        self._renderer_factory = renderer_factory
        self._scheduler = scheduler or AsyncioScheduler()
        self.formatter = TensorFormatter(
            threshold=self.config.display_threshold,
            export_filename=self.config.export_filename,
        )

        self.model: Optional[GraphModel] = None
        self.renderer: Optional[Renderer] = None
        self.controller: Optional[InteractionController] = None

    def load(self, raw: RawGraph) -> GraphModel:
        """Rebuild everything from a new raw graph."""
        return self.load_model(self._builder.build(raw))

    def load_model(self, model: GraphModel) -> GraphModel:
        """Swap in an already built model: new renderer, default state."""
        if self.renderer is not None:
            self.renderer.close()
            self.renderer = None

        renderer = self._renderer_factory(model, [m.id for m in model.metanodes])
        if self.controller is None:
            self.controller = InteractionController(
                model, renderer, self._scheduler, debounce_window=self.config.debounce_window
            )
        else:
            self.controller.reset(model, renderer)

        self.model = model
        self.renderer = renderer
        logger.info(f"Loaded graph with {len(model)} elements")
        return model

    def on_click(self, target: ClickTarget) -> None:
        self._require_controller().on_click(target)

    def _require_controller(self) -> InteractionController:
        if self.controller is None:
            raise ScopeViewError("No graph loaded")
        return self.controller

    # ------------------------------------------------------------------ #
    # Inspector
    # ------------------------------------------------------------------ #

    def inspect(self, element_id: str) -> Dict[str, Any]:
        """Metadata shown in the inspector panel for one element."""
        if self.model is None:
            raise ScopeViewError("No graph loaded")
        element = self.model.get(element_id)
        if element is None:
            raise ScopeViewError(f"Unknown element {element_id!r}")

        info: Dict[str, Any] = {
            "id": element.id,
            "kind": element.kind.value,
            "label": element.label,
        }
        if element.kind == ElementKind.EDGE:
            info["source"] = self.model.get(element.source).path
            info["target"] = self.model.get(element.target).path
        else:
            info["path"] = element.path
            info["op"] = element.op
            info["op_name"] = element.op_name
            info["parent"] = element.parent
        if element.kind == ElementKind.METANODE:
            info["children"] = self.model.hierarchy.children(element.path)
            info["collapsed"] = self._require_controller().is_collapsed(element.id)
        info["other"] = dict(element.other)
        return info

    def inspect_tensor(self, element_id: str, key: str) -> TensorDisplay:
        """Format the tensor value stored under `other[key]` of an element."""
        info = self.inspect(element_id)
        if key not in info["other"]:
            raise ScopeViewError(f"Element {element_id!r} has no value {key!r}")
        return self.formatter.format(parse_tensor_value(info["other"][key]))
