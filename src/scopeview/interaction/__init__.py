"""Collapse/expand and highlight state driven by renderer clicks."""

from .clicks import AsyncioScheduler, ClickDisambiguator, ClickPhase, ManualScheduler, Scheduler
from .controller import CollapseState, HighlightState, InteractionController
from .renderer import HeadlessRenderer, Renderer

__all__ = [
    "AsyncioScheduler",
    "ClickDisambiguator",
    "ClickPhase",
    "ManualScheduler",
    "Scheduler",
    "CollapseState",
    "HighlightState",
    "InteractionController",
    "HeadlessRenderer",
    "Renderer",
]
