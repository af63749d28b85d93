"""Tensor value formatting and export."""

from .export import ExportArtifact
from .formatter import TensorAction, TensorDisplay, TensorFormatter

__all__ = ["ExportArtifact", "TensorAction", "TensorDisplay", "TensorFormatter"]
