"""
Tensor value formatting.

Small values are rendered inline as nested lists. Values with any dimension
above the display threshold get a compact `shape:[..] DTYPE` summary plus
reveal and export actions. Nesting is row-major: the first shape dimension
is the outermost list.
"""

import json
import logging
import math
import sys
from dataclasses import dataclass
from enum import StrEnum
from numbers import Integral
from typing import Any, Tuple

import numpy as np

from ..config import DISPLAY_THRESHOLD, EXPORT_FILENAME, EXPORT_MIME_TYPE
from ..core.errors import TensorShapeError
from ..core.types import KnownTensor, TensorValue
from .export import ExportArtifact

logger = logging.getLogger(__name__)

UNKNOWN_TEXT = "depends on input"


class TensorAction(StrEnum):
    REVEAL = "reveal"
    EXPORT = "export"


@dataclass(frozen=True)
class TensorDisplay:
    """What the inspector shows for one value."""
    text: str
    inline: bool
    actions: Tuple[TensorAction, ...] = ()


def _scalar_text(item: Any) -> str:
    if isinstance(item, str):
        return item
    return json.dumps(item)


class TensorFormatter:
    def __init__(self, threshold: int = DISPLAY_THRESHOLD, export_filename: str = EXPORT_FILENAME):
        self.threshold = threshold
        self.export_filename = export_filename

    # ------------------------------------------------------------------ #

    @staticmethod
    def validate(value: KnownTensor) -> None:
        """
        Check shape against content.

        Raises TensorShapeError when a dimension is negative or not an
        integer, when the content length differs from the shape product, or
        when a content item is itself nested.
        """
        for dim in value.shape:
            if isinstance(dim, bool) or not isinstance(dim, Integral):
                raise TensorShapeError(list(value.shape), len(value.content), f"dimension {dim!r} is not an integer")
            if dim < 0:
                raise TensorShapeError(list(value.shape), len(value.content), f"dimension {dim} is negative")

        expected = math.prod(int(d) for d in value.shape)
        if expected != len(value.content):
            raise TensorShapeError(
                list(value.shape),
                len(value.content),
                f"shape holds {expected} elements",
            )

        for index, item in enumerate(value.content):
            if isinstance(item, (list, tuple, dict)):
                raise TensorShapeError(
                    list(value.shape),
                    len(value.content),
                    f"content item {index} is not a scalar",
                )

    def _array(self, value: KnownTensor) -> np.ndarray:
        self.validate(value)
        # object dtype keeps the JSON numbers exactly as they were sent
        return np.array(value.content, dtype=object).reshape(
            tuple(int(d) for d in value.shape), order="C"
        )

    def nest(self, value: KnownTensor) -> Any:
        """Content nested into shape; a bare value for rank 0."""
        return self._array(value).tolist()

    def summary(self, value: KnownTensor) -> str:
        dims = ", ".join(str(int(d)) for d in value.shape)
        return f"shape:[{dims}] {value.datatype.value}"

    def is_inline(self, value: KnownTensor) -> bool:
        return all(int(d) <= self.threshold for d in value.shape)

    # ------------------------------------------------------------------ #

    def format(self, value: TensorValue) -> TensorDisplay:
        if not value.is_known():
            return TensorDisplay(text=UNKNOWN_TEXT, inline=True)

        nested = self.nest(value)
        if value.rank == 0:
            return TensorDisplay(text=_scalar_text(nested), inline=True)

        if self.is_inline(value):
            return TensorDisplay(text=json.dumps(nested), inline=True)

        return TensorDisplay(
            text=self.summary(value),
            inline=False,
            actions=(TensorAction.REVEAL, TensorAction.EXPORT),
        )

    def reveal(self, value: TensorValue) -> str:
        """Full detail view of the nested value."""
        if not value.is_known():
            return UNKNOWN_TEXT
        array = self._array(value)
        if array.ndim == 0:
            return _scalar_text(array.item())
        body = np.array2string(
            array,
            separator=", ",
            threshold=sys.maxsize,
            max_line_width=120,
            formatter={"all": _scalar_text},
        )
        return f"{self.summary(value)}\n{body}"

    def export(self, value: TensorValue) -> ExportArtifact:
        """Serialize the nested value into a downloadable JSON artifact."""
        if not value.is_known():
            raise TensorShapeError(None, None, "value depends on input; nothing to export")
        nested = self.nest(value)
        logger.debug(f"Exporting {self.summary(value)} as {self.export_filename}")
        return ExportArtifact(
            filename=self.export_filename,
            mime_type=EXPORT_MIME_TYPE,
            content=json.dumps(nested),
        )
