"""
Export artifacts for tensor values.

An artifact is the downloadable file the inspector offers: a fixed
filename, a JSON MIME type and the serialized nested value. Writing it can
fail (read-only directory, permissions); that failure is reported and
leaves every in-memory object untouched.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..core.errors import ExportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    mime_type: str
    content: str

    def write(self, directory: Union[str, Path]) -> Path:
        """Write the artifact into `directory` and return its path."""
        target = Path(directory) / self.filename
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.content, encoding="utf-8")
        except OSError as e:
            raise ExportError(target, e) from e
        logger.info(f"Exported {self.filename} ({len(self.content)} bytes) to {target}")
        return target
