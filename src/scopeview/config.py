"""
Global Configuration and Defaults.

Module-level constants are the defaults. A project can override the
tunables in `.scopeview/config.yaml`; `load_config` overlays that file on
top of the defaults.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

# --- Graph model ---
# Separator between scope segments in node names
PATH_SEPARATOR = "/"

# Op tag of synthetic scope elements
METANODE_OP = "Meta"

# --- Colors ---
METANODE_COLOR = "#d9d9d9"
EDGE_COLOR = "#9e9e9e"
HIGHLIGHT_COLOR = "#ff5722"
# Hue comes from the op_name hash; these two stay fixed
OP_COLOR_SATURATION = 0.55
OP_COLOR_LIGHTNESS = 0.70

# --- Interaction ---
# Window separating a single click from the first half of a double click
DEBOUNCE_WINDOW_SECONDS = 0.4

# --- Tensor display ---
# Values with any dimension above this are not rendered inline
DISPLAY_THRESHOLD = 7
EXPORT_FILENAME = "tensor.json"
EXPORT_MIME_TYPE = "application/json"

DEFAULT_CONFIG_PATH = Path(".scopeview/config.yaml")


class ViewerConfig(BaseModel):
    """Tunables a project may override."""
    path_separator: str = Field(default=PATH_SEPARATOR, min_length=1)
    debounce_window: float = Field(default=DEBOUNCE_WINDOW_SECONDS, gt=0)
    display_threshold: int = Field(default=DISPLAY_THRESHOLD, ge=0)
    export_filename: str = Field(default=EXPORT_FILENAME, min_length=1)

    model_config = ConfigDict(frozen=True, extra="ignore")


def load_config(config_path: Optional[Path] = None) -> ViewerConfig:
    """
    Load the viewer configuration.

    A missing file yields the defaults. A file that is not valid YAML, or
    whose values fail validation, raises ConfigError.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        return ViewerConfig()

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        config = ViewerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value in {path}: {e}") from e

    logger.debug(f"Loaded config from {path}: {config}")
    return config
