"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing and the graph/tensor loading used by several commands.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import click

from ..core.errors import ScopeViewError
from ..graph.builder import GraphModel, GraphModelBuilder
from ..graph.loader import load_raw_graph

logger = logging.getLogger(__name__)


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True))


def build_model(graph_file: str, separator: str) -> Optional[GraphModel]:
    """
    Load a raw graph file and build its element model.

    Errors are printed; the caller gets None and should exit non-zero.

    Args:
        graph_file (str): Path to the raw graph JSON.
        separator (str): Scope separator used in node names.

    Returns:
        Optional[GraphModel]: The built model, or None if loading failed.
    """
    graph_path = Path(graph_file)
    if not graph_path.exists():
        echo_error(f"Graph file not found: {graph_file}")
        return None

    try:
        return GraphModelBuilder(separator=separator).build(load_raw_graph(graph_path))
    except ScopeViewError as e:
        echo_error(str(e))
        return None


def load_json(path: str) -> Any:
    """Read a JSON file, raising click.ClickException on failure."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Failed to read {path}: {e}")
