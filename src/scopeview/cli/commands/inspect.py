"""
Inspect Command - Show the metadata of one element.

Usage:
    scopeview inspect graph.json node:block1/conv/weights
    scopeview inspect graph.json scope:block1 --json
"""

import json
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...config import ViewerConfig
from ...core.errors import ScopeViewError
from ...interaction.clicks import ManualScheduler
from ...viewer import ScopeViewer
from ..utils import build_model, echo_error

console = Console()


@click.command()
@click.argument("graph_file", type=click.Path())
@click.argument("element_id")
@click.option("--json", "json_mode", is_flag=True, help="Output as JSON")
@click.pass_obj
def inspect(config: Optional[ViewerConfig], graph_file: str, element_id: str, json_mode: bool):
    """
    Show metadata for ELEMENT_ID (scope:<path>, node:<name> or edge:<id>).
    """
    config = config or ViewerConfig()
    model = build_model(graph_file, config.path_separator)
    if model is None:
        sys.exit(1)

    # No clicks happen here, the scheduler never runs
    viewer = ScopeViewer(scheduler=ManualScheduler(), config=config)
    viewer.load_model(model)

    try:
        info = viewer.inspect(element_id)
    except ScopeViewError as e:
        echo_error(str(e))
        sys.exit(1)

    if json_mode:
        click.echo(json.dumps(info, default=str, indent=2))
        return

    table = Table(title=info.get("path") or info["id"], show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in info.items():
        if key == "other":
            continue
        table.add_row(key, str(value))
    for key, value in info["other"].items():
        table.add_row(f"other.{key}", json.dumps(value, default=str))
    console.print(table)
