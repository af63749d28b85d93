"""
Render Command - Build the element graph and write it out.

Writes a standalone HTML page, or prints the element collection as JSON
for other renderers.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from ...config import ViewerConfig
from ...render.html import open_visualization, write_html
from ..utils import build_model, echo_error, echo_info, echo_success


@click.command()
@click.argument("graph_file", type=click.Path())
@click.option("-o", "--output", default="graph.html", help="Output HTML file")
@click.option("--json", "json_mode", is_flag=True, help="Print the element collection as JSON to stdout")
@click.option("--open", "open_browser", is_flag=True, help="Open the page in a browser")
@click.pass_obj
def render(config: Optional[ViewerConfig], graph_file: str, output: str, json_mode: bool, open_browser: bool):
    """
    Build the scope graph from GRAPH_FILE and render it.
    """
    config = config or ViewerConfig()
    model = build_model(graph_file, config.path_separator)
    if model is None:
        sys.exit(1)

    if json_mode:
        click.echo(json.dumps(model.to_dict(), default=str))
        return

    output_path = Path(output)
    if output_path.suffix != ".html":
        echo_error(f"Unsupported format: {output_path.suffix}")
        click.echo("Supported: .html")
        sys.exit(1)

    if open_browser:
        open_visualization(model, str(output_path), double_click_window=config.debounce_window)
    else:
        write_html(model, output_path, double_click_window=config.debounce_window)

    stats = model.to_dict()["stats"]
    echo_success(f"Generated: {output_path}")
    echo_info(
        f"{stats['leaf_count']} nodes, {stats['metanode_count']} scopes, {stats['edge_count']} edges"
    )
    echo_info(f"Open: file://{output_path.absolute()}")
