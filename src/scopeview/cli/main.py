"""
scopeview CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging
from pathlib import Path

import click

from ..config import load_config
from ..core.errors import ConfigError
from .commands import inspect, render, tensor


@click.group()
@click.version_option(package_name="scopeview")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .scopeview/config.yaml)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None):
    """scopeview: Hierarchical computation graph viewer.

    Builds a collapsible scope graph from namespaced operations and
    formats the tensor values attached to them.

    \b
    Quick Start:
      scopeview render graph.json --output graph.html
      scopeview inspect graph.json node:conv1/weights
      scopeview tensor value.json --export ./out
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e))


# Register commands
main.add_command(render.render)
main.add_command(inspect.inspect)
main.add_command(tensor.tensor)

if __name__ == "__main__":
    main()
