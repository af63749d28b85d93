"""
Tensor Command - Format a tensor value.

Prints the inline rendering, or the compact summary for values too large
to inline. `--reveal` prints the full detail view and `--export` writes the
JSON artifact.

Usage:
    scopeview tensor value.json
    scopeview tensor value.json --reveal
    scopeview tensor value.json --export ./out
"""

import sys
from typing import Optional

import click

from ...config import ViewerConfig
from ...core.errors import ExportError, TensorShapeError
from ...core.types import parse_tensor_value
from ...tensor.formatter import TensorFormatter
from ..utils import echo_error, echo_info, echo_success, load_json


@click.command()
@click.argument("value_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--threshold", type=click.IntRange(min=0), default=None, help="Largest dimension rendered inline")
@click.option("--reveal", is_flag=True, help="Print the full nested value")
@click.option("--export", "export_dir", type=click.Path(file_okay=False), default=None,
              help="Write the JSON export artifact into this directory")
@click.pass_obj
def tensor(config: Optional[ViewerConfig], value_file: str, threshold: Optional[int],
           reveal: bool, export_dir: Optional[str]):
    """
    Format the tensor value stored in VALUE_FILE.
    """
    config = config or ViewerConfig()
    formatter = TensorFormatter(
        threshold=config.display_threshold if threshold is None else threshold,
        export_filename=config.export_filename,
    )

    try:
        value = parse_tensor_value(load_json(value_file))
        display = formatter.format(value)
    except TensorShapeError as e:
        echo_error(str(e))
        sys.exit(1)

    click.echo(display.text)
    if display.actions:
        echo_info("Actions: " + ", ".join(a.value for a in display.actions))

    if reveal:
        click.echo(formatter.reveal(value))

    if export_dir is not None:
        try:
            path = formatter.export(value).write(export_dir)
        except (ExportError, TensorShapeError) as e:
            echo_error(str(e))
            sys.exit(1)
        echo_success(f"Exported: {path}")
