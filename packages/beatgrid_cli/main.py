"""Main CLI entry point"""

import logging

import click
from rich.console import Console

from beatgrid_cli.commands.banks import banks
from beatgrid_cli.commands.compile import compile_grid
from beatgrid_cli.commands.serve import serve
from beatgrid_cli.utils.output import OutputFormatter


@click.group()
@click.option("--timeout", default=10.0, help="Network timeout in seconds")
@click.option("--json", "json_mode", is_flag=True, help="Output as JSON")
@click.option("--verbose", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, timeout: float, json_mode: bool, verbose: bool):
    """Beatgrid CLI - step sequencer tools

    Examples:
        beatgrid compile groove.yaml --strudel
        beatgrid banks
        beatgrid serve
    """
    ctx.ensure_object(dict)
    ctx.obj["timeout"] = timeout
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    console = Console()
    ctx.obj["console"] = console
    ctx.obj["formatter"] = OutputFormatter(json_mode=json_mode, console=console)


# Register commands
cli.add_command(compile_grid)
cli.add_command(banks)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
