"""Serve command - run the HTTP API"""

import click


@click.command()
@click.option("--host", default=None, help="Bind host (default: BEATGRID_API_HOST)")
@click.option("--port", type=int, default=None, help="Bind port (default: BEATGRID_API_PORT)")
def serve(host: str | None, port: int | None):
    """Run the Beatgrid HTTP API

    Example:
        beatgrid serve --port 8000
    """
    from beatgrid_api.main import run

    run(host=host, port=port)
