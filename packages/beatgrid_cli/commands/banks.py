"""Banks command - list sample banks"""

import asyncio

import click

from beatgrid_core.constants import DEFAULT_CATALOG_URL, FALLBACK_BANKS
from beatgrid_core.exceptions import CatalogUnavailable
from beatgrid_loop.catalog import HttpBankCatalog


@click.command()
@click.option("--url", default=DEFAULT_CATALOG_URL, show_default=True, help="Sample map URL")
@click.option("--offline", is_flag=True, help="Show the built-in bank list only")
@click.pass_context
def banks(ctx, url: str, offline: bool):
    """List available sample banks

    Example:
        beatgrid banks
        beatgrid --json banks --offline
    """
    formatter = ctx.obj["formatter"]

    if offline:
        names = list(FALLBACK_BANKS)
    else:
        try:
            names = asyncio.run(HttpBankCatalog(url, timeout=ctx.obj["timeout"]).load())
        except CatalogUnavailable as e:
            formatter.error("Bank catalog unavailable, showing built-in banks", str(e))
            names = []
        if not names:
            names = list(FALLBACK_BANKS)

    formatter.success(f"{len(names)} bank(s)", {"banks": names})
