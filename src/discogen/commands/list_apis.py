"""List command -- show the APIs in the discovery directory.

Fetches the API directory list and prints one row per API to stdout as a
Rich table, plain TSV, or JSON depending on the global output flags.
Ignored APIs are hidden unless ``--include-ignored`` is given.
"""

from __future__ import annotations

from typing import Optional

import typer

from discogen.commands import config_or_exit, run_or_exit
from discogen.config import load_ignore_list
from discogen.generator import FleetGenerator, GenerationContext
from discogen.models import ApiListEntry, GeneratorConfig
from discogen.output import print_table


async def _fetch(config: GeneratorConfig) -> tuple[list[ApiListEntry], frozenset[str]]:
    async with GenerationContext(config) as ctx:
        apis = await FleetGenerator(ctx).fetch_api_list()
    return apis, load_ignore_list(config.ignore_file)


def list_command(
    discovery_url: Optional[str] = typer.Option(
        None, "--discovery-url", help="URL of the API directory list."
    ),
    include_private: Optional[bool] = typer.Option(
        None,
        "--include-private/--public-only",
        help="List non-public APIs too (omits the X-User-Ip header).",
    ),
    include_ignored: bool = typer.Option(
        False, "--include-ignored", help="Also show APIs on the ignore list."
    ),
    ignore_file: Optional[str] = typer.Option(
        None, "--ignore-file", help="JSON file listing API ids to skip."
    ),
) -> None:
    """List the APIs available for generation.

    Example::

        discogen list
        discogen --json list --include-ignored
    """
    config = config_or_exit(
        cli_discovery_url=discovery_url,
        cli_include_private=include_private,
        cli_ignore_file=ignore_file,
    )
    apis, ignore = run_or_exit(_fetch(config))

    rows = [
        [
            api.id,
            api.title or "",
            "yes" if api.preferred else "",
            "yes" if api.id in ignore else "",
        ]
        for api in apis
        if include_ignored or api.id not in ignore
    ]
    print_table(["ID", "Title", "Preferred", "Ignored"], rows, title="Discovery APIs")
