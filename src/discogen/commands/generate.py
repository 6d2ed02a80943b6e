"""Generate commands -- render bindings, samples, and indexes.

Provides three top-level commands:

* ``discogen generate SOURCE`` -- one API from a discovery URL or a local
  JSON/YAML file, followed by an index rebuild unless ``--no-index``.
* ``discogen generate-all`` -- every API in the discovery directory.
* ``discogen index`` -- rebuild the per-API packaging files and aggregate
  indexes from whatever is already in the output root.

Each command resolves a :class:`~discogen.models.GeneratorConfig`, opens a
fresh :class:`~discogen.generator.GenerationContext`, and drives the async
generators with :func:`asyncio.run`. A :class:`~discogen.exceptions.DiscogenError`
is printed and turned into the matching exit code.
"""

from __future__ import annotations

from typing import Optional

import typer

from discogen.commands import config_or_exit, run_or_exit
from discogen.exceptions import DiscogenError
from discogen.exit_codes import EXIT_GENERIC_FAILURE, EXIT_PARTIAL_FAILURE
from discogen.generator import ApiGenerator, FleetGenerator, FleetResult, GenerationContext
from discogen.models import ApiListEntry, GeneratorConfig
from discogen.output import debug, info, success, warning


async def _fetch_metadata(fleet: FleetGenerator) -> list[ApiListEntry]:
    """Fetch the API list for index descriptions, tolerating an unreachable service.

    Descriptions only decorate ``package.json`` and ``README.md``, so a local
    rebuild still proceeds without them.
    """
    try:
        return await fleet.fetch_api_list()
    except DiscogenError as exc:
        warning(f"Could not fetch the API list, indexes will have no descriptions: {exc}")
        return []


# ------------------------------------------------------------------ #
# generate
# ------------------------------------------------------------------ #


async def _generate(config: GeneratorConfig, source: str, with_index: bool) -> None:
    async with GenerationContext(config) as ctx:
        export_path = await ApiGenerator(ctx).generate_api(source)
        success(f"Wrote {export_path}")
        if with_index:
            fleet = FleetGenerator(ctx)
            apis = await fleet.generate_index(await _fetch_metadata(fleet))
            debug(f"Indexed {len(apis)} APIs")


def generate_command(
    source: str = typer.Argument(..., help="Discovery document URL or local JSON/YAML file."),
    output_root: Optional[str] = typer.Option(
        None, "--output-root", help="Directory holding one sub-directory per API."
    ),
    templates_dir: Optional[str] = typer.Option(
        None, "--templates-dir", help="Use templates from this directory."
    ),
    no_index: bool = typer.Option(
        False, "--no-index", help="Skip rebuilding the indexes afterwards."
    ),
    debug_progress: bool = typer.Option(
        False, "--debug", help="Print generator progress messages."
    ),
) -> None:
    """Generate the binding and samples for one API.

    Example::

        discogen generate https://vision.googleapis.com/$discovery/rest?version=v1
        discogen generate ./drive-v3.json --no-index
    """
    config = config_or_exit(
        cli_output_root=output_root,
        cli_templates_dir=templates_dir,
        cli_debug=debug_progress or None,
    )
    run_or_exit(_generate(config, source, with_index=not no_index))


# ------------------------------------------------------------------ #
# generate-all
# ------------------------------------------------------------------ #


async def _generate_all(config: GeneratorConfig) -> FleetResult:
    async with GenerationContext(config) as ctx:
        return await FleetGenerator(ctx).generate_all_apis()


def generate_all_command(
    discovery_url: Optional[str] = typer.Option(
        None, "--discovery-url", help="URL of the API directory list."
    ),
    include_private: Optional[bool] = typer.Option(
        None,
        "--include-private/--public-only",
        help="List non-public APIs too (omits the X-User-Ip header).",
    ),
    output_root: Optional[str] = typer.Option(
        None, "--output-root", help="Directory holding one sub-directory per API."
    ),
    templates_dir: Optional[str] = typer.Option(
        None, "--templates-dir", help="Use templates from this directory."
    ),
    ignore_file: Optional[str] = typer.Option(
        None, "--ignore-file", help="JSON file listing API ids to skip."
    ),
    debug_progress: bool = typer.Option(
        False, "--debug", help="Print generator progress messages."
    ),
) -> None:
    """Generate every API in the discovery directory, then rebuild the indexes.

    One API failing does not stop the others; the command exits with code
    10 when any API failed and 1 when the indexes could not be rebuilt.
    """
    config = config_or_exit(
        cli_output_root=output_root,
        cli_discovery_url=discovery_url,
        cli_include_private=include_private,
        cli_templates_dir=templates_dir,
        cli_ignore_file=ignore_file,
        cli_debug=debug_progress or None,
    )
    result = run_or_exit(_generate_all(config))

    info(
        f"Generated {len(result.generated)} APIs, "
        f"skipped {len(result.skipped)}, failed {len(result.failed)}."
    )
    if result.index_error is not None:
        raise typer.Exit(code=EXIT_GENERIC_FAILURE)
    if result.failed:
        for api_id in sorted(result.failed):
            warning(f"Not generated: {api_id}")
        raise typer.Exit(code=EXIT_PARTIAL_FAILURE)
    success(f"Indexed {len(result.apis)} APIs under {config.output_root}")


# ------------------------------------------------------------------ #
# index
# ------------------------------------------------------------------ #


async def _index(config: GeneratorConfig) -> dict[str, dict[str, str]]:
    async with GenerationContext(config) as ctx:
        fleet = FleetGenerator(ctx)
        return await fleet.generate_index(await _fetch_metadata(fleet))


def index_command(
    output_root: Optional[str] = typer.Option(
        None, "--output-root", help="Directory holding one sub-directory per API."
    ),
    discovery_url: Optional[str] = typer.Option(
        None, "--discovery-url", help="API directory list used for descriptions."
    ),
    templates_dir: Optional[str] = typer.Option(
        None, "--templates-dir", help="Use templates from this directory."
    ),
) -> None:
    """Rebuild per-API packaging files and the aggregate indexes."""
    config = config_or_exit(
        cli_output_root=output_root,
        cli_discovery_url=discovery_url,
        cli_templates_dir=templates_dir,
    )
    apis = run_or_exit(_index(config))
    success(f"Indexed {len(apis)} APIs under {config.output_root}")
