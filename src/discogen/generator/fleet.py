"""Generate every API in the discovery directory, then rebuild the indexes.

:class:`FleetGenerator` drives a whole regeneration:

1. Fetch the API directory list through the rate-limited request queue.
2. Drop every API whose id is on the ignore list.
3. Run :meth:`ApiGenerator.generate_api` for each remaining API, at most
   ``generation_concurrency`` at a time. A failing API is recorded and
   reported; it never cancels its siblings.
4. Once every job has settled, scan the output tree and re-render the per-API
   packaging files and the two aggregate indexes.

Two queues are in play: the outer :class:`asyncio.Semaphore` here bounds
whole jobs, and the request queue bounds raw HTTP calls underneath, so peak
network concurrency never exceeds ``request_concurrency``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from discogen.config import load_ignore_list
from discogen.exceptions import OutputWriteError
from discogen.generator.api_generator import BINDING_EXT, ApiGenerator
from discogen.generator.context import GenerationContext
from discogen.generator.files import write_text
from discogen.generator.template_contexts import (
    AggregateIndexContext,
    ApiIndexContext,
    PackageContext,
)
from discogen.generator.templates import (
    API_INDEX_TEMPLATE,
    INDEX_TEMPLATE,
    PACKAGE_TEMPLATE,
    README_TEMPLATE,
    ROOT_INDEX_TEMPLATE,
    TSCONFIG_TEMPLATE,
    WEBPACK_TEMPLATE,
)
from discogen.models import ApiListEntry
from discogen.output import debug, dump, error, info
from discogen.parser.loader import parse_api_list


INDEX_FILENAME = f"index{BINDING_EXT}"

# Generated per-API artifact file name -> template.
_PACKAGE_ARTIFACTS: dict[str, str] = {
    "package.json": PACKAGE_TEMPLATE,
    "README.md": README_TEMPLATE,
    "tsconfig.json": TSCONFIG_TEMPLATE,
    "webpack.config.js": WEBPACK_TEMPLATE,
}


@dataclass
class FleetResult:
    """Outcome of :meth:`FleetGenerator.generate_all_apis`."""

    generated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    apis: dict[str, dict[str, str]] = field(default_factory=dict)
    index_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """``True`` when every API generated and the indexes were rebuilt."""
        return not self.failed and self.index_error is None


class FleetGenerator:
    """Fleet orchestrator bound to one :class:`GenerationContext`.

    Args:
        context: The run's shared collaborators.
        api_generator: Per-API generator to delegate to. Defaults to an
            :class:`ApiGenerator` on the same context.
    """

    def __init__(
        self,
        context: GenerationContext,
        api_generator: Optional[ApiGenerator] = None,
    ) -> None:
        self._ctx = context
        self._api_generator = api_generator or ApiGenerator(context)

    async def fetch_api_list(self, discovery_url: Optional[str] = None) -> list[ApiListEntry]:
        """Fetch and parse the API directory list.

        Unless ``include_private`` is set, the request carries
        ``X-User-Ip: 0.0.0.0`` so the service lists public APIs only.

        Raises:
            FetchError: The list could not be fetched.
            DocumentParseError: The list is malformed.
        """
        config = self._ctx.config
        headers = {} if config.include_private else {"X-User-Ip": "0.0.0.0"}
        data = await self._ctx.requests.request(discovery_url or config.discovery_url, headers=headers)
        return parse_api_list(data).items

    async def generate_all_apis(self, discovery_url: Optional[str] = None) -> FleetResult:
        """Regenerate every non-ignored API, then the aggregate outputs.

        Per-API failures are recorded in the returned :class:`FleetResult`
        instead of raised. A failure while rebuilding the indexes is logged
        together with the full state log and recorded as ``index_error``.

        Args:
            discovery_url: API list URL; defaults to the configured one.

        Raises:
            FetchError: The API list itself could not be fetched.
            DocumentParseError: The API list is malformed.
            ConfigError: The ignore list is unreadable.
        """
        apis = await self.fetch_api_list(discovery_url)
        ignore = load_ignore_list(self._ctx.config.ignore_file)
        result = FleetResult()

        scheduled: list[ApiListEntry] = []
        for api in apis:
            if api.id in ignore:
                debug(f"Skipping API {api.id}")
                result.skipped.append(api.id)
                continue
            scheduled.append(api)

        info(f"Generating {len(scheduled)} APIs...")
        limiter = asyncio.Semaphore(self._ctx.config.generation_concurrency)
        await asyncio.gather(*(self._generate_one(api, limiter, result) for api in scheduled))

        try:
            result.apis = await self.generate_index(apis)
        except Exception as exc:
            error(f"Failed to regenerate indexes: {exc}")
            dump("Generation state", self._ctx.state.snapshot())
            result.index_error = str(exc)
        return result

    async def _generate_one(
        self,
        api: ApiListEntry,
        limiter: asyncio.Semaphore,
        result: FleetResult,
    ) -> None:
        key = api.discovery_rest_url
        async with limiter:
            self._ctx.log(f"Generating API for {api.id}...")
            self._ctx.record(key, "Attempting first generateAPI call...")
            try:
                await self._api_generator.generate_api(key)
            except Exception as exc:
                self._ctx.record(key, f"GenerateAPI call failed with error: {exc}, moving on.")
                error(f"Failed to generate API: {api.id}")
                error(str(exc))
                dump(api.id, list(self._ctx.state.get(key)))
                result.failed[api.id] = str(exc)
                return
            self._ctx.record(key, "GenerateAPI call success!")
            result.generated.append(api.id)

    async def generate_index(self, metadata: Sequence[ApiListEntry]) -> dict[str, dict[str, str]]:
        """Rebuild per-API packaging files and the aggregate indexes.

        Scans the output root for API directories containing version binding
        files; for each, renders ``index.ts``, ``package.json``, ``README.md``,
        ``tsconfig.json`` and ``webpack.config.js``. Then renders the
        APIs-root ``index.ts`` and the repository-root ``index.ts`` (one level
        above the output root).

        Args:
            metadata: The API directory list, used for descriptions.

        Returns:
            Mapping of API name to ``{binding file name: version}``.
        """
        apis_path = self._ctx.config.output_root
        renderer = self._ctx.renderer
        apis = await asyncio.to_thread(scan_output_tree, apis_path)

        for name, versions in apis.items():
            api_path = apis_path / name
            await write_text(
                api_path / INDEX_FILENAME,
                renderer.render(API_INDEX_TEMPLATE, ApiIndexContext(name=name, versions=versions)),
            )
            package = PackageContext(
                name=name,
                desc=describe_api(name, metadata),
                versions=versions,
            )
            for filename, template in _PACKAGE_ARTIFACTS.items():
                await write_text(api_path / filename, renderer.render(template, package))

        aggregate = AggregateIndexContext(apis=apis, apis_dir=apis_path.name)
        await write_text(apis_path / INDEX_FILENAME, renderer.render(INDEX_TEMPLATE, aggregate))
        await write_text(
            apis_path.parent / INDEX_FILENAME,
            renderer.render(ROOT_INDEX_TEMPLATE, aggregate),
        )
        return apis


def scan_output_tree(apis_path: Path) -> dict[str, dict[str, str]]:
    """Find every ``{api}/{version}.ts`` binding under *apis_path*.

    Declaration files (``.d.ts``) and the generated ``index.ts`` are not
    versions. Directories holding no binding file (e.g. a job that failed
    before writing one) are left out.

    Returns:
        Mapping of API name to ``{file name: version}``, both sorted.

    Raises:
        OutputWriteError: If the tree cannot be listed.
    """
    if not apis_path.is_dir():
        return {}
    apis: dict[str, dict[str, str]] = {}
    try:
        for api_dir in sorted(p for p in apis_path.iterdir() if p.is_dir()):
            versions = {
                entry.name: entry.stem
                for entry in sorted(api_dir.iterdir())
                if entry.is_file() and _is_binding_file(entry)
            }
            if versions:
                apis[api_dir.name] = versions
    except OSError as exc:
        raise OutputWriteError(f"Cannot scan output tree {apis_path}: {exc}") from exc
    return apis


def _is_binding_file(path: Path) -> bool:
    return (
        path.suffix == BINDING_EXT
        and not path.name.endswith(".d.ts")
        and path.name != INDEX_FILENAME
    )


def describe_api(name: str, metadata: Sequence[ApiListEntry]) -> Optional[str]:
    """Return the description of the first list entry named *name*."""
    for entry in metadata:
        if entry.name == name:
            return entry.description
    debug(f"No API list entry for {name}; generating without a description")
    return None
