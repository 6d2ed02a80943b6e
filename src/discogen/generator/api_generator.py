"""Generate the binding and usage samples for a single API.

:class:`ApiGenerator` turns one discovery document into:

* ``{output_root}/{name}/{version}.ts`` -- the API binding, rendered from
  ``api-endpoint.ts.j2`` with the whole document as context.
* ``{output_root}/{name}/samples/{version}/{methodId}.js`` -- one usage
  sample per method, rendered from ``sample.js.j2`` with flattened request
  and response examples.

The document comes from a local file when the source has no URL scheme, and
otherwise through the run's rate-limited
:class:`~discogen.client.request_queue.RequestQueue`.

Any fetch, parse, render or write error propagates to the caller as-is.
Files written before the failure stay on disk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from discogen.generator.context import GenerationContext
from discogen.generator.examples import resolve_example
from discogen.generator.files import ensure_dir, write_text
from discogen.generator.methods import collect_methods
from discogen.generator.template_contexts import BindingContext, SampleContext
from discogen.generator.templates import BINDING_TEMPLATE, SAMPLE_TEMPLATE
from discogen.models import DiscoveryDocument
from discogen.parser.loader import is_url, load_document_file, parse_document


BINDING_EXT = ".ts"
SAMPLE_EXT = ".js"


class ApiGenerator:
    """Per-API generator bound to one :class:`GenerationContext`.

    Args:
        context: The run's shared collaborators.
    """

    def __init__(self, context: GenerationContext) -> None:
        self._ctx = context

    async def generate_api(self, source: str) -> Path:
        """Generate the API described by *source*.

        Args:
            source: A discovery document URL, or a local JSON/YAML path.

        Returns:
            Path of the written binding file.

        Raises:
            FetchError: The document could not be fetched.
            DocumentParseError: The document is malformed.
            RenderError: A template failed.
            OutputWriteError: An output path could not be written.
        """
        if not is_url(source):
            self._ctx.log(f"Reading from file {source}")
            data = await asyncio.to_thread(load_document_file, source)
        else:
            self._ctx.record(source, "Starting discovery doc request...")
            self._ctx.record(source, source)
            data = await self._ctx.requests.request(source)
        return await self.generate(source, parse_document(data))

    async def generate(self, source: str, document: DiscoveryDocument) -> Path:
        """Render and write the binding and samples for a parsed document.

        Args:
            source: Key under which progress is recorded in the state log.
            document: The parsed discovery document.

        Returns:
            Path of the written binding file.
        """
        ctx = self._ctx
        ctx.record(source, "Discovery doc request complete.")

        api_path = ctx.config.output_root / document.name
        export_path = api_path / f"{document.version}{BINDING_EXT}"

        ctx.record(source, "Generating templates...")
        contents = ctx.renderer.render(BINDING_TEMPLATE, BindingContext(api=document))
        await ensure_dir(api_path)
        await write_text(export_path, contents)
        ctx.record(source, "Template generation complete.")

        samples_path = api_path / "samples" / document.version
        await ensure_dir(samples_path)
        methods = collect_methods(document)
        for method in methods:
            sample = SampleContext(
                api=document,
                method=method,
                response_example=resolve_example(method.response, document.schemas),
                request_example=resolve_example(method.request, document.schemas),
            )
            rendered = ctx.renderer.render(SAMPLE_TEMPLATE, sample)
            await write_text(samples_path / f"{method.id}{SAMPLE_EXT}", rendered)
        ctx.record(source, f"Wrote {len(methods)} samples.")

        return export_path
