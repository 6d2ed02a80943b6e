"""Run-scoped collaborators shared by the per-API and fleet generators."""

from __future__ import annotations

from typing import Optional

import httpx

from discogen.client.request_queue import RequestQueue
from discogen.generator.state import GenerationStateLog
from discogen.generator.templates import TemplateRenderer
from discogen.models import GeneratorConfig
from discogen.output import debug, info


class GenerationContext:
    """Everything one generator run needs, created fresh per run.

    Holds the resolved config, the rate-limited :class:`RequestQueue`, the
    :class:`TemplateRenderer` with its filters, and the
    :class:`GenerationStateLog`. Use as an async context manager so the HTTP
    connection pool is opened and closed with the run.

    Args:
        config: The resolved generator configuration.
        transport: Optional custom httpx transport (tests use
            :class:`httpx.MockTransport`).
        renderer: Optional renderer override.

    Example::

        async with GenerationContext(config) as ctx:
            await ApiGenerator(ctx).generate_api(url)
    """

    def __init__(
        self,
        config: GeneratorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        renderer: Optional[TemplateRenderer] = None,
    ) -> None:
        self.config = config
        self.requests = RequestQueue(
            concurrency=config.request_concurrency,
            timeout=config.timeout,
            transport=transport,
        )
        self.renderer = renderer or TemplateRenderer(config.templates_dir)
        self.state = GenerationStateLog()

    async def __aenter__(self) -> GenerationContext:
        await self.requests.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.requests.__aexit__(*args)

    def log(self, message: str) -> None:
        """Report generator progress; shown by default only with ``debug`` on."""
        if self.config.debug:
            info(message)
        else:
            debug(message)

    def record(self, key: str, message: str) -> None:
        """Append *message* to the state log under *key*."""
        self.state.record(key, message)
