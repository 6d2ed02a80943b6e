"""Client-library generator -- render bindings, samples, and indexes.

This sub-package is the core of discogen: it takes parsed discovery
documents and renders TypeScript sources through Jinja2 templates.

Typical usage::

    from discogen.generator import ApiGenerator, FleetGenerator, GenerationContext

    async with GenerationContext(config) as ctx:
        result = await FleetGenerator(ctx).generate_all_apis()

Sub-modules:

* :mod:`~discogen.generator.type_mapper` -- Schema item to TypeScript type.
* :mod:`~discogen.generator.naming` -- Parameter, identifier, path, and
  comment helpers (also Jinja2 filters).
* :mod:`~discogen.generator.examples` -- Shallow example bodies for samples.
* :mod:`~discogen.generator.methods` -- Flatten a resource tree to methods.
* :mod:`~discogen.generator.templates` -- Jinja2 environment and renderer.
* :mod:`~discogen.generator.api_generator` -- One API: binding + samples.
* :mod:`~discogen.generator.fleet` -- Every API, then aggregate indexes.
"""

from discogen.generator.api_generator import ApiGenerator
from discogen.generator.context import GenerationContext
from discogen.generator.fleet import FleetGenerator, FleetResult

__all__ = ["ApiGenerator", "FleetGenerator", "FleetResult", "GenerationContext"]
