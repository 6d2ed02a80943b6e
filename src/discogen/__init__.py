"""discogen -- Generate typed client libraries from API discovery documents.

This package reads machine-readable *discovery documents* (one per API
version), walks their resource / method / schema graph, and emits a
TypeScript binding file, one usage sample per method, and the packaging
artifacts (index, ``package.json``, README, build configs) for every API
through a set of Jinja2 templates.

Typical workflow::

    discogen generate-all                    # regenerate every public API
    discogen generate ./drive-v3.json        # regenerate one API from disk

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for discovery documents and configuration.
    config: Generator configuration and ignore-list loading.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stderr diagnostics and stdout data formatting with Rich.
"""

__version__ = "0.1.0"
