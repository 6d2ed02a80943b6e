"""Built-in CLI commands for discogen.

This package groups the command callbacks registered on the root app:

* :mod:`~discogen.commands.generate` -- ``generate``, ``generate-all`` and
  ``index``.
* :mod:`~discogen.commands.list_apis` -- ``list``, the discovery directory.

Every module exports plain callback functions; :mod:`discogen.app` registers
them directly on the root Typer application. The helpers below are shared by
all commands.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import typer

from discogen.config import resolve_config
from discogen.exceptions import DiscogenError
from discogen.models import GeneratorConfig
from discogen.output import error


T = TypeVar("T")


def run_or_exit(main: Coroutine[Any, Any, T]) -> T:
    """Run *main* to completion, mapping :class:`DiscogenError` to an exit code."""
    try:
        return asyncio.run(main)
    except DiscogenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def config_or_exit(**overrides: Any) -> GeneratorConfig:
    """Resolve the generator config from CLI *overrides*, exiting on a config error."""
    try:
        return resolve_config(**overrides)
    except DiscogenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
