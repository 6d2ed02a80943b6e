"""Explicit render contexts, one per kind of output artifact.

Each dataclass enumerates exactly the variables its templates read, so a
template referencing anything else fails loudly under
:class:`jinja2.StrictUndefined` instead of rendering an empty string.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from discogen.models import DiscoveryDocument, Method


@dataclass(frozen=True)
class BindingContext:
    """Context for ``api-endpoint.ts.j2``."""

    api: DiscoveryDocument


@dataclass(frozen=True)
class SampleContext:
    """Context for ``sample.js.j2``.

    ``request_example`` / ``response_example`` are ``None`` when the method
    has no body of that direction.
    """

    api: DiscoveryDocument
    method: Method
    response_example: Optional[dict[str, Any]] = None
    request_example: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class ApiIndexContext:
    """Context for a per-API ``index.ts``.

    ``versions`` maps each binding file name (``v1.ts``) to its version
    (``v1``).
    """

    name: str
    versions: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PackageContext:
    """Context for ``package.json``, ``README.md``, ``tsconfig.json`` and ``webpack.config.js``."""

    name: str
    desc: Optional[str] = None
    versions: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AggregateIndexContext:
    """Context for the APIs-root and repository-root ``index.ts`` files.

    ``apis_dir`` is the output root's directory name, used by the
    repository-root index to import each binding.
    """

    apis: dict[str, dict[str, str]] = field(default_factory=dict)
    apis_dir: str = "apis"


def template_vars(context: Any) -> dict[str, Any]:
    """Flatten a context dataclass into keyword arguments for ``Template.render``.

    Nested values are passed as-is (not converted to dicts) so templates keep
    attribute access on the pydantic models.
    """
    return {f.name: getattr(context, f.name) for f in fields(context)}
