"""Canonical Pydantic models shared across all discogen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Configuration models** -- loaded from ``discogen.json``, the environment and
CLI flags:
    :class:`GeneratorConfig`.

**Discovery models** -- parsed from discovery documents and the API directory
list, consumed by the generator:
    :class:`SchemaKind`, :class:`SchemaItem`, :class:`Parameter`,
    :class:`Method`, :class:`Resource`, :class:`DiscoveryDocument`,
    :class:`ApiListEntry`, and :class:`ApiDirectoryList`.

Discovery models use ``extra="allow"`` so that keys this package does not
interpret (``mediaUpload``, ``etag``, ``icons`` ...) survive parsing and stay
reachable from templates via ``model_extra``. Field names are snake_case with
camelCase aliases matching the wire format.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_DISCOVERY_URL = "https://www.googleapis.com/discovery/v1/apis"
"""The public directory listing every API with a discovery document."""


# --- Generator Config ---


class GeneratorConfig(BaseModel):
    """Effective configuration for one generator run.

    Resolved by :func:`~discogen.config.resolve_config` from CLI flags,
    ``DISCOGEN_*`` environment variables, the project-local ``discogen.json``
    and the defaults below.

    See Also:
        :class:`~discogen.generator.context.GenerationContext`: Carries this
        config to every component of a run.
    """

    output_root: Path = Field(
        default=Path("src/apis"),
        description="Directory holding one sub-directory per generated API",
    )
    templates_dir: Optional[Path] = Field(
        default=None, description="Template directory (bundled templates when unset)"
    )
    ignore_file: Optional[Path] = Field(
        default=None, description="JSON ignore list (bundled ignore.json when unset)"
    )
    discovery_url: str = Field(
        default=DEFAULT_DISCOVERY_URL, description="URL of the API directory list"
    )
    request_concurrency: int = Field(
        default=50, ge=1, description="Max concurrent in-flight HTTP requests"
    )
    generation_concurrency: int = Field(
        default=10, ge=1, description="Max concurrent per-API generation jobs"
    )
    include_private: bool = Field(
        default=False,
        description="List non-public APIs (omits the X-User-Ip header)",
    )
    timeout: float = Field(default=60.0, gt=0, description="HTTP timeout in seconds")
    debug: bool = Field(default=False, description="Print per-API progress messages")


# --- Discovery Models ---


class SchemaKind(str, enum.Enum):
    """Tag describing which shape a :class:`SchemaItem` takes.

    ``$ref`` wins over ``type``; an ``object`` with neither
    ``additionalProperties`` nor ``properties`` is ``UNKNOWN``, as is an item
    with no declared type at all.
    """

    REFERENCE = "reference"
    PRIMITIVE = "primitive"
    OBJECT_WITH_PROPS = "object_with_props"
    OBJECT_MAP = "object_map"
    ARRAY = "array"
    UNKNOWN = "unknown"


class SchemaItem(BaseModel):
    """A node in a discovery document's schema graph.

    The graph may be cyclic through ``$ref``; nothing in this package follows a
    reference while walking an item, so cycles never cause recursion.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = None
    type: Optional[str] = None
    ref: Optional[str] = Field(default=None, alias="$ref")
    description: Optional[str] = None
    format: Optional[str] = None
    properties: Optional[dict[str, SchemaItem]] = None
    additional_properties: Optional[SchemaItem] = Field(
        default=None, alias="additionalProperties"
    )
    items: Optional[SchemaItem] = None
    enum: Optional[list[str]] = None
    parameter_name: Optional[str] = Field(default=None, alias="parameterName")

    @field_validator("additional_properties", mode="before")
    @classmethod
    def _coerce_boolean_map(cls, value: Any) -> Any:
        """JSON Schema allows ``additionalProperties: true``; treat it as a map of ``any``."""
        if value is True:
            return {"type": "any"}
        if value is False:
            return None
        return value

    @property
    def kind(self) -> SchemaKind:
        """The :class:`SchemaKind` tag for this item."""
        if self.ref:
            return SchemaKind.REFERENCE
        if self.type == "object":
            if self.additional_properties is not None:
                return SchemaKind.OBJECT_MAP
            if self.properties is not None:
                return SchemaKind.OBJECT_WITH_PROPS
            return SchemaKind.UNKNOWN
        if self.type == "array":
            return SchemaKind.ARRAY
        if self.type:
            return SchemaKind.PRIMITIVE
        return SchemaKind.UNKNOWN


class Parameter(BaseModel):
    """A method (or document-level) parameter.

    ``location`` is ``"path"`` for URL template substitutions and ``"query"``
    for everything sent as a query string.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    required: bool = False
    repeated: bool = False
    pattern: Optional[str] = None
    format: Optional[str] = None
    default: Optional[str] = None
    enum: Optional[list[str]] = None


class Method(BaseModel):
    """One callable API method; a leaf of the resource tree."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    path: Optional[str] = None
    flat_path: Optional[str] = Field(default=None, alias="flatPath")
    http_method: str = Field(default="GET", alias="httpMethod")
    description: Optional[str] = None
    parameters: dict[str, Parameter] = Field(default_factory=dict)
    parameter_order: list[str] = Field(default_factory=list, alias="parameterOrder")
    request: Optional[SchemaItem] = None
    response: Optional[SchemaItem] = None
    scopes: list[str] = Field(default_factory=list)
    supports_media_upload: bool = Field(default=False, alias="supportsMediaUpload")


class Resource(BaseModel):
    """A named grouping of methods and nested resources."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    methods: dict[str, Method] = Field(default_factory=dict)
    resources: dict[str, Resource] = Field(default_factory=dict)


class DiscoveryDocument(BaseModel):
    """The full description of one API version.

    Produced by :func:`~discogen.parser.loader.parse_document`; immutable for
    the duration of a generation run. Top-level ``methods`` are legal in the
    discovery format and are collected before any resource's methods.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    version: str
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    documentation_link: Optional[str] = Field(default=None, alias="documentationLink")
    root_url: str = Field(default="", alias="rootUrl")
    service_path: str = Field(default="", alias="servicePath")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    discovery_rest_url: Optional[str] = Field(default=None, alias="discoveryRestUrl")
    revision: Optional[str] = None
    parameters: dict[str, Parameter] = Field(default_factory=dict)
    auth: dict[str, Any] = Field(default_factory=dict)
    schemas: dict[str, SchemaItem] = Field(default_factory=dict)
    resources: dict[str, Resource] = Field(default_factory=dict)
    methods: dict[str, Method] = Field(default_factory=dict)

    @field_validator("name", "version")
    @classmethod
    def _single_path_component(cls, value: str) -> str:
        """``name`` and ``version`` become directory and file names under the output root."""
        if value in ("", ".", "..") or "/" in value or "\\" in value or "\x00" in value:
            raise ValueError(f"{value!r} is not a single path component")
        return value

    @property
    def scopes(self) -> list[str]:
        """OAuth2 scope URLs declared by the document, in declaration order."""
        oauth2 = self.auth.get("oauth2") or {}
        return list((oauth2.get("scopes") or {}).keys())


class ApiListEntry(BaseModel):
    """One entry of the API directory list."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str
    version: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    discovery_rest_url: str = Field(alias="discoveryRestUrl")
    documentation_link: Optional[str] = Field(default=None, alias="documentationLink")
    preferred: bool = False


class ApiDirectoryList(BaseModel):
    """The API directory document returned by the discovery service."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    kind: Optional[str] = None
    discovery_version: Optional[str] = Field(default=None, alias="discoveryVersion")
    items: list[ApiListEntry] = Field(default_factory=list)


SchemaItem.model_rebuild()
Resource.model_rebuild()
