"""Read and validate discovery documents and the API directory list.

This module handles the parsing half of document I/O: turning raw text or
decoded JSON into the typed models of :mod:`discogen.models`. Network
fetching lives in :mod:`discogen.client.request_queue`; this module only
touches the local filesystem.

The public functions are:

* :func:`is_url` -- Decide whether a source is fetched or read from disk.
* :func:`load_document_file` -- Read a local JSON or YAML document.
* :func:`parse_content` -- Parse raw text as JSON, falling back to YAML.
* :func:`parse_document` -- Validate a dict into a
  :class:`~discogen.models.DiscoveryDocument`.
* :func:`parse_api_list` -- Validate a dict into an
  :class:`~discogen.models.ApiDirectoryList`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import yaml
from pydantic import ValidationError

from discogen.exceptions import DocumentParseError
from discogen.models import ApiDirectoryList, DiscoveryDocument


def is_url(source: str) -> bool:
    """Return ``True`` when *source* carries a URL scheme (``https://...``).

    Anything without a scheme is treated as a local file path.
    """
    return bool(urlsplit(source).scheme)


def load_document_file(path: str | Path) -> dict[str, Any]:
    """Load a discovery document from a local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Args:
        path: Path to the local file.

    Returns:
        The decoded document dictionary.

    Raises:
        DocumentParseError: If the file cannot be read or parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentParseError(f"Discovery document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentParseError(f"Failed to read discovery document {path}: {exc}") from exc

    if not content.strip():
        raise DocumentParseError(f"Discovery document is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return parse_content(content, hint=hint)


def parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        DocumentParseError: If the content cannot be parsed as either format,
            or does not decode to an object.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise DocumentParseError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_object(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        return _require_object(result)

    msg = "Failed to parse document as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise DocumentParseError(msg)


def _require_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        got = type(result).__name__ if result is not None else "empty document"
        raise DocumentParseError(f"Document must be a JSON/YAML object (got {got})")
    return result


def parse_document(data: Any) -> DiscoveryDocument:
    """Validate decoded JSON into a :class:`~discogen.models.DiscoveryDocument`.

    Raises:
        DocumentParseError: If required fields (``name``, ``version``) are
            missing or any node has the wrong shape.
    """
    try:
        return DiscoveryDocument.model_validate(data)
    except ValidationError as exc:
        raise DocumentParseError(f"Malformed discovery document: {exc}") from exc


def parse_api_list(data: Any) -> ApiDirectoryList:
    """Validate decoded JSON into an :class:`~discogen.models.ApiDirectoryList`.

    Raises:
        DocumentParseError: If the list or any of its entries is malformed.
    """
    try:
        return ApiDirectoryList.model_validate(data)
    except ValidationError as exc:
        raise DocumentParseError(f"Malformed API list: {exc}") from exc
