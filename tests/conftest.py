"""Shared test fixtures for discogen.

Provides reusable fixtures for loading discovery fixtures, building
generator configs rooted in ``tmp_path``, faking the discovery service with
:class:`httpx.MockTransport`, and managing output state. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from discogen.models import DiscoveryDocument, GeneratorConfig
from discogen.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

VISION_URL = "https://vision.googleapis.com/$discovery/rest?version=v1"
DRIVE_URL = "https://www.googleapis.com/discovery/v1/apis/drive/v3/rest"
API_LIST_URL = "https://www.googleapis.com/discovery/v1/apis"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw document fixtures (plain dicts loaded from JSON files)
# ---------------------------------------------------------------------------


@pytest.fixture
def vision_raw() -> dict[str, Any]:
    """Load the raw vision v1 discovery document."""
    with open(FIXTURES_DIR / "vision_v1.json") as f:
        return json.load(f)


@pytest.fixture
def api_list_raw() -> dict[str, Any]:
    """Load the raw API directory list."""
    with open(FIXTURES_DIR / "api_list.json") as f:
        return json.load(f)


@pytest.fixture
def minimal_raw() -> dict[str, Any]:
    """A discovery document with one resource holding one method.

    The method's request and response both reference schemas with a single
    string property.
    """
    return {
        "name": "pets",
        "version": "v1",
        "title": "Pets API",
        "rootUrl": "https://pets.example.com/",
        "servicePath": "",
        "schemas": {
            "Pet": {
                "id": "Pet",
                "type": "object",
                "properties": {"name": {"type": "string"}},
            },
            "PetReceipt": {
                "id": "PetReceipt",
                "type": "object",
                "properties": {"receiptId": {"type": "string"}},
            },
        },
        "resources": {
            "pets": {
                "methods": {
                    "create": {
                        "id": "pets.pets.create",
                        "path": "v1/pets",
                        "httpMethod": "POST",
                        "request": {"$ref": "Pet"},
                        "response": {"$ref": "PetReceipt"},
                    }
                }
            }
        },
    }


# ---------------------------------------------------------------------------
# Parsed document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def vision_doc(vision_raw: dict[str, Any]) -> DiscoveryDocument:
    """Parsed vision v1 discovery document."""
    return DiscoveryDocument.model_validate(vision_raw)


@pytest.fixture
def minimal_doc(minimal_raw: dict[str, Any]) -> DiscoveryDocument:
    """Parsed minimal discovery document."""
    return DiscoveryDocument.model_validate(minimal_raw)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    """APIs output root inside a temporary repository layout."""
    return tmp_path / "src" / "apis"


@pytest.fixture
def config(tmp_path: Path, output_root: Path) -> GeneratorConfig:
    """Generator config writing into ``tmp_path``, ignoring ``discovery:v1``."""
    ignore_file = tmp_path / "ignore.json"
    ignore_file.write_text(json.dumps({"ignore": ["discovery:v1"]}), encoding="utf-8")
    return GeneratorConfig(output_root=output_root, ignore_file=ignore_file)


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_DATA_HOME to a subdirectory of tmp_path, clears all
    DISCOGEN_* environment variables and changes the working directory to
    tmp_path so that no real ``discogen.json`` is picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in (
        "DISCOGEN_OUTPUT_ROOT",
        "DISCOGEN_DISCOVERY_URL",
        "DISCOGEN_INCLUDE_PRIVATE",
        "DISCOGEN_IGNORE_FILE",
        "NO_COLOR",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Fake discovery service
# ---------------------------------------------------------------------------


@pytest.fixture
def discovery_routes(
    vision_raw: dict[str, Any],
    api_list_raw: dict[str, Any],
) -> dict[str, Any]:
    """URL -> JSON body (or ``int`` status) served by :func:`discovery_transport`.

    Drive is served as a 500 so fleet runs always have one failing API.
    """
    return {
        API_LIST_URL: api_list_raw,
        VISION_URL: vision_raw,
        DRIVE_URL: 500,
    }


@pytest.fixture
def discovery_transport(discovery_routes: dict[str, Any]) -> httpx.MockTransport:
    """Mock transport answering from :func:`discovery_routes`.

    Every request is appended to ``transport.requests`` for assertions.
    """
    seen: list[httpx.Request] = []
    routes = {str(httpx.URL(url)): body for url, body in discovery_routes.items()}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = routes.get(str(request.url))
        if body is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(body, int):
            return httpx.Response(body, text="Server Error")
        return httpx.Response(200, json=body)

    transport = httpx.MockTransport(handler)
    transport.requests = seen  # type: ignore[attr-defined]
    return transport


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write *data* as JSON to ``tmp_path / name`` and return the path."""

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
