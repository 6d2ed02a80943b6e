"""Configuration resolution, data directories, and the ignore list.

This module handles all persistent configuration for discogen:

* **Directory layout** -- XDG Base Directory compliant data directory on
  Linux/BSD, ``~/.discogen/`` on macOS and Windows, used for crash logs.
  See :func:`get_data_dir`.
* **Project config** -- An optional ``./discogen.json`` holding defaults for
  the output root, templates, ignore file, and concurrency ceilings.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and defaults into one
  :class:`~discogen.models.GeneratorConfig`.
* **Ignore list** -- :func:`load_ignore_list` reads the static set of API ids
  a fleet run skips.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from discogen.exceptions import ConfigError
from discogen.models import GeneratorConfig

_APP_NAME = "discogen"
_PROJECT_CONFIG_FILENAME = "discogen.json"

BUNDLED_IGNORE_FILE = Path(__file__).parent / "ignore.json"
"""Ignore list shipped with the package, used when none is configured."""

_TRUTHY = {"1", "true", "yes", "on"}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/discogen/`` (default ``~/.local/share/discogen/``).
    On macOS/Windows: ``~/.discogen/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./discogen.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_output_root: Optional[str] = None,
    cli_discovery_url: Optional[str] = None,
    cli_include_private: Optional[bool] = None,
    cli_templates_dir: Optional[str] = None,
    cli_ignore_file: Optional[str] = None,
    cli_debug: Optional[bool] = None,
) -> GeneratorConfig:
    """Resolve the generator configuration with its full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_*`` arguments that are not ``None``)
        2. Environment variables (``DISCOGEN_OUTPUT_ROOT``,
           ``DISCOGEN_DISCOVERY_URL``, ``DISCOGEN_INCLUDE_PRIVATE``,
           ``DISCOGEN_IGNORE_FILE``)
        3. Project config (``./discogen.json``)
        4. Defaults declared on :class:`~discogen.models.GeneratorConfig`

    Returns:
        The validated :class:`~discogen.models.GeneratorConfig`.

    Raises:
        ConfigError: If the project config is unreadable or the merged values
            fail validation.
    """
    # 4 + 3. Defaults overlaid by the project file
    merged: dict[str, Any] = dict(load_project_config() or {})

    # 2. Environment variables
    env_output_root = os.environ.get("DISCOGEN_OUTPUT_ROOT")
    if env_output_root:
        merged["output_root"] = env_output_root
    env_discovery_url = os.environ.get("DISCOGEN_DISCOVERY_URL")
    if env_discovery_url:
        merged["discovery_url"] = env_discovery_url
    env_private = os.environ.get("DISCOGEN_INCLUDE_PRIVATE")
    if env_private:
        merged["include_private"] = env_private.strip().lower() in _TRUTHY
    env_ignore = os.environ.get("DISCOGEN_IGNORE_FILE")
    if env_ignore:
        merged["ignore_file"] = env_ignore

    # 1. CLI flags
    overrides = {
        "output_root": cli_output_root,
        "discovery_url": cli_discovery_url,
        "include_private": cli_include_private,
        "templates_dir": cli_templates_dir,
        "ignore_file": cli_ignore_file,
        "debug": cli_debug,
    }
    merged.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return GeneratorConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


# --- Ignore list ---


def load_ignore_list(path: Optional[Path] = None) -> frozenset[str]:
    """Read the set of API ids (``name:version``) that fleet runs skip.

    The file is a JSON object with an ``ignore`` array::

        {"ignore": ["discovery:v1", "sql:v1beta4"]}

    Args:
        path: Ignore file to read. ``None`` selects the bundled list.

    Returns:
        A frozen set of API ids.

    Raises:
        ConfigError: If a configured file does not exist, is not valid JSON,
            or has the wrong shape.
    """
    ignore_path = BUNDLED_IGNORE_FILE if path is None else path
    if not ignore_path.is_file():
        raise ConfigError(f"Ignore list not found: {ignore_path}")
    try:
        data = json.loads(ignore_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Cannot read ignore list {ignore_path}: {exc}") from exc

    entries = data.get("ignore") if isinstance(data, dict) else None
    if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
        raise ConfigError(
            f"Ignore list {ignore_path} must be an object with an 'ignore' array of strings"
        )
    return frozenset(entries)
