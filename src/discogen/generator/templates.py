"""Jinja2 environment and renderer for generated sources.

The environment uses a :class:`~jinja2.FileSystemLoader` pointing at the
bundled ``templates/`` directory (or a configured override), with block
trimming for cleaner template authoring and
:class:`~jinja2.StrictUndefined` so a missing context field is a
:class:`~discogen.exceptions.RenderError`, not silent empty output.

All helpers from :mod:`discogen.generator.naming` and
:mod:`discogen.generator.type_mapper` are registered as filters; each
renderer owns its environment, so nothing is shared between runs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from discogen.exceptions import RenderError
from discogen.generator.naming import (
    build_url,
    camelify,
    clean_comments,
    clean_paths,
    clean_property_name,
    get_path_params,
    get_safe_param_name,
    has_resource_param,
    namespace_name,
    one_line,
    un_regex,
    upper_first,
)
from discogen.generator.template_contexts import template_vars
from discogen.generator.type_mapper import map_parameter_type, map_type


TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
"""Path to the bundled Jinja2 template directory (``discogen/templates/``)."""

BINDING_TEMPLATE = "api-endpoint.ts.j2"
SAMPLE_TEMPLATE = "sample.js.j2"
API_INDEX_TEMPLATE = "api-index.ts.j2"
PACKAGE_TEMPLATE = "package.json.j2"
README_TEMPLATE = "README.md.j2"
TSCONFIG_TEMPLATE = "tsconfig.json.j2"
WEBPACK_TEMPLATE = "webpack.config.js.j2"
INDEX_TEMPLATE = "index.ts.j2"
ROOT_INDEX_TEMPLATE = "root-index.ts.j2"


def to_json(value: Any, indent: Optional[int] = 2) -> str:
    """Serialise *value* as JSON for embedding in generated files."""
    return json.dumps(value, indent=indent, ensure_ascii=False)


def create_environment(templates_dir: Optional[Path] = None) -> Environment:
    """Create a Jinja2 environment with every generator filter installed.

    Args:
        templates_dir: Directory to load templates from. Defaults to
            :data:`TEMPLATE_DIR`.

    Returns:
        A configured :class:`~jinja2.Environment`. Autoescaping is off:
        output is source code, not HTML.
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATE_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters.update(
        {
            "build_url": build_url,
            "one_line": one_line,
            "get_type": map_type,
            "get_param_type": map_parameter_type,
            "clean_property_name": clean_property_name,
            "un_regex": un_regex,
            "clean_comments": clean_comments,
            "camelify": camelify,
            "upper_first": upper_first,
            "namespace_name": namespace_name,
            "get_path_params": get_path_params,
            "get_safe_param_name": get_safe_param_name,
            "has_resource_param": has_resource_param,
            "clean_paths": clean_paths,
            "to_json": to_json,
        }
    )
    return env


class TemplateRenderer:
    """Render named templates from explicit context dataclasses.

    Args:
        templates_dir: Optional template directory override.
    """

    def __init__(self, templates_dir: Optional[Path] = None) -> None:
        self._env = create_environment(templates_dir)

    @property
    def environment(self) -> Environment:
        """The underlying Jinja2 environment."""
        return self._env

    def render(self, template_name: str, context: Any = None) -> str:
        """Render *template_name* with the fields of *context*.

        Args:
            template_name: Template file name relative to the template
                directory.
            context: A dataclass from
                :mod:`~discogen.generator.template_contexts`, or ``None``
                for context-free templates.

        Returns:
            The rendered text.

        Raises:
            RenderError: If the template is missing, has a syntax error, or
                references a field absent from *context*.
        """
        variables = template_vars(context) if context is not None else {}
        try:
            template = self._env.get_template(template_name)
            return template.render(**variables)
        except TemplateError as exc:
            raise RenderError(f"Failed to render {template_name}: {exc}") from exc
