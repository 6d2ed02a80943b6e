"""Identifier, path, and comment helpers shared by the generator and templates.

Every function here is pure and tolerant of odd input: templates call them on
raw discovery content, and a single unexpected value must not abort a
generation run. They are registered as Jinja2 filters in
:mod:`discogen.generator.templates`.

**Parameters**

* :func:`get_path_params` -- names of parameters substituted into the URL.
* :func:`get_safe_param_name` -- suffix names that shadow reserved request
  options (``resource``, ``media``, ``auth``).
* :func:`has_resource_param` -- whether a method declares ``resource``.

**Identifiers**

* :func:`clean_property_name` -- quote property names that are not bare
  identifiers.
* :func:`camelify` -- ``well-known`` to ``wellKnown``.
* :func:`upper_first` -- capitalise only the first character.
* :func:`namespace_name` -- the namespace for one API version.

**Paths and comments**

* :func:`un_regex` -- turn a path pattern into an example path.
* :func:`collapse_duplicate_slashes` / :func:`build_url` -- tidy URL templates.
* :func:`one_line`, :func:`clean_comments`, :func:`clean_paths` -- make text
  safe to embed in generated comments.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any


RESERVED_PARAMS = frozenset({"resource", "media", "auth"})
"""Parameter names that collide with request-option keys in generated code."""

_ILLEGAL_IDENT_CHARS_RE = re.compile(r"[-@.]")
_NON_IDENT_RE = re.compile(r"\W")

# ``^projects/[^/]+$`` style collection segments; irregular plurals and
# multi-segment patterns are left as they are.
_COLLECTION_SEGMENT_RE = re.compile(r"\^?(\w+)s/\[\^/\]\+\$?")

# A run of slashes not directly preceded by a scheme colon.
_DUPLICATE_SLASHES_RE = re.compile(r"([^:]/)/+")


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


def get_path_params(params: Any) -> list[str]:
    """Return the names of parameters whose ``location`` is ``"path"``.

    Accepts either parsed :class:`~discogen.models.Parameter` values or raw
    dicts, preserving declaration order.

    Args:
        params: A mapping of parameter name to parameter.

    Returns:
        Path parameter names; empty when *params* is not a mapping.
    """
    if not isinstance(params, Mapping):
        return []
    path_params: list[str] = []
    for name, param in params.items():
        if isinstance(param, Mapping):
            location = param.get("location")
        else:
            location = getattr(param, "location", None)
        if location == "path":
            path_params.append(name)
    return path_params


def get_safe_param_name(name: str) -> str:
    """Append ``_`` to parameter names listed in :data:`RESERVED_PARAMS`."""
    if name in RESERVED_PARAMS:
        return f"{name}_"
    return name


def has_resource_param(method: Any) -> bool:
    """Return ``True`` if *method* declares a parameter literally named ``resource``."""
    params = getattr(method, "parameters", None)
    return isinstance(params, Mapping) and "resource" in params


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def clean_property_name(name: str) -> str:
    """Quote *name* if it contains ``-``, ``@`` or ``.``.

    Example::

        >>> clean_property_name("foo-bar")
        "'foo-bar'"
        >>> clean_property_name("fooBar")
        'fooBar'
    """
    if _ILLEGAL_IDENT_CHARS_RE.search(name):
        return f"'{name}'"
    return name


def camelify(name: str) -> str:
    """Rewrite a hyphen-separated name in camelCase.

    Example::

        >>> camelify("well-known")
        'wellKnown'
    """
    if "-" not in name:
        return name
    parts = [part for part in name.split("-") if part]
    return "".join(
        part if i == 0 else part[:1].upper() + part[1:]
        for i, part in enumerate(parts)
    )


def upper_first(name: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return name[:1].upper() + name[1:]


def namespace_name(name: str, version: str) -> str:
    """Return the TypeScript namespace for one API version.

    Example::

        >>> namespace_name("prediction", "v1.2")
        'prediction_v1_2'
    """
    return f"{name}_{_NON_IDENT_RE.sub('_', version)}"


# ---------------------------------------------------------------------------
# Paths and comments
# ---------------------------------------------------------------------------


def un_regex(regex: Any) -> str:
    """Turn a parameter pattern into a human-readable example path.

    Strips the ``^`` and ``$`` anchors, then rewrites each
    ``<word>s/[^/]+`` segment as ``<word>s/my-<word>``. Patterns the rewrite
    does not recognise are returned with only their anchors removed.

    Example::

        >>> un_regex("^projects/[^/]+$")
        'projects/my-project'
        >>> un_regex(42)
        ''
    """
    if not isinstance(regex, str):
        return ""
    pattern = regex
    if pattern.startswith("^"):
        pattern = pattern[1:]
    if pattern.endswith("$"):
        pattern = pattern[:-1]
    return _COLLECTION_SEGMENT_RE.sub(r"\1s/my-\1", pattern)


def collapse_duplicate_slashes(url: str) -> str:
    """Collapse runs of ``/`` except the ``//`` following a scheme colon.

    Example::

        >>> collapse_duplicate_slashes("https://host//a//b")
        'https://host/a/b'
    """
    return _DUPLICATE_SLASHES_RE.sub(r"\1", url)


def build_url(url: str | None) -> str:
    """Quote *url* as a string literal with duplicate slashes collapsed.

    An empty or missing URL still yields a literal (``''``) so the generated
    expression stays valid.
    """
    return collapse_duplicate_slashes(f"'{url or ''}'")


def one_line(text: str | None) -> str:
    """Replace newlines with spaces."""
    return text.replace("\n", " ") if text else ""


def clean_comments(text: str | None) -> str:
    """Neutralise comment delimiters so *text* can sit inside ``/* ... */``."""
    if not text:
        return ""
    return text.replace("*/", "x/").replace("/*", "/x")


def clean_paths(text: str | None) -> str:
    """Neutralise comment delimiters and escaped newlines inside path strings."""
    if not text:
        return ""
    text = re.sub(r"/\*/", "/x/", text)
    text = re.sub(r"/\*`", "/x", text)
    text = text.replace("*/", "x/")
    return text.replace("\\n", "x/")
