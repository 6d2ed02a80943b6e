"""Map discovery schema items to TypeScript type expressions.

:func:`map_type` is the single entry point; it dispatches exhaustively on
:attr:`~discogen.models.SchemaItem.kind`:

* **Reference** -- ``Schema$<Name>``. References are never expanded, which
  keeps the mapping finite on self-referential schemas.
* **Object map** (``additionalProperties``) -- ``{ [key: string]: T; }``.
* **Object with properties** -- an inline structural type with every
  property optional.
* **Array** -- ``T[]`` when ``T`` is simple, ``Array<T>`` when ``T`` contains
  a structural type (a ``{``).
* **Primitive** -- ``integer`` becomes ``number``; any other declared type
  passes through unchanged.
* **Unknown** -- ``any``.
"""

from __future__ import annotations

from typing import Optional

from discogen.generator.naming import clean_property_name
from discogen.models import Parameter, SchemaItem, SchemaKind


# Present in every inline structural type, absent from names and primitives.
_STRUCTURAL_MARKER = "{"

_UNTYPED = "any"


def reference_type_name(ref: str) -> str:
    """Return the type name generated for the schema named *ref*."""
    return f"Schema${ref}"


def is_simple_type(type_expr: str) -> bool:
    """Return ``True`` if *type_expr* embeds no structural (brace) type."""
    return _STRUCTURAL_MARKER not in type_expr


def map_type(item: Optional[SchemaItem]) -> str:
    """Return the TypeScript type expression for a schema item.

    Args:
        item: The schema node. ``None`` (e.g. an array without ``items``)
            maps to ``any``.

    Returns:
        A type expression string such as ``"string"``,
        ``"Schema$Operation[]"`` or ``"{ [key: string]: number; }"``.

    Example::

        >>> map_type(SchemaItem.model_validate({"type": "array", "items": {"type": "integer"}}))
        'number[]'
    """
    if item is None:
        return _UNTYPED

    kind = item.kind
    if kind is SchemaKind.REFERENCE:
        return reference_type_name(item.ref or "")
    if kind is SchemaKind.OBJECT_MAP:
        return f"{{ [key: string]: {map_type(item.additional_properties)}; }}"
    if kind is SchemaKind.OBJECT_WITH_PROPS:
        fields = " ".join(
            f"{clean_property_name(name)}?: {map_type(prop)};"
            for name, prop in (item.properties or {}).items()
        )
        return f"{{ {fields} }}"
    if kind is SchemaKind.ARRAY:
        inner = map_type(item.items)
        if is_simple_type(inner):
            return f"{inner}[]"
        return f"Array<{inner}>"
    if kind is SchemaKind.PRIMITIVE:
        return _map_primitive(item.type or _UNTYPED)
    return _UNTYPED


def map_parameter_type(param: Parameter) -> str:
    """Return the type expression for a method parameter.

    Repeated parameters accept a list of their base type.
    """
    base = _map_primitive(param.type or "string")
    return f"{base}[]" if param.repeated else base


def _map_primitive(type_name: str) -> str:
    if type_name == "integer":
        return "number"
    return type_name
