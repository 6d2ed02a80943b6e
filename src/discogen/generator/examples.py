"""Build illustrative example values for request and response bodies.

Examples are shallow by policy: each top-level property gets one value chosen
from its declared type alone, and ``$ref`` properties are never followed.
That keeps the generated samples short and makes cyclic schemas harmless.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from discogen.models import SchemaItem


def flatten_schema(
    item: Optional[SchemaItem],
    schemas: Mapping[str, SchemaItem],
) -> dict[str, Any]:
    """Return an example object with one value per declared property.

    Args:
        item: The schema to illustrate.
        schemas: The document's schema catalogue. Passed through to
            :func:`example_property_value`; references are not followed.

    Returns:
        A dict keyed by property name in declaration order. Items without
        ``properties`` yield ``{}``.

    Example::

        >>> flatten_schema(SchemaItem.model_validate(
        ...     {"properties": {"name": {"type": "string"}, "count": {"type": "integer"}}}
        ... ), {})
        {'name': 'my_name', 'count': 0}
    """
    result: dict[str, Any] = {}
    if item is None or not item.properties:
        return result
    for name, details in item.properties.items():
        result[name] = example_property_value(name, details, schemas)
    return result


def example_property_value(
    name: str,
    details: SchemaItem,
    schemas: Mapping[str, SchemaItem],
) -> Any:
    """Pick the example value for one property from its declared type."""
    if details.type == "string":
        return f"my_{name}"
    if details.type == "boolean":
        return False
    if details.type == "integer":
        return 0
    if details.type == "array":
        return []
    return {}


def resolve_example(
    ref_item: Optional[SchemaItem],
    schemas: Mapping[str, SchemaItem],
) -> Optional[dict[str, Any]]:
    """Flatten the schema a method's ``request`` or ``response`` points at.

    Returns:
        ``None`` when the method declares no body, ``{}`` when the ``$ref``
        names a schema missing from *schemas*, and the flattened example
        otherwise.
    """
    if ref_item is None or not ref_item.ref:
        return None
    target = schemas.get(ref_item.ref)
    if target is None:
        return {}
    return flatten_schema(target, schemas)
