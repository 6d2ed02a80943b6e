"""Collect every method reachable from a discovery document or resource."""

from __future__ import annotations

from typing import Protocol, Union

from discogen.models import DiscoveryDocument, Method, Resource


class _MethodBag(Protocol):
    methods: dict[str, Method]
    resources: dict[str, Resource]


def collect_methods(node: Union[DiscoveryDocument, Resource, _MethodBag]) -> tuple[Method, ...]:
    """Return all methods under *node*, depth-first and pre-order.

    A node's own methods come first in declaration order, followed by each
    child resource's methods, recursively, in declaration order.

    Example::

        root: methods a, b; resource child: method c  ->  (a, b, c)
    """
    collected: list[Method] = list(node.methods.values())
    for child in node.resources.values():
        collected.extend(collect_methods(child))
    return tuple(collected)
