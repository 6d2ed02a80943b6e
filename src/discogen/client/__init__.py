"""HTTP layer for discogen.

Exports :class:`RequestQueue`, the bounded-concurrency async client every
discovery and API-list fetch goes through.
"""

from discogen.client.request_queue import RequestQueue

__all__ = ["RequestQueue"]
