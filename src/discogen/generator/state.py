"""Per-run diagnostic log of generation progress."""

from __future__ import annotations


class GenerationStateLog:
    """Append-only map from a document source to its progress messages.

    Each per-API job only appends under its own key, so concurrent jobs never
    contend for an entry. The log is for diagnostics only and is never read to
    make generation decisions.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[str]] = {}

    def record(self, key: str, message: str) -> None:
        """Append *message* to the entry for *key*, creating it if needed."""
        self._entries.setdefault(key, []).append(message)

    def get(self, key: str) -> tuple[str, ...]:
        """Return the messages recorded for *key* (empty if none)."""
        return tuple(self._entries.get(key, ()))

    def snapshot(self) -> dict[str, list[str]]:
        """Return a copy of every entry, for dumping."""
        return {key: list(messages) for key, messages in self._entries.items()}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
