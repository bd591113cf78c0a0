"""
Secret History
===============

In-memory, newest-first record of generated secrets for one session.

The history is owned by the caller (the CLI or any other front end) and
passed explicitly to whatever needs it. The generator core never touches
it, and nothing here is persisted.
"""

from __future__ import annotations

from typing import Iterator, Optional

from forge.core.models import SavedSecret, StrengthSummary


class SecretHistory:
    """Bounded list of :class:`SavedSecret` records, newest first.

    Usage::

        history = SecretHistory(max_items=50)
        entry = history.add(secret, "uuid", strength=result.summary())
        history.remove(entry.id)

    Args:
        max_items: Oldest entries beyond this count are dropped.
    """

    def __init__(self, max_items: int = 50) -> None:
        if max_items < 1:
            raise ValueError(f"max_items must be >= 1, got {max_items}")
        self._max_items = max_items
        self._items: list[SavedSecret] = []

    def add(
        self,
        secret: str,
        algorithm: str,
        strength: Optional[StrengthSummary] = None,
    ) -> SavedSecret:
        """Record a secret at the front of the history and return the entry."""
        entry = SavedSecret(secret=secret, algorithm=algorithm, strength=strength)
        self._items.insert(0, entry)
        del self._items[self._max_items:]
        return entry

    def remove(self, entry_id: str) -> bool:
        """Drop the entry with *entry_id*; returns whether one was found."""
        before = len(self._items)
        self._items = [item for item in self._items if item.id != entry_id]
        return len(self._items) != before

    def get(self, entry_id: str) -> Optional[SavedSecret]:
        """Entry with *entry_id*, or ``None``."""
        return next((item for item in self._items if item.id == entry_id), None)

    def clear(self) -> None:
        """Forget every entry."""
        self._items.clear()

    @property
    def items(self) -> list[SavedSecret]:
        """A copy of the entries, newest first."""
        return list(self._items)

    @property
    def max_items(self) -> int:
        return self._max_items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[SavedSecret]:
        return iter(list(self._items))
