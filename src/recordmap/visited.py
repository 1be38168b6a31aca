from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .constants import HASH_CONSTANT
from .types import Address


@dataclass
class Visit:
    address: Address
    annotation: Any
    next: Visit | None = None


class VisitedSet:
    """Destination locations already traversed during one top-level call.

    Entries are chained per hash bucket; a location counts as visited only
    when both its address and its declared type match, so one storage
    location may be revisited under a different type.
    """

    def __init__(self) -> None:
        self._buckets: dict[int, Visit] = {}

    def seen(self, address: Address, annotation: Any) -> bool:
        """Return True if the pair was recorded before, otherwise record it."""
        key = HASH_CONSTANT * hash(address)
        head = self._buckets.get(key)
        node = head
        while node is not None:
            if node.address == address and node.annotation == annotation:
                return True
            node = node.next
        self._buckets[key] = Visit(address, annotation, head)
        return False

    def __len__(self) -> int:
        total = 0
        for head in self._buckets.values():
            node: Visit | None = head
            while node is not None:
                total += 1
                node = node.next
        return total


__all__ = [
    "Visit",
    "VisitedSet",
]
