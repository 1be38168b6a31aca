from __future__ import annotations

from .types import Kind

# visited table
HASH_CONSTANT = 17

# runtime scalar kinds, checked in order (bool before int)
SCALAR_KINDS: tuple[tuple[type, Kind], ...] = (
    (bool, "bool"),
    (int, "int"),
    (float, "float"),
    (complex, "complex"),
    (str, "string"),
    (bytes, "bytes"),
    (bytearray, "bytes"),
    (list, "list"),
    (tuple, "tuple"),
    (set, "set"),
    (frozenset, "set"),
)

# kinds a merge can descend into
AGGREGATE_KINDS: frozenset[Kind] = frozenset({"mapping", "record", "list"})

__all__ = [
    "AGGREGATE_KINDS",
    "HASH_CONSTANT",
    "SCALAR_KINDS",
]
