from __future__ import annotations

from typing import Any

from .classifier import kind_of_value
from .exceptions import NilArgumentsError, UnsupportedConversionError
from .refs import Ref
from .slots import Slot

_TRAVERSABLE_DESTINATIONS = frozenset({"record", "mapping", "list"})


def resolve_values(dst: Any, src: Any) -> tuple[Slot, Any]:
    """Normalize both arguments: a root slot for ``dst`` and a plain ``src`` value."""
    if dst is None or src is None:
        raise NilArgumentsError()

    target = dst.get() if isinstance(dst, Ref) else dst
    if target is None:
        raise NilArgumentsError()
    if kind_of_value(target) not in _TRAVERSABLE_DESTINATIONS:
        raise UnsupportedConversionError()

    if isinstance(src, Ref):
        src = src.get()
        if src is None:
            raise NilArgumentsError()

    return Slot.root(dst), src


__all__ = [
    "resolve_values",
]
