from __future__ import annotations

from collections.abc import Mapping, MutableMapping, MutableSequence
from typing import Any

from .classifier import is_ref_type, kind_of_type, pointer_target, zero_value
from .exceptions import NonPointerArgumentError
from .refs import Ref
from .types import Address, Kind


class Slot:
    """One storage location: a record field, a mapping entry or a ``Ref`` cell.

    The declared type travels with the location, so the same storage can be
    seen as ``Optional[X]`` and, once dereferenced, as ``X``.
    """

    __slots__ = ("owner", "name", "annotation", "_detached")

    def __init__(self, owner: Any, name: Any, annotation: Any, *, detached: bool = False) -> None:
        self.owner = owner
        self.name = name
        self.annotation = annotation
        self._detached = detached

    @classmethod
    def root(cls, dst: Any) -> Slot:
        if isinstance(dst, Ref):
            return cls(dst, "value", type(dst.get()))
        # Caller's object is not rebindable; writes go through in place.
        return cls(Ref(dst), "value", type(dst), detached=True)

    @property
    def kind(self) -> Kind:
        return kind_of_type(self.annotation)

    @property
    def addressable(self) -> bool:
        return not isinstance(self.owner, Mapping)

    @property
    def address(self) -> Address:
        return (id(self.owner), self.name)

    def get(self) -> Any:
        owner = self.owner
        if isinstance(owner, Ref):
            return owner.get()
        if isinstance(owner, Mapping):
            return owner.get(self.name)
        return getattr(owner, self.name, None)

    def set(self, value: Any) -> None:
        owner = self.owner
        if self._detached:
            _replace_in_place(owner.get(), value)
        elif isinstance(owner, Ref):
            owner.set(value)
        elif isinstance(owner, MutableMapping):
            owner[self.name] = value
        else:
            setattr(owner, self.name, value)

    def field(self, name: str, annotation: Any) -> Slot:
        return Slot(self.get(), name, annotation)

    def retyped(self, annotation: Any) -> Slot:
        return Slot(self.owner, self.name, annotation, detached=self._detached)

    def deref(self) -> Slot:
        target = pointer_target(self.annotation)
        if is_ref_type(self.annotation):
            return Slot(self.get(), "value", target)
        return self.retyped(target)

    def point_to(self, value: Any) -> None:
        holds_ref = is_ref_type(self.annotation) or is_ref_type(pointer_target(self.annotation))
        if holds_ref and not isinstance(value, Ref):
            value = Ref(value)
        elif not holds_ref and isinstance(value, Ref):
            value = value.get()
        self.set(value)

    def allocate(self) -> Any:
        value = zero_value(pointer_target(self.annotation))
        self.point_to(value)
        return value

    def __repr__(self) -> str:
        return f"Slot({type(self.owner).__name__}.{self.name}: {self.annotation!r})"


def _replace_in_place(current: Any, value: Any) -> None:
    if isinstance(current, MutableSequence):
        current[:] = value
        return
    if isinstance(current, MutableMapping):
        current.clear()
        current.update(value)
        return
    raise NonPointerArgumentError()


__all__ = [
    "Slot",
]
