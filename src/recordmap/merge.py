from __future__ import annotations

import logging
from collections.abc import Mapping
from copy import copy
from typing import Any

from .classifier import is_empty, is_mutable, kind_of_value, mapping_value_type, record_fields
from .config import Config, build_config, with_override
from .constants import AGGREGATE_KINDS
from .exceptions import DifferentArgumentsTypesError, NonPointerArgumentError
from .refs import Ref
from .resolve import resolve_values
from .slots import Slot
from .types import Option
from .visited import VisitedSet

logger = logging.getLogger(__name__)


def merge(dst: Any, src: Any, *options: Option) -> None:
    """Merge ``src`` into ``dst`` in place; both must be of the same type.

    Empty destination values are filled from ``src``. Non-empty ones are kept
    unless ``with_override`` is given. Records, mappings and optional values
    are merged recursively.
    """
    if dst is not None and not is_mutable(dst):
        raise NonPointerArgumentError()

    config = build_config(options)
    root, src_value = resolve_values(dst, src)
    dst_value = root.get()
    if type(dst_value) is not type(src_value):
        raise DifferentArgumentsTypesError(type(dst_value), type(src_value))

    deep_merge(root, src_value, VisitedSet(), 0, config)


def merge_with_overwrite(dst: Any, src: Any, *options: Option) -> None:
    merge(dst, src, *options, with_override)


def deep_merge(dst: Slot, src: Any, visited: VisitedSet, depth: int, config: Config) -> Any:
    """Merge ``src`` into the storage behind ``dst`` and return the resulting value."""
    if dst.addressable and visited.seen(dst.address, dst.annotation):
        logger.debug("merge revisits %r at depth=%d; skipping", dst, depth)
        return dst.get()

    kind = dst.kind
    if kind == "pointer":
        _merge_pointer(dst, src, visited, depth, config)
    elif kind == "interface":
        _merge_interface(dst, src, visited, depth, config)
    else:
        if isinstance(src, Ref):
            src = src.get()
        if src is None:
            return dst.get()
        src_kind = kind_of_value(src)
        if kind == "record" and src_kind == "record":
            _merge_record(dst, src, visited, depth, config)
        elif kind == "mapping" and src_kind == "mapping":
            _merge_mapping(dst, src, visited, depth, config)
        elif kind == "list" and src_kind == "list" and config.append_slice:
            _append_list(dst, src)
        else:
            _assign(dst, src, config)
    return dst.get()


def _merge_record(dst: Slot, src: Any, visited: VisitedSet, depth: int, config: Config) -> None:
    current = dst.get()
    if current is None:
        dst.set(copy(src))
        return

    src_fields = record_fields(type(src))
    for name, annotation in record_fields(type(current)).items():
        if name not in src_fields:
            continue
        deep_merge(dst.field(name, annotation), getattr(src, name), visited, depth + 1, config)


def _merge_mapping(
    dst: Slot,
    src: Mapping[Any, Any],
    visited: VisitedSet,
    depth: int,
    config: Config,
) -> None:
    current = dst.get()
    if current is None:
        dst.set(dict(src))
        return

    value_type = mapping_value_type(dst.annotation)
    for key, value in src.items():
        entry = Slot(current, key, value_type)
        if key not in current:
            entry.set(value)
            continue
        deep_merge(entry, value, visited, depth + 1, config)


def _merge_pointer(dst: Slot, src: Any, visited: VisitedSet, depth: int, config: Config) -> None:
    value = src.get() if isinstance(src, Ref) else src
    if value is None:
        if config.overwrite_with_empty_value and dst.get() is not None:
            dst.set(None)
        return

    if dst.get() is None:
        dst.point_to(src)
        return
    deep_merge(dst.deref(), value, visited, depth + 1, config)


def _merge_interface(dst: Slot, src: Any, visited: VisitedSet, depth: int, config: Config) -> None:
    if isinstance(src, Ref):
        src = src.get()
    current = dst.get()
    if src is None:
        if config.overwrite_with_empty_value and current is not None:
            dst.set(None)
        return
    if current is None:
        dst.set(src)
        return

    src_kind = kind_of_value(src)
    if src_kind == kind_of_value(current) and src_kind in AGGREGATE_KINDS:
        # Same storage, now seen through its concrete type.
        deep_merge(dst.retyped(type(current)), src, visited, depth + 1, config)
        return
    _assign(dst, src, config)


def _append_list(dst: Slot, src: list[Any]) -> None:
    current = dst.get()
    if current is None:
        dst.set(list(src))
        return
    current.extend(src)


def _assign(dst: Slot, src: Any, config: Config) -> None:
    if is_empty(src):
        # Empty sources only win when explicitly authoritative.
        if config.overwrite_with_empty_value:
            dst.set(src)
        return
    if config.overwrite or is_empty(dst.get()):
        dst.set(src)


__all__ = [
    "deep_merge",
    "merge",
    "merge_with_overwrite",
]
