from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .classifier import (
    is_empty,
    is_mutable,
    kind_of_type,
    kind_of_value,
    pointer_target,
    record_fields,
    zero_value,
)
from .config import Config, build_config, forced_overwrite_with_empty_value, with_override
from .exceptions import (
    ExpectedMappingAsDestinationError,
    ExpectedRecordAsDestinationError,
    NonPointerArgumentError,
    TypeMismatchError,
    UnsupportedConversionError,
)
from .merge import deep_merge
from .naming import lower_initial, upper_initial
from .refs import Ref
from .resolve import resolve_values
from .slots import Slot
from .types import Option
from .visited import VisitedSet

logger = logging.getLogger(__name__)


def convert(dst: Any, src: Any, *options: Option) -> None:
    """Set the values of ``dst`` from ``src``.

    ``src`` is either a mapping with string keys or a record, and ``dst`` must
    be the opposite: a record (or a ``Ref`` to one) for a mapping source, a
    mutable mapping for a record source. Arguments of the same kind are
    merged instead.

    Record fields starting with ``_`` are never read nor written. Keys written
    into a mapping are the field names with a lower-cased initial; mapping keys
    are matched against field names with an upper-cased initial first, then
    verbatim. Keys with no matching field are skipped.
    """
    if dst is not None and not is_mutable(dst):
        raise NonPointerArgumentError()

    config = build_config(options)
    root, src_value = resolve_values(dst, src)

    dst_kind = root.kind
    src_kind = kind_of_value(src_value)
    if src_kind == dst_kind:
        logger.debug("same kind conversion forwarded to merge kind=%s", src_kind)
        deep_merge(root, src_value, VisitedSet(), 0, config)
        return

    if src_kind == "record":
        if dst_kind != "mapping":
            raise ExpectedMappingAsDestinationError()
    elif src_kind == "mapping":
        if dst_kind != "record":
            raise ExpectedRecordAsDestinationError()
    else:
        raise UnsupportedConversionError()

    deep_map(root, src_value, VisitedSet(), 0, config)


map_values = convert


def map_with_overwrite(dst: Any, src: Any, *options: Option) -> None:
    """Like ``convert``, but non-empty ``dst`` values are replaced by non-empty ``src`` values."""
    convert(dst, src, *options, with_override)


def deep_map(dst: Slot, src: Any, visited: VisitedSet, depth: int, config: Config) -> None:
    # Cycle guard: each (location, type) pair is traversed once per call.
    if dst.addressable and visited.seen(dst.address, dst.annotation):
        logger.debug("conversion revisits %r at depth=%d; skipping", dst, depth)
        return

    kind = dst.kind
    if kind == "mapping":
        map_map(dst, src, config)
        return

    if kind == "pointer" and not _points_to_record(dst.annotation):
        logger.debug("no record behind %r; leaving it untouched", dst)
        return

    while kind == "pointer":
        if dst.get() is None:
            dst.allocate()
            logger.debug("allocated %r for %r", pointer_target(dst.annotation), dst)
        dst = dst.deref()
        kind = dst.kind

    if kind == "record":
        map_struct(dst, src, visited, depth, config)


def map_map(dst: Slot, src: Any, config: Config) -> None:
    """Copy the exported fields of the record ``src`` into the mapping behind ``dst``."""
    dst_map = dst.get()
    if dst_map is None:
        dst_map = zero_value(dst.annotation)
        dst.set(dst_map)

    for name in record_fields(type(src)):
        key = lower_initial(name)
        if key not in dst_map or is_empty(dst_map[key]) or config.overwrite:
            dst_map[key] = getattr(src, name)


def map_struct(
    dst: Slot,
    src: Mapping[Any, Any],
    visited: VisitedSet,
    depth: int,
    config: Config,
) -> None:
    """Populate the record behind ``dst`` from the entries of ``src``."""
    record = dst.get()
    if record is None:
        record = zero_value(dst.annotation)
        dst.set(record)
    fields = record_fields(type(record))

    # Present mapping entries are authoritative, empty or not.
    with forced_overwrite_with_empty_value(config):
        for key, src_value in src.items():
            if not isinstance(key, str):
                continue
            field_name = _resolve_field_name(fields, key)
            if field_name is None:
                logger.debug("skipping key %r: %s has no matching field", key, type(record).__name__)
                continue

            field = dst.field(field_name, fields[field_name])
            dst_kind = field.kind
            src_kind = kind_of_value(src_value)

            if src_kind == "pointer" and (
                dst_kind != "pointer" or not _can_reference(src_value.get(), field.annotation)
            ):
                # Payload does not fit the pointed-to type; judge it on its own shape.
                src_value = src_value.get()
                src_kind = kind_of_value(src_value)
            elif dst_kind == "pointer" and src_kind != "pointer" and _can_reference(src_value, field.annotation):
                src_value = Ref(src_value)
                src_kind = "pointer"

            if src_value is None:
                continue

            depth += 1

            if src_kind == dst_kind or dst_kind == "interface":
                deep_merge(field, src_value, visited, depth, config)
            elif src_kind == "mapping":
                deep_map(field, src_value, visited, depth, config)
            else:
                raise TypeMismatchError(field_name, src_kind, dst_kind)


def _resolve_field_name(fields: Mapping[str, Any], key: str) -> str | None:
    for candidate in (upper_initial(key), key):
        if candidate in fields:
            return candidate
    return None


def _innermost_target(annotation: Any) -> Any | None:
    target = pointer_target(annotation)
    while target is not None and kind_of_type(target) == "pointer":
        target = pointer_target(target)
    return target


def _points_to_record(annotation: Any) -> bool:
    target = _innermost_target(annotation)
    return target is not None and kind_of_type(target) == "record"


def _can_reference(value: Any, annotation: Any) -> bool:
    # Only values that already have the pointed-to shape are taken by reference;
    # mappings aimed at records go through deep_map instead.
    if value is None:
        return False
    target_kind = kind_of_type(_innermost_target(annotation))
    return target_kind == "interface" or target_kind == kind_of_value(value)


__all__ = [
    "convert",
    "deep_map",
    "map_map",
    "map_struct",
    "map_values",
    "map_with_overwrite",
]
