from __future__ import annotations

import dataclasses
import sys
import types
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence, Set
from numbers import Number
from typing import Annotated, Any, Literal, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from .constants import SCALAR_KINDS
from .naming import is_exported
from .refs import Ref
from .types import Kind

_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)


def is_record_type(candidate: Any) -> bool:
    if not isinstance(candidate, type):
        return False
    return dataclasses.is_dataclass(candidate) or issubclass(candidate, BaseModel)


def is_record(value: Any) -> bool:
    return not isinstance(value, type) and is_record_type(type(value))


def is_mutable(value: Any) -> bool:
    """Whether ``value`` can be written through, the way a pointer target can."""
    if isinstance(value, (Ref, MutableMapping, MutableSequence)):
        return True
    if not is_record(value):
        return False
    if isinstance(value, BaseModel):
        return not value.model_config.get("frozen", False)
    return not type(value).__dataclass_params__.frozen  # type: ignore[attr-defined]


def record_fields(record_type: type[Any]) -> dict[str, Any]:
    """Exported field names of a record type mapped to their declared types."""
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return {
            name: info.annotation if info.annotation is not None else Any
            for name, info in record_type.model_fields.items()
            if is_exported(name)
        }

    return {
        name: annotation
        for name, annotation in _dataclass_annotations(record_type).items()
        if is_exported(name)
    }


def _dataclass_annotations(record_type: type[Any]) -> dict[str, Any]:
    module = sys.modules.get(record_type.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = {record_type.__name__: record_type}
    try:
        hints = get_type_hints(record_type, globalns=globalns, localns=localns)
    except (NameError, TypeError):
        hints = {}

    annotations: dict[str, Any] = {}
    for item in dataclasses.fields(record_type):
        if item.name in hints:
            annotations[item.name] = hints[item.name]
        else:
            annotations[item.name] = _resolve_annotation(item.type, globalns=globalns, localns=localns)
    return annotations


def _resolve_annotation(annotation: Any, *, globalns: dict[str, Any], localns: dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)
    except (NameError, TypeError):
        # Names local to a function body cannot be resolved from here.
        return Any


def pointer_target(annotation: Any) -> Any | None:
    annotation = _strip_annotated(annotation)
    if annotation is Ref:
        return Any

    origin = get_origin(annotation)
    if origin is Ref:
        args = get_args(annotation)
        return args[0] if args else Any

    if origin in _UNION_ORIGINS:
        args = get_args(annotation)
        non_none = [arg for arg in args if arg is not _NONE_TYPE]
        if len(non_none) == 1 and len(non_none) != len(args):
            return non_none[0]
    return None


def is_ref_type(annotation: Any) -> bool:
    annotation = _strip_annotated(annotation)
    return annotation is Ref or get_origin(annotation) is Ref


def mapping_value_type(annotation: Any) -> Any:
    args = get_args(_strip_annotated(annotation))
    if len(args) == 2:
        return args[1]
    return Any


def kind_of_type(annotation: Any) -> Kind:
    annotation = _strip_annotated(annotation)
    if annotation is Any or annotation is object or isinstance(annotation, TypeVar):
        return "interface"
    if pointer_target(annotation) is not None:
        return "pointer"

    origin = get_origin(annotation)
    if origin in _UNION_ORIGINS:
        return "interface"
    if origin is Literal:
        args = get_args(annotation)
        return kind_of_value(args[0]) if args else "other"

    base = origin if origin is not None else annotation
    if not isinstance(base, type):
        return "other"
    if is_record_type(base):
        return "record"
    return _kind_of_class(base, declared=True)


def kind_of_value(value: Any) -> Kind:
    if value is None:
        return "invalid"
    if isinstance(value, Ref):
        return "pointer"
    if is_record(value):
        return "record"
    return _kind_of_class(type(value), declared=False)


def _kind_of_class(cls: type[Any], *, declared: bool) -> Kind:
    if issubclass(cls, Mapping):
        return "mapping"
    for scalar_type, kind in SCALAR_KINDS:
        if issubclass(cls, scalar_type):
            return kind
    if declared:
        if issubclass(cls, Sequence):
            return "list"
        if issubclass(cls, Set):
            return "set"
    return "other"


def is_empty(value: Any) -> bool:
    """Zero-value test used as the overwrite guard."""
    if value is None:
        return True
    if isinstance(value, Ref):
        return value.get() is None
    if is_record(value):
        return False
    if isinstance(value, bool):
        return not value
    if isinstance(value, Number):
        return value == 0
    try:
        return len(value) == 0
    except TypeError:
        return False


def zero_value(annotation: Any) -> Any:
    """Fresh zero-valued instance of a declared type."""
    annotation = _strip_annotated(annotation)
    if is_ref_type(annotation):
        return Ref(zero_value(pointer_target(annotation)))
    kind = kind_of_type(annotation)
    if kind in {"pointer", "interface"}:
        return None

    origin = get_origin(annotation)
    base = origin if origin is not None else annotation
    if kind == "record":
        return _zero_record(base)
    if kind == "mapping":
        if isinstance(base, type) and issubclass(base, dict):
            return base()
        return {}
    if kind == "list" and not (isinstance(base, type) and issubclass(base, list)):
        return []
    if kind == "set" and not (isinstance(base, type) and issubclass(base, (set, frozenset))):
        return set()
    if isinstance(base, type):
        try:
            return base()
        except TypeError:
            return None
    return None


def _zero_record(record_type: type[Any]) -> Any:
    if issubclass(record_type, BaseModel):
        values = {
            name: zero_value(info.annotation)
            for name, info in record_type.model_fields.items()
            if info.is_required()
        }
        return record_type.model_construct(**values)

    hints = _dataclass_annotations(record_type)
    values = {}
    for item in dataclasses.fields(record_type):
        if not item.init:
            continue
        if item.default is not dataclasses.MISSING or item.default_factory is not dataclasses.MISSING:
            continue
        values[item.name] = zero_value(hints[item.name])
    return record_type(**values)


def _strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


__all__ = [
    "is_empty",
    "is_mutable",
    "is_record",
    "is_record_type",
    "is_ref_type",
    "kind_of_type",
    "kind_of_value",
    "mapping_value_type",
    "pointer_target",
    "record_fields",
    "zero_value",
]
