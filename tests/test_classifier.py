from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import BaseModel

from recordmap import Ref
from recordmap.classifier import (
    is_empty,
    is_mutable,
    kind_of_type,
    kind_of_value,
    pointer_target,
    record_fields,
    zero_value,
)


@dataclass
class Point:
    x: int
    y: int = 0
    label: str | None = None
    tags: list[str] = field(default_factory=list)
    _cache: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FrozenPoint:
    x: int


class ServiceModel(BaseModel):
    host: str
    port: int = 8080
    point: Point | None = None


def test_kind_of_type_classifies_declared_shapes() -> None:
    assert kind_of_type(int) == "int"
    assert kind_of_type(bool) == "bool"
    assert kind_of_type(str) == "string"
    assert kind_of_type(list[int]) == "list"
    assert kind_of_type(dict[str, Any]) == "mapping"
    assert kind_of_type(Point) == "record"
    assert kind_of_type(ServiceModel) == "record"
    assert kind_of_type(Optional[int]) == "pointer"
    assert kind_of_type(Point | None) == "pointer"
    assert kind_of_type(Ref[Point]) == "pointer"
    assert kind_of_type(Any) == "interface"
    assert kind_of_type(Union[int, str]) == "interface"


def test_kind_of_value_classifies_runtime_shapes() -> None:
    assert kind_of_value(None) == "invalid"
    assert kind_of_value(True) == "bool"
    assert kind_of_value(3) == "int"
    assert kind_of_value("x") == "string"
    assert kind_of_value({"a": 1}) == "mapping"
    assert kind_of_value(Point(x=1)) == "record"
    assert kind_of_value(ServiceModel(host="h")) == "record"
    assert kind_of_value(Ref(1)) == "pointer"


def test_pointer_target_unwraps_optional_and_ref() -> None:
    assert pointer_target(Optional[Point]) is Point
    assert pointer_target(Ref[int]) is int
    assert pointer_target(int) is None
    assert pointer_target(Union[int, str, None]) is None


def test_record_fields_lists_exported_fields_only() -> None:
    assert list(record_fields(Point)) == ["x", "y", "label", "tags"]
    assert list(record_fields(ServiceModel)) == ["host", "port", "point"]


def test_record_fields_fall_back_to_any_for_local_forward_references() -> None:
    @dataclass
    class Inner:
        value: int = 0

    @dataclass
    class Outer:
        name: str = ""
        inner: Inner | None = None

    assert record_fields(Outer) == {"name": str, "inner": Any}
    assert kind_of_type(record_fields(Outer)["name"]) == "string"


def test_is_empty_matches_zero_values() -> None:
    for value in (None, "", 0, 0.0, False, [], {}, set(), Ref()):
        assert is_empty(value), value
    for value in ("x", 1, True, [0], {"a": None}, Ref(0), Point(x=0)):
        assert not is_empty(value), value


def test_zero_value_builds_records_without_validation() -> None:
    point = zero_value(Point)
    assert point == Point(x=0)

    service = zero_value(ServiceModel)
    assert isinstance(service, ServiceModel)
    assert service.host == ""
    assert service.port == 8080
    assert service.point is None

    assert zero_value(dict[str, int]) == {}
    assert zero_value(Optional[int]) is None


def test_is_mutable_rejects_values_and_frozen_records() -> None:
    assert is_mutable({})
    assert is_mutable(Point(x=1))
    assert is_mutable(Ref())
    assert not is_mutable(1)
    assert not is_mutable((1, 2))
    assert not is_mutable(FrozenPoint(x=1))
