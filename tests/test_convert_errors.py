from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from recordmap import Ref, convert, exceptions


@dataclass
class Person:
    name: str = ""


@dataclass(frozen=True)
class FrozenPerson:
    name: str = ""


def test_non_pointer_destination_is_rejected() -> None:
    with pytest.raises(exceptions.NonPointerArgumentError):
        convert(5, {"name": "Bob"})
    with pytest.raises(exceptions.NonPointerArgumentError):
        convert(FrozenPerson(), {"name": "Bob"})
    with pytest.raises(exceptions.NonPointerArgumentError):
        convert(("a",), {"name": "Bob"})


def test_none_arguments_are_rejected() -> None:
    with pytest.raises(exceptions.NilArgumentsError):
        convert(None, {"name": "Bob"})
    with pytest.raises(exceptions.NilArgumentsError):
        convert(Person(), None)
    with pytest.raises(exceptions.NilArgumentsError):
        convert(Ref(), {"name": "Bob"})


def test_record_source_requires_mapping_destination() -> None:
    with pytest.raises(exceptions.ExpectedMappingAsDestinationError):
        convert([], Person(name="Bob"))


def test_mapping_source_requires_record_destination() -> None:
    with pytest.raises(exceptions.ExpectedRecordAsDestinationError):
        convert([], {"name": "Bob"})


def test_scalar_source_is_unsupported() -> None:
    with pytest.raises(exceptions.UnsupportedConversionError):
        convert(Person(), "Bob")


def test_scalar_destination_behind_ref_is_unsupported() -> None:
    with pytest.raises(exceptions.UnsupportedConversionError):
        convert(Ref(3), {"name": "Bob"})


def test_errors_share_a_base_class() -> None:
    for error_type in (
        exceptions.NilArgumentsError,
        exceptions.NonPointerArgumentError,
        exceptions.ExpectedMappingAsDestinationError,
        exceptions.ExpectedRecordAsDestinationError,
        exceptions.UnsupportedConversionError,
        exceptions.DifferentArgumentsTypesError,
        exceptions.TypeMismatchError,
    ):
        assert issubclass(error_type, exceptions.ConversionError)
        assert issubclass(error_type, RuntimeError)


def test_same_kind_arguments_are_merged() -> None:
    target: dict[str, Any] = {"a": 1, "b": ""}
    convert(target, {"b": "x", "c": 3})
    assert target == {"a": 1, "b": "x", "c": 3}

    person = Person()
    convert(person, Person(name="Bob"))
    assert person.name == "Bob"
