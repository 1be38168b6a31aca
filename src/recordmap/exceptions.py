from __future__ import annotations

from typing import Any


class ConversionError(RuntimeError):
    """Base conversion error."""


class NilArgumentsError(ConversionError):
    """Raised when the source or the destination is None."""

    def __init__(self) -> None:
        super().__init__("src and dst must not be None")


class NonPointerArgumentError(ConversionError):
    """Raised when the destination is not mutable storage."""

    def __init__(self) -> None:
        super().__init__("dst must be a Ref, a mutable mapping or a mutable record")


class ExpectedMappingAsDestinationError(ConversionError):
    def __init__(self) -> None:
        super().__init__("dst must be a mapping when src is a record")


class ExpectedRecordAsDestinationError(ConversionError):
    def __init__(self) -> None:
        super().__init__("dst must be a record when src is a mapping")


class UnsupportedConversionError(ConversionError):
    def __init__(self) -> None:
        super().__init__("only records, mappings and lists are supported")


class DifferentArgumentsTypesError(ConversionError):
    """Raised by merge when src and dst are of different types."""

    def __init__(self, dst_type: Any, src_type: Any) -> None:
        super().__init__(f"src and dst must be of same type: got {dst_type!r} and {src_type!r}")
        self.dst_type = dst_type
        self.src_type = src_type


class TypeMismatchError(ConversionError):
    """Raised when a mapping entry cannot be stored into the matching record field."""

    def __init__(self, field_name: str, found: Any, expected: Any) -> None:
        super().__init__(f"type mismatch on {field_name} field: found {found}, expected {expected}")
        self.field_name = field_name
        self.found = found
        self.expected = expected
