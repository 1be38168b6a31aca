from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Callable

    from .config import Config

Kind = Literal[
    "invalid",
    "bool",
    "int",
    "float",
    "complex",
    "string",
    "bytes",
    "list",
    "tuple",
    "set",
    "mapping",
    "record",
    "pointer",
    "interface",
    "other",
]
Option: TypeAlias = "Callable[[Config], None]"
Address: TypeAlias = tuple[int, Any]

__all__ = [
    "Address",
    "Kind",
    "Option",
]
