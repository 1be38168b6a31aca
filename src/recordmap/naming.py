from __future__ import annotations

from collections.abc import Callable


def change_initial_case(name: str, mapper: Callable[[str], str]) -> str:
    if name == "":
        return name
    return mapper(name[0]) + name[1:]


def lower_initial(name: str) -> str:
    return change_initial_case(name, str.lower)


def upper_initial(name: str) -> str:
    return change_initial_case(name, str.upper)


def is_exported(name: str) -> bool:
    return bool(name) and not name.startswith("_")


__all__ = [
    "change_initial_case",
    "is_exported",
    "lower_initial",
    "upper_initial",
]
