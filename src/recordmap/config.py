from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from .types import Option

logger = logging.getLogger(__name__)


@dataclass
class Config:
    overwrite: bool = False
    append_slice: bool = False
    # Forced on while a record is populated from a mapping.
    overwrite_with_empty_value: bool = False


def with_override(config: Config) -> None:
    """Let non-empty source values replace non-empty destination values."""
    config.overwrite = True


def with_append_slice(config: Config) -> None:
    """Merge lists by appending source items instead of replacing."""
    config.append_slice = True


def with_overwrite_with_empty_value(config: Config) -> None:
    """Let empty source values replace destination values."""
    config.overwrite = True
    config.overwrite_with_empty_value = True


def build_config(options: Iterable[Option]) -> Config:
    config = Config()
    for option in options:
        if not callable(option):
            raise TypeError(f"conversion options must be callables taking a Config, got {option!r}")
        option(config)
    logger.debug(
        "conversion config overwrite=%s append_slice=%s overwrite_with_empty_value=%s",
        config.overwrite,
        config.append_slice,
        config.overwrite_with_empty_value,
    )
    return config


@contextmanager
def forced_overwrite_with_empty_value(config: Config) -> Iterator[Config]:
    previous = config.overwrite_with_empty_value
    config.overwrite_with_empty_value = True
    try:
        yield config
    finally:
        config.overwrite_with_empty_value = previous


__all__ = [
    "Config",
    "build_config",
    "forced_overwrite_with_empty_value",
    "with_append_slice",
    "with_overwrite_with_empty_value",
    "with_override",
]
