from . import exceptions
from .config import Config, with_append_slice, with_overwrite_with_empty_value, with_override
from .mapping import convert, map_values, map_with_overwrite
from .merge import merge, merge_with_overwrite
from .refs import Ref

__all__ = [
    "Config",
    "Ref",
    "convert",
    "exceptions",
    "map_values",
    "map_with_overwrite",
    "merge",
    "merge_with_overwrite",
    "with_append_slice",
    "with_overwrite_with_empty_value",
    "with_override",
]
