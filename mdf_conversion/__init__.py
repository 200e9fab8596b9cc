"""
Top-level package initialization. Exposes main utilities for easy import.
"""
from ._version import __version__
from .common_options import CommonOptions, DisplayTimeFormat, ParseOptionStatus
from .converters import BaseConverter
from .executable_interface import ExecutableInterface
from .option_schema import OptionKind, OptionMap, OptionSchema

__all__ = [
    "BaseConverter",
    "CommonOptions",
    "DisplayTimeFormat",
    "ExecutableInterface",
    "OptionKind",
    "OptionMap",
    "OptionSchema",
    "ParseOptionStatus",
    "__version__",
]
