from .base_converter import BaseConverter, ProgressCallback

__all__ = [
    "BaseConverter",
    "ProgressCallback",
]
