"""State store adapters for locally tracked resource state."""

from .json_file import JsonFileStateStore

__all__ = ["JsonFileStateStore"]
