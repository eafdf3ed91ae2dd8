"""File I/O modules."""

from .file_handler import FileHandler

__all__ = [
    "FileHandler",
]
