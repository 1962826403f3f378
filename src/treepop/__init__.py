"""Materialize nested tree descriptions into directories and files."""

from __future__ import annotations

from .entries import (
    EMPTY,
    Empty,
    Nested,
    Text,
    TreeDescription,
    is_dir_marker,
)
from .errors import (
    DirCreationError,
    FileCreationError,
    FileWriteError,
    InvalidArgumentError,
    RootCreationError,
    StructuralTypeError,
    TreePopError,
    TreeSourceError,
)
from .fs import DIR_MODE, FILE_MODE
from .materializer import generate, generate_at

__all__ = [
    "EMPTY",
    "Empty",
    "Nested",
    "Text",
    "TreeDescription",
    "is_dir_marker",
    "DirCreationError",
    "FileCreationError",
    "FileWriteError",
    "InvalidArgumentError",
    "RootCreationError",
    "StructuralTypeError",
    "TreePopError",
    "TreeSourceError",
    "DIR_MODE",
    "FILE_MODE",
    "generate",
    "generate_at",
]
