"""Error taxonomy for tree materialization."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "TreePopError",
    "InvalidArgumentError",
    "RootCreationError",
    "DirCreationError",
    "FileCreationError",
    "FileWriteError",
    "StructuralTypeError",
    "TreeSourceError",
]


class TreePopError(RuntimeError):
    """Base class for every error raised while materializing a tree."""


class InvalidArgumentError(TreePopError, ValueError):
    """Raised when a caller-supplied argument is unusable."""


class RootCreationError(TreePopError):
    """Raised when a fresh root directory cannot be allocated."""


class _PathError(TreePopError):
    _action = "process"

    def __init__(self, path: Path, reason: object) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            "cannot {0} {1}: {2}".format(self._action, self.path, reason)
        )


class DirCreationError(_PathError):
    """Raised when a directory (or one of its parents) cannot be created."""

    _action = "create directory"


class FileCreationError(_PathError):
    """Raised when a file cannot be created exclusively."""

    _action = "create file"


class FileWriteError(_PathError):
    """Raised when a created file cannot receive its payload."""

    _action = "write file"


class StructuralTypeError(TreePopError, TypeError):
    """Raised when entry content does not match its name's marker.

    ``expected`` describes the accepted shapes for the marker and
    ``type_name`` names the type that was found instead.
    """

    def __init__(self, path: Path, type_name: str, expected: str) -> None:
        self.path = Path(path)
        self.type_name = type_name
        self.expected = expected
        super().__init__(
            "content of {0} is typed {1} instead of {2}".format(
                self.path, type_name, expected
            )
        )


class TreeSourceError(TreePopError):
    """Raised when a tree description file cannot be loaded."""
