"""Operating-system collaborators used by the materializer."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional, Union

__all__ = [
    "DIR_MODE",
    "FILE_MODE",
    "allocate_temp_dir",
    "ensure_dir",
    "create_exclusive",
]

DIR_MODE = 0o700
FILE_MODE = 0o600

PathLike = Union[str, "os.PathLike[str]"]


def allocate_temp_dir(
    parent_hint: Optional[PathLike] = None, prefix: str = "treepop-"
) -> Path:
    """Create a fresh, uniquely named, empty directory and return it.

    ``parent_hint`` defaults to the platform temporary directory.
    """

    parent = os.fspath(parent_hint) if parent_hint is not None else None
    return Path(tempfile.mkdtemp(prefix=prefix, dir=parent or None))


def ensure_dir(path: PathLike, mode: int = DIR_MODE) -> None:
    """Create ``path`` and any missing parents; existing directories pass.

    Every directory created here receives ``mode``, intermediate parents
    included. A component that exists as a non-directory raises
    :class:`FileExistsError` or :class:`NotADirectoryError`.
    """

    target = Path(path)
    missing: list[Path] = []
    candidate = target
    while not candidate.is_dir():
        if candidate.exists():
            raise FileExistsError(
                f"Expected directory but found a non-directory entry: "
                f"{candidate}"
            )
        missing.append(candidate)
        if candidate.parent == candidate:
            break
        candidate = candidate.parent

    for directory in reversed(missing):
        try:
            directory.mkdir(mode=mode)
        except FileExistsError:
            if not directory.is_dir():
                raise


def create_exclusive(path: PathLike, mode: int = FILE_MODE) -> BinaryIO:
    """Open a new file for binary writing, failing if ``path`` exists."""

    fd = os.open(
        os.fspath(path),
        os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0),
        mode,
    )
    try:
        return os.fdopen(fd, "wb")
    except BaseException:
        os.close(fd)
        raise
