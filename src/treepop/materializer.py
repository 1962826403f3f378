"""Recursive materialization of tree descriptions onto the filesystem."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from . import fs
from .entries import (
    DIR_MARKERS,
    Empty,
    Nested,
    TreeDescription,
    is_dir_marker,
    resolve_dir_content,
    resolve_file_content,
)
from .errors import (
    DirCreationError,
    FileCreationError,
    FileWriteError,
    InvalidArgumentError,
    RootCreationError,
    StructuralTypeError,
)

__all__ = ["generate", "generate_at"]

_DEFAULT_LOGGER = logging.getLogger("treepop")

PathLike = Union[str, "os.PathLike[str]"]


def generate(
    tree: TreeDescription,
    *,
    parent: Optional[PathLike] = None,
    prefix: str = "treepop-",
    logger: Optional[logging.Logger] = None,
) -> Path:
    """Materialize ``tree`` inside a freshly allocated root directory.

    The new root is created under ``parent`` (the platform temporary
    directory by default) and returned. Errors raised while populating the
    root propagate unchanged; the root and any entries created before the
    failure are left on disk.
    """

    log = logger or _DEFAULT_LOGGER
    try:
        root = fs.allocate_temp_dir(parent, prefix)
    except OSError as exc:
        raise RootCreationError(
            f"cannot generate root directory: {exc}"
        ) from exc

    generate_at(root, tree, logger=log)
    return root


def generate_at(
    root: PathLike,
    tree: TreeDescription,
    *,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Materialize ``tree`` beneath ``root``, creating ``root`` if needed.

    Siblings are processed in mapping order, which callers should treat as
    unspecified. The first error stops the walk without rolling back what
    was already created.
    """

    if root is None or os.fspath(root) == "":
        raise InvalidArgumentError("root directory cannot be empty")

    base = Path(root)
    if isinstance(tree, Nested):
        tree = tree.tree
    elif not isinstance(tree, Mapping):
        raise StructuralTypeError(
            base, type(tree).__name__, "a tree description"
        )

    log = logger or _DEFAULT_LOGGER
    log.info(
        "Materializing tree",
        extra={"root": str(base), "entry_count": len(tree)},
    )

    _ensure_dir(base, log)
    for name, content in tree.items():
        _materialize(base, name, content, log)

    log.info("Materialized tree", extra={"root": str(base)})


def _materialize(
    parent: Path, name: str, content: Any, log: logging.Logger
) -> None:
    if is_dir_marker(name):
        _materialize_dir(_join(parent, name), content, log)
    else:
        _materialize_file(_join(parent, name), content, log)


def _join(parent: Path, name: str) -> Path:
    # Leading separators are dropped so every entry stays under ``parent``.
    return parent / name.lstrip("".join(DIR_MARKERS))


def _materialize_dir(path: Path, content: Any, log: logging.Logger) -> None:
    _ensure_dir(path, log)

    resolved = resolve_dir_content(path, content)
    if isinstance(resolved, Nested):
        for name, child in resolved.items():
            _materialize(path, name, child, log)


def _materialize_file(path: Path, content: Any, log: logging.Logger) -> None:
    try:
        handle = fs.create_exclusive(path, fs.FILE_MODE)
    except OSError as exc:
        raise FileCreationError(path, exc) from exc

    with handle:
        log.debug("Created file", extra={"path": str(path)})
        resolved = resolve_file_content(path, content)
        if isinstance(resolved, Empty):
            return
        try:
            handle.write(resolved.encode())
            handle.flush()
        except (OSError, UnicodeEncodeError) as exc:
            raise FileWriteError(path, exc) from exc


def _ensure_dir(path: Path, log: logging.Logger) -> None:
    try:
        fs.ensure_dir(path, fs.DIR_MODE)
    except OSError as exc:
        raise DirCreationError(path, exc) from exc
    log.debug("Ensured directory", extra={"path": str(path)})
