"""Entry content variants and the directory marker rule.

A tree description maps entry names to content. Names ending with a path
separator describe directories, every other name describes a file. Content
is one of three variants:

``Empty``
    No content: an empty directory or a zero-byte file.
``Text``
    A text payload written to a file.
``Nested``
    A child tree description populating a directory.

Callers may use the variants directly or pass loose values (``None``,
``str`` and mappings). Loose values are resolved when the entry is
materialized, so ill-shaped input surfaces as
:class:`~treepop.errors.StructuralTypeError` for the offending path.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Union

from .errors import StructuralTypeError

__all__ = [
    "DIR_MARKERS",
    "EMPTY",
    "Empty",
    "Text",
    "Nested",
    "Content",
    "TreeDescription",
    "is_dir_marker",
    "resolve_dir_content",
    "resolve_file_content",
]

DIR_MARKERS: tuple[str, ...] = tuple(sorted({"/", os.sep}))


@dataclass(frozen=True)
class Empty:
    """Absent content."""


EMPTY = Empty()


@dataclass(frozen=True)
class Text:
    """Text payload for a file entry."""

    payload: str

    def __post_init__(self) -> None:
        if not isinstance(self.payload, str):
            raise TypeError(
                "Text payload must be str, found {0}.".format(
                    type(self.payload).__name__
                )
            )

    def encode(self) -> bytes:
        return self.payload.encode("utf-8", "surrogateescape")


@dataclass(frozen=True)
class Nested:
    """Child tree description for a directory entry."""

    tree: Mapping[str, Any]

    def __post_init__(self) -> None:
        if not isinstance(self.tree, Mapping):
            raise TypeError(
                "Nested tree must be a mapping, found {0}.".format(
                    type(self.tree).__name__
                )
            )

    def items(self):
        return self.tree.items()


Content = Union[Empty, Text, Nested]
TreeDescription = Mapping[str, Any]


def is_dir_marker(name: str) -> bool:
    """Return ``True`` when ``name`` designates a directory entry."""

    return name.endswith(DIR_MARKERS)


def resolve_dir_content(path: Path, content: Any) -> Union[Empty, Nested]:
    if content is None or isinstance(content, Empty):
        return EMPTY
    if isinstance(content, Nested):
        return content
    if isinstance(content, Mapping):
        return Nested(content)
    raise StructuralTypeError(
        path, _describe(content), "a nested tree description or nothing"
    )


def resolve_file_content(path: Path, content: Any) -> Union[Empty, Text]:
    if content is None or isinstance(content, Empty):
        return EMPTY
    if isinstance(content, Text):
        return content
    if isinstance(content, str):
        return Text(content)
    raise StructuralTypeError(path, _describe(content), "text or nothing")


def _describe(content: Any) -> str:
    return type(content).__name__
