"""Helpers for building filesystem fixtures in test suites."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

from .entries import TreeDescription
from .materializer import generate_at


@dataclass
class TreeBuilder:
    """Helper bound to a root directory for concise fixture creation."""

    root: Path

    def create(self, tree: TreeDescription) -> Path:
        generate_at(self.root, tree)
        return self.root

    def path(self, *parts: Union[str, Path]) -> Path:
        return self.root.joinpath(*parts)

    def files(self, pattern: str = "**/*") -> Iterator[Path]:
        return (p for p in self.root.glob(pattern) if p.is_file())
