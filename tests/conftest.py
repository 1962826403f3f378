from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent

# Ensure src/ is importable when the package is not installed
for extra in (ROOT / "src",):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from treepop.testing import TreeBuilder  # noqa: E402


@pytest.fixture
def tree_builder(tmp_path: Path) -> TreeBuilder:
    """Provide a tree builder bound to pytest's per-test tmp directory."""

    return TreeBuilder(tmp_path / "root")


@pytest.fixture(autouse=True)
def _close_cli_log_handlers() -> Iterator[None]:
    yield
    logger = logging.getLogger("treepop.cli")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
