"""Command-line entry point for materializing tree description files."""

from __future__ import annotations

import argparse
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from treepop import entries
from treepop.core.config import load_tree, resolve_settings
from treepop.core.logging import configure_logger
from treepop.errors import TreePopError
from treepop.materializer import generate, generate_at


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treepop",
        description=(
            "Materialize nested tree descriptions (TOML or JSON) into real "
            "directories and files."
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Print the installed treepop version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command")

    build = subparsers.add_parser(
        "build",
        help="Create the directories and files of a tree description.",
    )
    build.add_argument(
        "description",
        type=Path,
        help="Path to a .toml or .json tree description.",
    )
    target = build.add_mutually_exclusive_group()
    target.add_argument(
        "--root",
        type=Path,
        help="Populate this directory instead of a fresh temporary root.",
    )
    target.add_argument(
        "--parent",
        type=Path,
        help="Allocate the fresh root under this directory.",
    )
    build.add_argument(
        "--log-dir",
        type=Path,
        help="Directory for JSON log files (defaults to TREEPOP_LOG_DIR).",
    )
    build.add_argument(
        "--log-level",
        help="Logging level for the log file (defaults to INFO).",
    )
    build.add_argument(
        "--verbose",
        action="store_true",
        help="Echo log records to stderr.",
    )
    output = build.add_mutually_exclusive_group()
    output.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    output.add_argument(
        "--show",
        action="store_true",
        help="Render the materialized layout as a tree.",
    )

    subparsers.add_parser("version", help="Print the installed version.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version or args.command == "version":
        return _handle_version()

    if args.command == "build":
        return _handle_build(
            args, console=Console(), errors=Console(stderr=True)
        )

    parser.print_usage(sys.stderr)
    return 2


def _handle_version() -> int:
    try:
        version = metadata.version("treepop")
    except metadata.PackageNotFoundError:
        version = "unknown"
    sys.stdout.write(version + "\n")
    return 0


def _handle_build(
    args: argparse.Namespace, *, console: Console, errors: Console
) -> int:
    try:
        settings = resolve_settings(
            log_dir=args.log_dir, log_level=args.log_level
        )
        tree = load_tree(args.description)
    except TreePopError as exc:
        _emit(errors, f"treepop: {exc}")
        return 1

    logger, log_path = configure_logger(
        "treepop.cli",
        log_dir=settings.log_dir,
        level=settings.log_level,
        verbose=args.verbose,
    )
    logger.debug(
        "treepop build invoked",
        extra={"description": str(args.description)},
    )

    try:
        if args.root is not None:
            generate_at(args.root, tree, logger=logger)
            root = args.root
        else:
            root = generate(tree, parent=args.parent, logger=logger)
    except TreePopError as exc:
        logger.error("treepop build failed", extra={"error": str(exc)})
        _emit(errors, f"treepop: {exc}")
        _emit(errors, f"log file: {log_path}")
        return 1

    if args.quiet:
        return 0
    if args.show:
        console.print(render_tree(root, tree))
    else:
        _emit(console, str(root))
    return 0


def _emit(console: Console, text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def render_tree(root: Path, tree: Mapping[str, Any]) -> Tree:
    """Build a Rich tree mirroring the description materialized at ``root``."""

    node = Tree(f"[bold]{escape(str(root))}[/bold]")
    _add_children(node, tree)
    return node


def _add_children(node: Tree, tree: Mapping[str, Any]) -> None:
    for name in sorted(tree):
        content = tree[name]
        if entries.is_dir_marker(name):
            branch = node.add(f"[bold blue]{escape(name)}[/bold blue]")
            if isinstance(content, entries.Nested):
                content = content.tree
            if isinstance(content, Mapping):
                _add_children(branch, content)
        else:
            node.add(escape(name))


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
