"""Loading tree descriptions and run settings for treepop commands."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

try:  # Python >= 3.11 ships ``tomllib`` in the stdlib.
    import tomllib
except ModuleNotFoundError as exc:  # pragma: no cover - defensive guard
    raise RuntimeError("Python 3.11+ is required for tomllib support.") from exc

from treepop.errors import TreeSourceError

__all__ = [
    "ENV_PREFIX",
    "Settings",
    "load_toml",
    "load_json",
    "load_tree",
    "resolve_settings",
]

ENV_PREFIX = "TREEPOP_"
_DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Resolved settings for a command-line run."""

    log_dir: Path
    log_level: str


def load_toml(path: Path) -> Mapping[str, Any]:
    """Load a TOML document from ``path``.

    Errors are surfaced as :class:`TreeSourceError` instances.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise TreeSourceError(f"Tree file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise TreeSourceError(f"Failed to parse tree TOML: {exc}") from exc


def load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError as exc:
        raise TreeSourceError(f"Tree file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise TreeSourceError(f"Failed to parse tree JSON: {exc}") from exc


def load_tree(path: Path) -> Mapping[str, Any]:
    """Load a tree description from a ``.toml`` or ``.json`` file.

    TOML has no null value, so empty directories are written as empty
    tables and empty files as ``""``. JSON ``null`` means absent content.
    """

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".toml":
        document = load_toml(path)
    elif suffix == ".json":
        document = load_json(path)
    else:
        raise TreeSourceError(
            f"Unsupported tree file type '{path.suffix}': {path}. "
            "Expected .toml or .json."
        )

    if not isinstance(document, Mapping):
        raise TreeSourceError(
            "Tree file must contain a table at the top level, found "
            "{0}: {1}".format(type(document).__name__, path)
        )
    return document


def resolve_settings(
    *,
    log_dir: Optional[Path] = None,
    log_level: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve settings applying precedence arguments > env > defaults."""

    env_map = os.environ if env is None else env

    resolved_dir = _pick_first(
        log_dir,
        _parse_env_path(env_map, "LOG_DIR"),
        _default_log_dir(),
    )
    resolved_level = _pick_first(
        log_level,
        _parse_env_string(env_map, "LOG_LEVEL"),
        _DEFAULT_LOG_LEVEL,
    )
    level = str(resolved_level).strip()
    if not level:
        raise TreeSourceError("log level must be a non-empty string.")

    return Settings(log_dir=Path(resolved_dir), log_level=level.upper())


def _default_log_dir() -> Path:
    return Path(tempfile.gettempdir()) / "treepop-logs"


def _parse_env_path(env_map: Mapping[str, str], key: str) -> Optional[Path]:
    raw = _parse_env_string(env_map, key)
    if raw is None:
        return None
    return Path(raw).expanduser()


def _parse_env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
