"""Shared helpers for treepop commands."""

from __future__ import annotations

from .config import (
    Settings,
    load_toml,
    load_json,
    load_tree,
    resolve_settings,
)
from .logging import JsonLogFormatter, configure_logger

__all__ = [
    "Settings",
    "load_toml",
    "load_json",
    "load_tree",
    "resolve_settings",
    "configure_logger",
    "JsonLogFormatter",
]
