from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from treepop import fs


def test_allocate_temp_dir_creates_empty_unique_dirs(tmp_path: Path) -> None:
    first = fs.allocate_temp_dir(tmp_path, "pop")
    second = fs.allocate_temp_dir(tmp_path, "pop")

    assert first != second
    for path in (first, second):
        assert path.is_dir()
        assert path.parent == tmp_path
        assert path.name.startswith("pop")
        assert list(path.iterdir()) == []


def test_allocate_temp_dir_defaults_to_tempdir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(fs.tempfile, "tempdir", str(tmp_path))

    path = fs.allocate_temp_dir()

    assert path.parent == tmp_path
    assert path.name.startswith("treepop-")


def test_allocate_temp_dir_missing_parent_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        fs.allocate_temp_dir(tmp_path / "missing", "pop")


def test_ensure_dir_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"

    fs.ensure_dir(target)

    assert target.is_dir()


def test_ensure_dir_is_idempotent(tmp_path: Path) -> None:
    target = tmp_path / "same"
    fs.ensure_dir(target)
    marker = target / "keep.txt"
    marker.write_text("keep", encoding="utf-8")
    before = target.stat().st_mode

    fs.ensure_dir(target)

    assert target.stat().st_mode == before
    assert marker.read_text(encoding="utf-8") == "keep"


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_ensure_dir_applies_mode_to_created_parents(tmp_path: Path) -> None:
    old_umask = os.umask(0o022)
    try:
        fs.ensure_dir(tmp_path / "p" / "q")
    finally:
        os.umask(old_umask)

    assert stat.S_IMODE((tmp_path / "p").stat().st_mode) == fs.DIR_MODE
    assert stat.S_IMODE((tmp_path / "p" / "q").stat().st_mode) == fs.DIR_MODE


def test_ensure_dir_rejects_file_component(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(OSError):
        fs.ensure_dir(blocker / "child")

    with pytest.raises(FileExistsError):
        fs.ensure_dir(blocker)


def test_create_exclusive_writes_new_file(tmp_path: Path) -> None:
    target = tmp_path / "new.bin"

    with fs.create_exclusive(target) as handle:
        handle.write(b"\x00data")

    assert target.read_bytes() == b"\x00data"


def test_create_exclusive_refuses_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "exists.txt"
    target.write_text("original", encoding="utf-8")

    with pytest.raises(FileExistsError):
        fs.create_exclusive(target)

    assert target.read_text(encoding="utf-8") == "original"


def test_create_exclusive_refuses_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileExistsError):
        fs.create_exclusive(tmp_path)


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_create_exclusive_mode(tmp_path: Path) -> None:
    target = tmp_path / "secret.txt"
    old_umask = os.umask(0o022)
    try:
        fs.create_exclusive(target).close()
    finally:
        os.umask(old_umask)

    assert stat.S_IMODE(target.stat().st_mode) == fs.FILE_MODE
