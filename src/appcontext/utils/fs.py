"""
appcontext - filesystem utilities

File: src/appcontext/utils/fs.py
Last updated: 2026-10-17

Purpose
- Crash-safe file replacement shared by the config manager, the JSON store and
  layout manifest export.

Functional requirements
- Atomic writes use a temp file in the destination directory and replace the
  target in a single ``os.replace``.
- The target's parent directory is created when missing.
- On any failure the temp file is removed and the target is left untouched.
- An existing target keeps its permission bits across the replace.

Non-functional requirements
- Standard library only; same-filesystem rename is assumed.
"""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from pathlib import Path

from appcontext.constants import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE

PathLike = str | os.PathLike[str]

__all__ = [
    "PathLike",
    "atomic_write",
    "ensure_directory",
    "file_exists",
]


def atomic_write(
    path: PathLike,
    data: bytes | str,
    *,
    encoding: str = "utf-8",
    file_mode: int | None = None,
    dir_mode: int = DEFAULT_DIR_MODE,
) -> None:
    """
    Atomically write ``data`` to ``path``.

    The write strategy is:
    1. ensure the parent directory exists (created with ``dir_mode``),
    2. create temp file in the same directory,
    3. write + flush + fsync file data,
    4. replace target via ``os.replace``.

    New files get ``file_mode`` (default ``0o644``); existing files keep their mode.
    """

    target = Path(path)
    target_parent = ensure_directory(target.parent, mode=dir_mode)

    mode = _target_mode(target, file_mode)
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{target.name}.",
        suffix=".tmp",
        dir=str(target_parent),
    )
    temp_path = Path(temp_name)

    try:
        if isinstance(data, bytes):
            with os.fdopen(fd, "wb") as file_handle:
                file_handle.write(data)
                file_handle.flush()
                os.fsync(file_handle.fileno())
        else:
            with os.fdopen(fd, "w", encoding=encoding) as file_handle:
                file_handle.write(data)
                file_handle.flush()
                os.fsync(file_handle.fileno())

        os.chmod(temp_path, mode)
        os.replace(temp_path, target)
        _fsync_directory(target_parent)
    except BaseException:
        with contextlib.suppress(OSError):
            temp_path.unlink(missing_ok=True)
        raise


def ensure_directory(path: PathLike, *, mode: int = DEFAULT_DIR_MODE) -> Path:
    """Create ``path`` (and parents) if missing and return it resolved."""

    directory = Path(path)
    directory.mkdir(mode=mode, parents=True, exist_ok=True)
    resolved = directory.resolve(strict=True)
    if not resolved.is_dir():
        raise NotADirectoryError(f"{resolved!s} is not a directory")
    return resolved


def file_exists(path: PathLike) -> bool:
    """Return ``True`` only for an existing regular file."""

    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except OSError:
        return False


def _target_mode(target: Path, file_mode: int | None) -> int:
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        return DEFAULT_FILE_MODE if file_mode is None else file_mode


def _fsync_directory(path: Path) -> None:
    """
    Best-effort directory fsync for metadata durability after ``os.replace``.

    Some platforms/filesystems do not support fsync on directories.
    """

    if os.name == "nt":
        return

    flags = os.O_RDONLY
    if hasattr(os, "O_DIRECTORY"):
        flags |= os.O_DIRECTORY

    try:
        dir_fd = os.open(path, flags)
    except OSError:
        return

    try:
        os.fsync(dir_fd)
    except OSError:
        return
    finally:
        os.close(dir_fd)
