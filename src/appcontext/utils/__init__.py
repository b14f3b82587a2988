"""Utility exports for atomic filesystem writes and store locking."""

from appcontext.utils.concurrency import ReadWriteLock
from appcontext.utils.fs import atomic_write, ensure_directory, file_exists

__all__ = [
    "ReadWriteLock",
    "atomic_write",
    "ensure_directory",
    "file_exists",
]
