"""Filesystem helpers for directories."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def is_dir(path: PathLike) -> bool:
    """Return whether path is a directory; a missing path raises OSError."""
    return os.stat(path).st_mode & 0o170000 == 0o040000


def mkdir_with_path(path: PathLike, mode: int) -> None:
    """Create path and its parents, then give path the permission bits mode."""
    os.makedirs(path, exist_ok=True)
    if os.name == "posix":
        os.chmod(path, mode)


def delete_dir(dirname: PathLike) -> None:
    """Remove a directory together with everything under it."""
    root = Path(dirname)
    for entry in root.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            delete_dir(entry)
        else:
            entry.unlink()
    root.rmdir()