"""Path sandboxing for caller-supplied image paths."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Sequence

from ..errors import OutOfBoundsError


def allowed_directories() -> list[str]:
    return [str(Path.home()), tempfile.gettempdir()]


def canonicalize(value: str | os.PathLike[str]) -> str:
    # resolve() collapses "." and ".." and follows symlinks, so a link that
    # points out of an allowed directory is judged by its target.
    return str(Path(value).expanduser().resolve(strict=False))


def validate_path(input_path: str | os.PathLike[str], allowed_dirs: Sequence[str | os.PathLike[str]]) -> str:
    """Return the canonical form of ``input_path`` if it lies inside ``allowed_dirs``.

    A path equal to an allowed directory is accepted. Prefix matches are bounded by
    the path separator, so ``/home/user2`` is not inside ``/home/user``.
    """
    if not str(input_path or "").strip():
        raise OutOfBoundsError("Image path is empty.")
    resolved = canonicalize(input_path)
    for directory in allowed_dirs:
        root = canonicalize(directory)
        if resolved == root:
            return resolved
        prefix = root if root.endswith(os.sep) else root + os.sep
        if resolved.startswith(prefix):
            return resolved
    raise OutOfBoundsError("Path is outside the allowed directories (home and temp).")
