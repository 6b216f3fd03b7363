"""Filesystem collaborators: path sandbox and image storage."""

from __future__ import annotations

from .paths import allowed_directories, validate_path
from .store import MAX_FILE_SIZE_BYTES, ImageStore, default_output_dir, mime_type_of

__all__ = [
    "MAX_FILE_SIZE_BYTES",
    "ImageStore",
    "allowed_directories",
    "default_output_dir",
    "mime_type_of",
    "validate_path",
]
