"""On-disk image storage."""

from __future__ import annotations

import base64
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from ..errors import FileTooLargeError
from ..utils import ensure_dir

logger = logging.getLogger(__name__)

IMAGES_DIR_NAME = "nanobanana-images"
MAX_FILE_SIZE_BYTES = 20 * 1024 * 1024

_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
}


def default_output_dir() -> Path:
    return Path.home() / IMAGES_DIR_NAME


def mime_type_of(file_path: str | Path) -> str:
    return _MIME_TYPES.get(Path(file_path).suffix.lower(), "image/png")


def _timestamp_slug(moment: datetime | None = None) -> str:
    stamp = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return f"{stamp:%Y-%m-%dT%H-%M-%S}-{stamp.microsecond // 1000:03d}Z"


class ImageStore:
    def __init__(self, output_dir: Path | None = None, max_bytes: int = MAX_FILE_SIZE_BYTES) -> None:
        self.output_dir = Path(output_dir) if output_dir is not None else default_output_dir()
        self.max_bytes = max_bytes

    def generate_name(self, prefix: str) -> str:
        suffix = uuid.uuid4().hex[:8]
        return f"{prefix}-{_timestamp_slug()}-{suffix}.png"

    def save(self, base64_data: str, prefix: str) -> str:
        ensure_dir(self.output_dir)
        path = (self.output_dir / self.generate_name(prefix)).resolve()
        path.write_bytes(base64.b64decode(base64_data))
        logger.info("Saved %s image (%d bytes)", prefix, path.stat().st_size)
        return str(path)

    def read(self, file_path: str | Path) -> bytes:
        path = Path(file_path)
        size = path.stat().st_size
        if size > self.max_bytes:
            raise FileTooLargeError(
                f"File too large: {round(size / 1024 / 1024)}MB exceeds {self.max_bytes // (1024 * 1024)}MB limit"
            )
        return path.read_bytes()
