"""Shared utilities for nanobanana."""

from __future__ import annotations

import logging
import os
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_ABS_PATH_RE = re.compile(r"(?<![\w.:/\\])(?:~|[A-Za-z]:)?[\\/][^\s'\",;]+")
_GOOGLE_KEY_RE = re.compile(r"AIza[0-9A-Za-z_\-]{35}")


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def setup_logging(level: int | str = logging.WARNING) -> None:
    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    # stdout carries the protocol stream.
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)


def sanitize_message(message: str, secrets: Iterable[str | None] = ()) -> str:
    """Strip credentials and absolute filesystem paths from an error message."""
    text = str(message or "")
    for secret in secrets:
        if secret:
            text = text.replace(secret, "***")
    text = _GOOGLE_KEY_RE.sub("***", text)
    text = _ABS_PATH_RE.sub("<path>", text)
    return text.strip() or "Internal error."


def load_dotenv(path: Path | None = None, override: bool = False) -> bool:
    env_path = path or Path.cwd() / ".env"
    if not env_path.exists():
        return False
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[7:].strip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue
        value = value.strip()
        if value and value[0] == value[-1] and value.startswith(("\"", "'")):
            value = value[1:-1]
        if not override and key in os.environ:
            continue
        os.environ[key] = value
    return True
