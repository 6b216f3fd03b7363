"""Normalize Gemini generate_content responses into images and text."""

from __future__ import annotations

import base64
from typing import Any, Mapping

from .base import ExtractedContent, InlineImage

DEFAULT_MIME_TYPE = "image/png"


def _field(value: Any, *names: str) -> Any:
    if value is None:
        return None
    for name in names:
        if isinstance(value, Mapping):
            found = value.get(name)
        else:
            found = getattr(value, name, None)
        if found is not None:
            return found
    return None


def _as_base64(data: Any) -> str | None:
    if isinstance(data, (bytes, bytearray)):
        return base64.b64encode(bytes(data)).decode("ascii") if data else None
    if isinstance(data, str):
        return data or None
    return None


def _first_parts(response: Any) -> list[Any]:
    candidates = _field(response, "candidates")
    if not candidates:
        return []
    try:
        first = candidates[0]
    except (TypeError, IndexError, KeyError):
        return []
    content = _field(first, "content")
    parts = _field(content, "parts")
    if not parts:
        return []
    try:
        return list(parts)
    except TypeError:
        return []


def extract_images(response: Any) -> ExtractedContent:
    """Collect text and inline images from the first candidate, in order.

    Works on SDK response objects and on plain mappings (snake_case or camelCase).
    Missing candidates, content or parts yield an empty result.
    """
    extracted = ExtractedContent()
    text_chunks: list[str] = []
    for part in _first_parts(response):
        text = _field(part, "text")
        if isinstance(text, str) and text:
            text_chunks.append(text)
        inline = _field(part, "inline_data", "inlineData")
        data = _as_base64(_field(inline, "data"))
        if data is None:
            continue
        mime_type = _field(inline, "mime_type", "mimeType")
        extracted.images.append(
            InlineImage(base64=data, mime_type=str(mime_type) if mime_type else DEFAULT_MIME_TYPE)
        )
    extracted.text = "".join(text_chunks)
    return extracted
