"""Upstream model providers."""

from __future__ import annotations

from .base import ExtractedContent, ImageResult, InlineImage, ModelGateway
from .extract import extract_images
from .gemini import GeminiGateway

__all__ = [
    "ExtractedContent",
    "GeminiGateway",
    "ImageResult",
    "InlineImage",
    "ModelGateway",
    "extract_images",
]
