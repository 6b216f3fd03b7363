"""Gemini image gateway."""

from __future__ import annotations

import base64
import logging
from typing import Any, Sequence

from google import genai
from google.genai import types

from ..config import Settings, load_settings
from ..files.store import ImageStore
from .base import ImageResult, InlineImage
from .extract import extract_images

logger = logging.getLogger(__name__)

RESPONSE_MODALITIES = ["TEXT", "IMAGE"]
NO_IMAGE_GENERATED = "No image was generated. The model returned only text."
NO_IMAGE_EDITED = "No edited image was generated."


class GeminiGateway:
    name = "gemini"

    def __init__(
        self,
        settings: Settings | None = None,
        client: Any | None = None,
        store: ImageStore | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.client = client or genai.Client(api_key=self.settings.api_key)
        self.store = store or ImageStore()

    @property
    def model_name(self) -> str:
        return self.settings.model

    def generate(self, prompt: str) -> ImageResult:
        logger.info("generate model=%s prompt_chars=%d", self.model_name, len(prompt))
        response = self.client.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=_content_config(),
        )
        return self._to_result(response, prefix="generated", fallback_text=NO_IMAGE_GENERATED)

    def edit(
        self,
        image_base64: str,
        image_mime_type: str,
        prompt: str,
        reference_images: Sequence[InlineImage] | None = None,
    ) -> ImageResult:
        parts = _build_edit_parts(InlineImage(image_base64, image_mime_type), reference_images or (), prompt)
        logger.info(
            "edit model=%s prompt_chars=%d references=%d",
            self.model_name,
            len(prompt),
            len(reference_images or ()),
        )
        response = self.client.models.generate_content(
            model=self.model_name,
            contents=[types.Content(role="user", parts=parts)],
            config=_content_config(),
        )
        return self._to_result(response, prefix="edited", fallback_text=NO_IMAGE_EDITED)

    def _to_result(self, response: Any, *, prefix: str, fallback_text: str) -> ImageResult:
        extracted = extract_images(response)
        if not extracted.images:
            logger.info("%s: upstream returned no image", prefix)
            return ImageResult(text_content=extracted.text or fallback_text)
        first = extracted.images[0]
        file_path = self.store.save(first.base64, prefix)
        return ImageResult(
            file_path=file_path,
            base64_data=first.base64,
            mime_type=first.mime_type,
            text_content=extracted.text,
        )


def _content_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(response_modalities=list(RESPONSE_MODALITIES))


def _inline_part(image: InlineImage) -> types.Part:
    return types.Part(inline_data=types.Blob(data=base64.b64decode(image.base64), mime_type=image.mime_type))


def _build_edit_parts(primary: InlineImage, references: Sequence[InlineImage], prompt: str) -> list[types.Part]:
    parts = [_inline_part(primary)]
    parts.extend(_inline_part(ref) for ref in references)
    parts.append(types.Part(text=prompt))
    return parts
