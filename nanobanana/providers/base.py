"""Provider base types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence


@dataclass(frozen=True)
class InlineImage:
    base64: str
    mime_type: str = "image/png"


@dataclass
class ExtractedContent:
    images: list[InlineImage] = field(default_factory=list)
    text: str = ""


@dataclass
class ImageResult:
    file_path: str = ""
    base64_data: str = ""
    mime_type: str = ""
    text_content: str = ""

    @property
    def has_image(self) -> bool:
        return bool(self.file_path)


class ModelGateway(Protocol):
    @property
    def model_name(self) -> str:
        ...

    def generate(self, prompt: str) -> ImageResult:
        ...

    def edit(
        self,
        image_base64: str,
        image_mime_type: str,
        prompt: str,
        reference_images: Sequence[InlineImage] | None = None,
    ) -> ImageResult:
        ...
