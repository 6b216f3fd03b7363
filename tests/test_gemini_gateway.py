from __future__ import annotations

import base64
from pathlib import Path
from typing import Any

import pytest

from nanobanana.config import Settings
from nanobanana.files.store import ImageStore
from nanobanana.providers.base import InlineImage
from nanobanana.providers.gemini import NO_IMAGE_EDITED, NO_IMAGE_GENERATED, GeminiGateway

PNG_B64 = base64.b64encode(b"\x89PNG-first").decode("ascii")
JPG_B64 = base64.b64encode(b"\xff\xd8-second").decode("ascii")


class _FakeModels:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def generate_content(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class _FakeClient:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.models = _FakeModels(response, error)


def _response(*parts: dict[str, Any]) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": list(parts)}}]}


def _gateway(tmp_path: Path, client: _FakeClient, model: str = "gemini-2.5-flash-image") -> GeminiGateway:
    return GeminiGateway(
        settings=Settings(api_key="test-key", model=model),
        client=client,
        store=ImageStore(tmp_path / "out"),
    )


def test_generate_saves_first_image(tmp_path: Path) -> None:
    client = _FakeClient(
        _response(
            {"text": "A cat."},
            {"inlineData": {"data": PNG_B64, "mimeType": "image/png"}},
            {"inlineData": {"data": JPG_B64, "mimeType": "image/jpeg"}},
        )
    )
    gateway = _gateway(tmp_path, client)

    result = gateway.generate("a cat")

    assert result.has_image
    assert Path(result.file_path).name.startswith("generated-")
    assert Path(result.file_path).read_bytes() == b"\x89PNG-first"
    assert result.base64_data == PNG_B64
    assert result.mime_type == "image/png"
    assert result.text_content == "A cat."
    assert len(list((tmp_path / "out").iterdir())) == 1


def test_generate_request_shape(tmp_path: Path) -> None:
    client = _FakeClient(_response())
    gateway = _gateway(tmp_path, client, model="gemini-3-pro-image-preview")

    gateway.generate("a cat")

    call = client.models.calls[0]
    assert call["model"] == "gemini-3-pro-image-preview"
    assert call["contents"] == "a cat"
    assert call["config"].response_modalities == ["TEXT", "IMAGE"]
    assert gateway.model_name == "gemini-3-pro-image-preview"


def test_generate_without_image_returns_text_only(tmp_path: Path) -> None:
    gateway = _gateway(tmp_path, _FakeClient(_response({"text": "I can't draw that."})))
    result = gateway.generate("a cat")
    assert not result.has_image
    assert result.file_path == ""
    assert result.base64_data == ""
    assert result.text_content == "I can't draw that."
    assert not (tmp_path / "out").exists()


def test_generate_without_image_or_text_uses_fallback(tmp_path: Path) -> None:
    gateway = _gateway(tmp_path, _FakeClient({"candidates": []}))
    assert gateway.generate("a cat").text_content == NO_IMAGE_GENERATED


def test_edit_orders_primary_references_then_prompt(tmp_path: Path) -> None:
    client = _FakeClient(_response({"inlineData": {"data": JPG_B64, "mimeType": "image/jpeg"}}))
    gateway = _gateway(tmp_path, client)
    refs = [
        InlineImage(base64.b64encode(b"ref-1").decode("ascii"), "image/webp"),
        InlineImage(base64.b64encode(b"ref-2").decode("ascii"), "image/gif"),
    ]

    result = gateway.edit(PNG_B64, "image/png", "make it blue", refs)

    parts = client.models.calls[0]["contents"][0].parts
    assert [part.inline_data.data for part in parts[:3]] == [b"\x89PNG-first", b"ref-1", b"ref-2"]
    assert [part.inline_data.mime_type for part in parts[:3]] == ["image/png", "image/webp", "image/gif"]
    assert parts[3].text == "make it blue"
    assert Path(result.file_path).name.startswith("edited-")
    assert result.mime_type == "image/jpeg"


def test_edit_without_references(tmp_path: Path) -> None:
    client = _FakeClient(_response())
    gateway = _gateway(tmp_path, client)

    result = gateway.edit(PNG_B64, "image/png", "crop it")

    parts = client.models.calls[0]["contents"][0].parts
    assert len(parts) == 2
    assert parts[1].text == "crop it"
    assert result.text_content == NO_IMAGE_EDITED


def test_transport_errors_propagate(tmp_path: Path) -> None:
    gateway = _gateway(tmp_path, _FakeClient(error=ConnectionError("upstream down")))
    with pytest.raises(ConnectionError):
        gateway.generate("a cat")
    assert len(gateway.client.models.calls) == 1
