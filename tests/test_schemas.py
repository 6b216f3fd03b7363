from __future__ import annotations

import pytest

from nanobanana.errors import InvalidArgumentsError
from nanobanana.session.schemas import (
    MAX_PROMPT_CHARS,
    ContinueEditingArgs,
    EditImageArgs,
    GenerateImageArgs,
    parse_arguments,
)


def test_prompt_bounds() -> None:
    assert parse_arguments(GenerateImageArgs, {"prompt": "ok"}).prompt == "ok"
    assert parse_arguments(GenerateImageArgs, {"prompt": "x" * MAX_PROMPT_CHARS}).prompt
    with pytest.raises(InvalidArgumentsError, match="Prompt is required"):
        parse_arguments(GenerateImageArgs, {"prompt": ""})
    with pytest.raises(InvalidArgumentsError, match="Prompt too long"):
        parse_arguments(GenerateImageArgs, {"prompt": "x" * (MAX_PROMPT_CHARS + 1)})


def test_missing_prompt_reports_required() -> None:
    with pytest.raises(InvalidArgumentsError) as excinfo:
        parse_arguments(GenerateImageArgs, None)
    assert excinfo.value.violations == ["Prompt is required"]


def test_edit_args_join_every_violation() -> None:
    with pytest.raises(InvalidArgumentsError) as excinfo:
        parse_arguments(EditImageArgs, {"prompt": ""})
    assert excinfo.value.violations == ["Image path is required", "Prompt is required"]
    assert str(excinfo.value) == "Image path is required; Prompt is required"


def test_edit_args_use_protocol_field_names() -> None:
    args = parse_arguments(
        EditImageArgs,
        {"imagePath": "/tmp/a.png", "prompt": "blue", "referenceImages": ["/tmp/b.png"]},
    )
    assert args.image_path == "/tmp/a.png"
    assert args.reference_images == ["/tmp/b.png"]


def test_reference_images_must_be_strings() -> None:
    with pytest.raises(InvalidArgumentsError, match="referenceImages"):
        parse_arguments(ContinueEditingArgs, {"prompt": "blue", "referenceImages": "not-a-list"})


def test_non_string_prompt_is_rejected() -> None:
    with pytest.raises(InvalidArgumentsError, match="prompt"):
        parse_arguments(GenerateImageArgs, {"prompt": 42})
