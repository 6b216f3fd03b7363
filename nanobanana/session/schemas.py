"""Argument schemas for the image tools."""

from __future__ import annotations

from typing import Annotated, Any, Mapping, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import PydanticCustomError

from ..errors import InvalidArgumentsError

MAX_PROMPT_CHARS = 10_000

ArgsT = TypeVar("ArgsT", bound=BaseModel)


def _check_prompt(value: str) -> str:
    if len(value) < 1:
        raise PydanticCustomError("prompt_required", "Prompt is required")
    if len(value) > MAX_PROMPT_CHARS:
        raise PydanticCustomError("prompt_too_long", "Prompt too long (max 10,000 chars)")
    return value


def _check_image_path(value: str) -> str:
    if not value:
        raise PydanticCustomError("image_path_required", "Image path is required")
    return value


Prompt = Annotated[str, AfterValidator(_check_prompt)]
ImagePath = Annotated[str, AfterValidator(_check_image_path)]


class _ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GenerateImageArgs(_ToolArgs):
    prompt: Prompt = Field(default="", validate_default=True)


class EditImageArgs(_ToolArgs):
    image_path: ImagePath = Field(default="", alias="imagePath", validate_default=True)
    prompt: Prompt = Field(default="", validate_default=True)
    reference_images: list[str] | None = Field(default=None, alias="referenceImages")


class ContinueEditingArgs(_ToolArgs):
    prompt: Prompt = Field(default="", validate_default=True)
    reference_images: list[str] | None = Field(default=None, alias="referenceImages")


def _describe(error: Mapping[str, Any]) -> str:
    message = str(error.get("msg") or "Invalid value")
    if str(error.get("type", "")).startswith(("prompt_", "image_path_")):
        return message
    location = ".".join(str(item) for item in error.get("loc", ()) if item is not None)
    return f"{location}: {message}" if location else message


def parse_arguments(schema: Type[ArgsT], arguments: Mapping[str, Any] | None) -> ArgsT:
    """Validate raw tool arguments, raising ``InvalidArgumentsError`` with every violation."""
    try:
        return schema.model_validate(dict(arguments or {}))
    except ValidationError as exc:
        raise InvalidArgumentsError(_describe(error) for error in exc.errors()) from exc
