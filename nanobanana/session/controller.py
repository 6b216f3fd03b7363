"""Tool dispatch and the last-image session state machine."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence, Union

from ..errors import InternalError, NanoBananaError, NoPriorImageError, StaleImageError, UnknownToolError
from ..events import NullEventWriter
from ..files.paths import allowed_directories, validate_path
from ..files.store import ImageStore, mime_type_of
from ..providers.base import ImageResult, InlineImage, ModelGateway
from ..utils import sanitize_message
from .schemas import ContinueEditingArgs, EditImageArgs, GenerateImageArgs, parse_arguments
from .state import SessionState

logger = logging.getLogger(__name__)

GENERATE_IMAGE = "generate_image"
EDIT_IMAGE = "edit_image"
CONTINUE_EDITING = "continue_editing"
TOOL_NAMES = (GENERATE_IMAGE, EDIT_IMAGE, CONTINUE_EDITING)

PROMPT_ECHO_CHARS = 100


@dataclass(frozen=True)
class ToolRequest:
    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class ImagePart:
    data: str
    mime_type: str


ReplyPart = Union[TextPart, ImagePart]


@dataclass
class ToolReply:
    content: list[ReplyPart]

    @property
    def image(self) -> ImagePart | None:
        for part in self.content:
            if isinstance(part, ImagePart):
                return part
        return None


@dataclass
class ToolOutcome:
    reply: ToolReply | None = None
    error: NanoBananaError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _echo_prompt(prompt: str) -> str:
    if len(prompt) > PROMPT_ECHO_CHARS:
        return prompt[:PROMPT_ECHO_CHARS] + "..."
    return prompt


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _reply(lines: Sequence[str | None], result: ImageResult) -> ToolReply:
    text = "\n\n".join(line for line in lines if line)
    return ToolReply(content=[TextPart(text), ImagePart(result.base64_data, result.mime_type)])


class SessionController:
    def __init__(
        self,
        gateway: ModelGateway,
        store: ImageStore | None = None,
        allowed_dirs: Callable[[], Sequence[str]] = allowed_directories,
        events: Any | None = None,
    ) -> None:
        self.gateway = gateway
        self.store = store or ImageStore()
        self.allowed_dirs = allowed_dirs
        self.events = events or NullEventWriter()
        self._handlers: dict[str, Callable[[SessionState, Mapping[str, Any]], ToolReply]] = {
            GENERATE_IMAGE: self.generate_image,
            EDIT_IMAGE: self.edit_image,
            CONTINUE_EDITING: self.continue_editing,
        }

    def dispatch(self, request: ToolRequest, session: SessionState) -> ToolOutcome:
        """Run one tool call and return its reply or the error that stopped it.

        This is the only place exceptions are translated. Anything that is not a
        ``NanoBananaError`` is logged and replaced with an ``InternalError`` whose
        message has paths and credentials stripped.
        """
        try:
            handler = self._handlers.get(request.name)
            if handler is None:
                raise UnknownToolError(request.name)
            return ToolOutcome(reply=handler(session, request.arguments or {}))
        except NanoBananaError as exc:
            logger.info("%s failed: %s", request.name, exc.kind)
            self._emit("tool_failed", session, tool=request.name, kind=exc.kind)
            return ToolOutcome(error=exc)
        except Exception as exc:
            logger.exception("%s failed with an unexpected error", request.name)
            error = InternalError(sanitize_message(str(exc), self._secrets()))
            self._emit("tool_failed", session, tool=request.name, kind=error.kind)
            return ToolOutcome(error=error)

    def generate_image(self, session: SessionState, arguments: Mapping[str, Any]) -> ToolReply:
        args = parse_arguments(GenerateImageArgs, arguments)
        result = self.gateway.generate(args.prompt)
        if not result.has_image:
            self._emit("no_image", session, tool=GENERATE_IMAGE)
            return ToolReply(content=[TextPart(result.text_content)])

        session.remember(result.file_path)
        self._emit("image_generated", session, model=self.gateway.model_name, file_path=result.file_path)
        return _reply(
            [
                f"Image generated with nanobanana ({self.gateway.model_name})",
                f'Prompt: "{_echo_prompt(args.prompt)}"',
                f"Description: {result.text_content}" if result.text_content else None,
                f"Saved to: {result.file_path}",
                "Use continue_editing to modify this image.",
            ],
            result,
        )

    def edit_image(self, session: SessionState, arguments: Mapping[str, Any]) -> ToolReply:
        args = parse_arguments(EditImageArgs, arguments)
        return self._edit(session, args.image_path, args.prompt, args.reference_images)

    def continue_editing(self, session: SessionState, arguments: Mapping[str, Any]) -> ToolReply:
        if session.last_image_path is None:
            raise NoPriorImageError(
                "No previous image found. Generate or edit an image first, then use continue_editing."
            )
        if not Path(session.last_image_path).is_file():
            raise StaleImageError("Last image file no longer exists. Generate a new image first.")
        args = parse_arguments(ContinueEditingArgs, arguments)
        return self._edit(session, session.last_image_path, args.prompt, args.reference_images)

    def _edit(
        self,
        session: SessionState,
        image_path: str,
        prompt: str,
        reference_images: Sequence[str] | None,
    ) -> ToolReply:
        allowed = list(self.allowed_dirs())
        primary = validate_path(image_path, allowed)
        reference_paths = [validate_path(ref, allowed) for ref in reference_images or ()]

        image_data = _b64(self.store.read(primary))
        references = [InlineImage(_b64(self.store.read(ref)), mime_type_of(ref)) for ref in reference_paths]
        result = self.gateway.edit(image_data, mime_type_of(primary), prompt, references or None)
        if not result.has_image:
            self._emit("no_image", session, tool=EDIT_IMAGE)
            return ToolReply(content=[TextPart(result.text_content)])

        session.remember(result.file_path)
        self._emit(
            "image_edited",
            session,
            model=self.gateway.model_name,
            file_path=result.file_path,
            references=len(references),
        )
        return _reply(
            [
                f"Image edited with nanobanana ({self.gateway.model_name})",
                f"Original: {image_path}",
                f'Edit: "{_echo_prompt(prompt)}"',
                f"Reference images: {len(references)}" if references else None,
                f"Description: {result.text_content}" if result.text_content else None,
                f"Saved to: {result.file_path}",
                "Use continue_editing to make further changes.",
            ],
            result,
        )

    def _emit(self, event_type: str, session: SessionState, **payload: Any) -> None:
        try:
            self.events.emit(event_type, session.session_id, **payload)
        except OSError as exc:
            logger.warning("Could not record %s event: %s", event_type, exc.strerror or type(exc).__name__)

    def _secrets(self) -> list[str]:
        settings = getattr(self.gateway, "settings", None)
        api_key = getattr(settings, "api_key", None)
        return [api_key] if api_key else []
