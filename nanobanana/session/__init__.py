"""Session state and tool dispatch."""

from __future__ import annotations

from .controller import (
    CONTINUE_EDITING,
    EDIT_IMAGE,
    GENERATE_IMAGE,
    TOOL_NAMES,
    ImagePart,
    SessionController,
    TextPart,
    ToolOutcome,
    ToolReply,
    ToolRequest,
)
from .state import SessionState

__all__ = [
    "CONTINUE_EDITING",
    "EDIT_IMAGE",
    "GENERATE_IMAGE",
    "TOOL_NAMES",
    "ImagePart",
    "SessionController",
    "SessionState",
    "TextPart",
    "ToolOutcome",
    "ToolReply",
    "ToolRequest",
]
