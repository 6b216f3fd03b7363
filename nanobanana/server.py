"""MCP stdio server exposing the image tools."""

from __future__ import annotations

import logging

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from . import __version__
from .errors import (
    FileTooLargeError,
    InternalError,
    InvalidArgumentsError,
    NanoBananaError,
    NoPriorImageError,
    OutOfBoundsError,
    StaleImageError,
    UnknownToolError,
)
from .session.controller import (
    CONTINUE_EDITING,
    EDIT_IMAGE,
    GENERATE_IMAGE,
    ImagePart,
    SessionController,
    ToolReply,
    ToolRequest,
)
from .session.state import SessionState

logger = logging.getLogger(__name__)

SERVER_NAME = "nanobanana-mcp"
SERVER_VERSION = __version__

_REFERENCE_IMAGES_SCHEMA = {
    "type": "array",
    "items": {"type": "string"},
}

TOOLS: list[types.Tool] = [
    types.Tool(
        name=GENERATE_IMAGE,
        description=(
            "Generate a NEW image from a text prompt using Gemini. Use this ONLY when creating a "
            "completely new image, not when modifying an existing one."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "Text prompt describing the NEW image to create from scratch (max 10,000 chars)",
                },
            },
            "required": ["prompt"],
        },
    ),
    types.Tool(
        name=EDIT_IMAGE,
        description=(
            "Edit an existing image file with a text prompt, optionally using additional reference images. "
            "Use this when you have the exact file path of an image to modify."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "imagePath": {"type": "string", "description": "Full file path to the image to edit"},
                "prompt": {
                    "type": "string",
                    "description": "Text describing the modifications to make (max 10,000 chars)",
                },
                "referenceImages": {
                    **_REFERENCE_IMAGES_SCHEMA,
                    "description": (
                        "Optional array of file paths to reference images (for style transfer, adding elements, etc.)"
                    ),
                },
            },
            "required": ["imagePath", "prompt"],
        },
    ),
    types.Tool(
        name=CONTINUE_EDITING,
        description=(
            "Continue editing the LAST image generated or edited in this session. Automatically uses the "
            "previous image without needing a file path. Use for iterative improvements."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "Text describing changes to make to the last image (max 10,000 chars)",
                },
                "referenceImages": {
                    **_REFERENCE_IMAGES_SCHEMA,
                    "description": "Optional array of file paths to reference images",
                },
            },
            "required": ["prompt"],
        },
    ),
]

_ERROR_CODES: list[tuple[type[NanoBananaError], int]] = [
    (InvalidArgumentsError, types.INVALID_PARAMS),
    (OutOfBoundsError, types.INVALID_PARAMS),
    (FileTooLargeError, types.INVALID_PARAMS),
    (NoPriorImageError, types.INVALID_REQUEST),
    (StaleImageError, types.INVALID_REQUEST),
    (UnknownToolError, types.METHOD_NOT_FOUND),
]


def error_code_for(error: NanoBananaError) -> int:
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return types.INTERNAL_ERROR


def to_mcp_error(error: NanoBananaError) -> McpError:
    return McpError(types.ErrorData(code=error_code_for(error), message=str(error)))


def to_mcp_content(reply: ToolReply) -> list[types.TextContent | types.ImageContent]:
    content: list[types.TextContent | types.ImageContent] = []
    for part in reply.content:
        if isinstance(part, ImagePart):
            content.append(types.ImageContent(type="image", data=part.data, mimeType=part.mime_type))
        else:
            content.append(types.TextContent(type="text", text=part.text))
    return content


def create_server(controller: SessionController, session: SessionState | None = None) -> Server:
    """Wire the controller into an MCP server.

    The stdio transport serves one conversation, so a single ``SessionState``
    lives as long as the server.
    """
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)
    state = session or SessionState()

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return TOOLS

    # Not @server.call_tool(): McpError must reach the session as a JSON-RPC error.
    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        # Runs inline: one request completes before the next is handled.
        params = request.params
        outcome = controller.dispatch(ToolRequest(name=params.name, arguments=params.arguments or {}), state)
        if outcome.error is not None or outcome.reply is None:
            raise to_mcp_error(outcome.error or InternalError("Tool returned no reply."))
        return types.ServerResult(types.CallToolResult(content=to_mcp_content(outcome.reply)))

    server.request_handlers[types.CallToolRequest] = call_tool

    return server


async def serve(controller: SessionController) -> None:
    server = create_server(controller)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("%s %s listening on stdio", SERVER_NAME, SERVER_VERSION)
        await server.run(read_stream, write_stream, server.create_initialization_options())
