"""Tool handlers for the Directus MCP Server.

Handlers are organized by domain:
- collections: Collection listing, schema reads, collection creation
- fields: Field definitions
- relations: Relation management
- flows / operations: Flow automation
- items / pagination: Item CRUD, counts and summaries
- users: Current user
- prompts: Usage guide, system prompt, prompts collection

Each handler is a standalone async function that takes:
- params: the tool's validated *Params model
- ctx: ToolContext - shared client, schema cache and settings

And returns a ToolResult.
"""

from .base import (
    HandlerFunc,
    ToolContext,
    ToolDefinition,
    ToolResult,
    estimate_tokens,
    format_error,
    format_success,
    generate_cms_link,
)
from .dispatch import execute_tool, find_tool
from .registry import TOOLS, get_tools

__all__ = [
    # Base
    "HandlerFunc",
    "ToolContext",
    "ToolDefinition",
    "ToolResult",
    "estimate_tokens",
    "format_error",
    "format_success",
    "generate_cms_link",
    # Registry & dispatch
    "TOOLS",
    "get_tools",
    "execute_tool",
    "find_tool",
]
