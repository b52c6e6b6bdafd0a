"""Tool execution.

Validates arguments against the tool's params model and runs the handler.
Known errors become error results with their message; anything else is
logged and reported with a generic message.
"""

import logging
from typing import Any

from ..exceptions import DirectusMCPError, UnknownToolError
from .base import ToolContext, ToolDefinition, ToolResult, format_error

logger = logging.getLogger(__name__)


def find_tool(tools: list[ToolDefinition], name: str) -> ToolDefinition:
    for tool in tools:
        if tool.name == name:
            return tool
    raise UnknownToolError(name)


async def execute_tool(
    tool: ToolDefinition,
    arguments: dict[str, Any] | None,
    ctx: ToolContext,
) -> ToolResult:
    """Run a tool.

    Raises:
        pydantic.ValidationError: arguments do not match the params model
    """
    params = tool.params_model.model_validate(arguments or {})

    try:
        result = await tool.handler(params, ctx)
    except DirectusMCPError as e:
        logger.warning(f"Tool {tool.name} failed: {e}")
        return format_error(str(e))
    except Exception as e:
        logger.error(f"Tool {tool.name} raised unexpectedly: {e}", exc_info=True)
        return format_error(f"Tool {tool.name} failed with an internal error. Please try again.")

    logger.info(f"Tool {tool.name} returned ~{result.output_tokens} tokens")
    return result
