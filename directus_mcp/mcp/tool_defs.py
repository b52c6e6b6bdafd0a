"""MCP tool definitions for tools/list.

Input schemas are generated from each tool's pydantic params model so the
advertised contract and the validation applied on tools/call stay in sync.
"""

from typing import Any

from ..tools.base import ToolDefinition


def input_schema(tool: ToolDefinition) -> dict[str, Any]:
    schema = tool.params_model.model_json_schema()
    schema.pop("title", None)
    schema.setdefault("type", "object")
    schema.setdefault("properties", {})
    return schema


def build_tool_definitions(tools: list[ToolDefinition]) -> list[dict[str, Any]]:
    """Render tools as MCP tools/list entries."""
    definitions = []
    for tool in tools:
        definition: dict[str, Any] = {
            "name": str(tool.name),
            "description": tool.description,
            "inputSchema": input_schema(tool),
        }
        if tool.annotations:
            definition["annotations"] = dict(tool.annotations)
        definitions.append(definition)
    return definitions
