"""Base infrastructure for tool handlers.

Each handler receives its validated params model and a ToolContext with the
shared state (Directus client, schema cache, settings) and returns a ToolResult.
Handlers raise DirectusMCPError subclasses on failure; the dispatcher turns
them into error results.
"""

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Coroutine

from pydantic import BaseModel

from ..exceptions import CollectionNotFoundError, ToolInputError
from ..schema.models import CollectionSchema
from ..system import is_system_collection

if TYPE_CHECKING:
    from ..config import Settings
    from ..directus import DirectusClient
    from ..schema.cache import SchemaCache


@dataclass
class ToolContext:
    """Context object passed to all handlers.

    Owned by the server; tests build a fresh one per case.
    """

    client: "DirectusClient"
    schema: "SchemaCache"
    settings: "Settings"

    @property
    def base_url(self) -> str:
        return self.settings.base_url


class ToolResult(BaseModel):
    """Text result returned to the agent."""

    text: str
    is_error: bool = False

    @property
    def output_tokens(self) -> int:
        return estimate_tokens(self.text)

    def to_mcp(self) -> dict[str, Any]:
        result: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            result["isError"] = True
        return result


HandlerFunc = Callable[[Any, ToolContext], Coroutine[Any, Any, ToolResult]]


@dataclass
class ToolDefinition:
    """A callable tool: name, description, input model and handler."""

    name: str
    description: str
    params_model: type[BaseModel]
    handler: HandlerFunc
    annotations: dict[str, Any] = field(default_factory=dict)


def estimate_tokens(text: str) -> int:
    """Estimate token count for a string.

    Uses a simple heuristic of ~4 characters per token.
    """
    if not text:
        return 0
    return max(1, len(text) // 4)


def to_json(data: Any) -> str:
    """Compact JSON to save tokens."""
    return json.dumps(data, separators=(",", ":"), default=str)


def format_success(data: Any, message: str | None = None) -> ToolResult:
    if message and data is None:
        return ToolResult(text=message)
    if message:
        return ToolResult(text=f"{message}\n{to_json(data)}")
    return ToolResult(text=to_json(data))


def format_error(message: str) -> ToolResult:
    return ToolResult(text=message, is_error=True)


def generate_cms_link(base_url: str, collection: str, id: Any) -> str:
    """Link to an item in the Directus admin app."""
    return f"{base_url.rstrip('/')}/admin/content/{collection}/{id}"


def primary_key_field(fields: CollectionSchema) -> str:
    for name, schema_field in fields.items():
        if schema_field.primary_key:
            return name
    return "id"


async def ensure_collection(ctx: ToolContext, collection: str) -> None:
    """Raise CollectionNotFoundError unless the collection is in the cached schema."""
    if not await ctx.schema.collection_exists(collection):
        schema = await ctx.schema.get_schema()
        raise CollectionNotFoundError(collection, list(schema))


def guard_system_collection(ctx: ToolContext, collection: str) -> None:
    if is_system_collection(collection) and not ctx.settings.allow_system_modifications:
        raise ToolInputError(
            f'Collection "{collection}" is a Directus system collection. '
            "Set ALLOW_SYSTEM_MODIFICATIONS=true to modify it."
        )
