"""Item tool handlers.

Every handler checks the collection against the cached schema before calling
Directus. Writes to system collections need ALLOW_SYSTEM_MODIFICATIONS.
"""

from ..models import CreateItemParams, DeleteItemParams, ReadItemsParams, UpdateItemParams
from .base import (
    ToolContext,
    ToolResult,
    ensure_collection,
    format_success,
    generate_cms_link,
    guard_system_collection,
    primary_key_field,
    to_json,
)

# Applied when the agent does not pass a limit
DEFAULT_READ_LIMIT = 5


async def handle_read_items(params: ReadItemsParams, ctx: ToolContext) -> ToolResult:
    await ensure_collection(ctx, params.collection)

    query = params.query.model_dump(exclude_none=True)
    query["limit"] = params.query.limit or DEFAULT_READ_LIMIT

    result = await ctx.client.read_items(params.collection, query)
    count = len(result) if isinstance(result, list) else 1
    return ToolResult(text=f"Found {count} items:\n{to_json(result)}")


async def handle_create_item(params: CreateItemParams, ctx: ToolContext) -> ToolResult:
    """Create an item and return a link to it in the admin app."""
    guard_system_collection(ctx, params.collection)
    fields = await ctx.schema.get_collection_schema(params.collection)
    pk = primary_key_field(fields)

    query = params.query.model_dump(exclude_none=True) if params.query else None
    result = await ctx.client.create_item(params.collection, params.item, query)

    item_id = (result or {}).get(pk, "")
    link = generate_cms_link(ctx.base_url, params.collection, item_id)
    return format_success(result, f"Item created: {link}")


async def handle_update_item(params: UpdateItemParams, ctx: ToolContext) -> ToolResult:
    guard_system_collection(ctx, params.collection)
    fields = await ctx.schema.get_collection_schema(params.collection)
    pk = primary_key_field(fields)

    query = params.query.model_dump(exclude_none=True) if params.query else None
    result = await ctx.client.update_item(params.collection, params.id, params.data, query)

    item_id = (result or {}).get(pk, params.id)
    link = generate_cms_link(ctx.base_url, params.collection, item_id)
    return format_success(result, f"Item updated: {link}")


async def handle_delete_item(params: DeleteItemParams, ctx: ToolContext) -> ToolResult:
    guard_system_collection(ctx, params.collection)
    await ensure_collection(ctx, params.collection)
    await ctx.client.delete_item(params.collection, params.id)
    return format_success(None, f'Item {params.id} deleted from "{params.collection}".')
