"""Lightweight item tools for pagination planning and quick overviews."""

from ..models import CountItemsParams, ItemSummaryParams
from .base import ToolContext, ToolResult, ensure_collection, to_json

MAX_SUMMARY_ITEMS = 20


async def handle_count_items(params: CountItemsParams, ctx: ToolContext) -> ToolResult:
    await ensure_collection(ctx, params.collection)
    count = await ctx.client.count_items(params.collection, params.filter)
    suffix = " (with filters)" if params.filter else ""
    return ToolResult(text=f'Collection "{params.collection}" contains {count} items{suffix}.')


async def handle_get_item_summary(params: ItemSummaryParams, ctx: ToolContext) -> ToolResult:
    """Most recent items with only the requested (or primary key) fields."""
    await ensure_collection(ctx, params.collection)

    fields = params.fields or ["id"]
    query = {
        "fields": fields,
        "limit": min(params.limit, MAX_SUMMARY_ITEMS),
        "offset": params.offset,
        "sort": ["-id"],
    }
    result = await ctx.client.read_items(params.collection, query)
    count = len(result) if isinstance(result, list) else 1
    return ToolResult(
        text=f"Summary ({count} items, fields: {', '.join(fields)}):\n{to_json(result)}"
    )
