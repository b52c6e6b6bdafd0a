"""Field tool handlers.

Creating or updating a field changes the schema shape, so both invalidate
the schema cache.
"""

from ..models import CreateFieldParams, ReadFieldParams, ReadFieldsParams, UpdateFieldParams
from .base import ToolContext, ToolResult, format_success
from .collections import with_field_defaults


async def handle_read_fields(params: ReadFieldsParams, ctx: ToolContext) -> ToolResult:
    fields = await ctx.client.read_fields(params.collection)
    return format_success(fields)


async def handle_read_field(params: ReadFieldParams, ctx: ToolContext) -> ToolResult:
    field = await ctx.client.read_field(params.collection, params.field)
    return format_success(field)


async def handle_create_field(params: CreateFieldParams, ctx: ToolContext) -> ToolResult:
    payload = with_field_defaults(
        params.model_dump(by_alias=True, exclude_none=True, exclude={"collection"})
    )
    result = await ctx.client.create_field(params.collection, payload)
    ctx.schema.invalidate()
    return format_success(
        result, f'Field "{params.field}" ({params.type}) created in "{params.collection}".'
    )


async def handle_update_field(params: UpdateFieldParams, ctx: ToolContext) -> ToolResult:
    data = params.data.model_dump(by_alias=True, exclude_none=True)
    result = await ctx.client.update_field(params.collection, params.field, data)
    ctx.schema.invalidate()
    return format_success(result, f"Field updated: {params.collection}.{params.field}")
